# render_profiler/exporters/__init__.py - Exporters module
"""
Exporters for outputting analysis results in various formats.

This module provides:
- stdout.py: Colored console report
- json_exporter.py: JSON file exporter
"""
