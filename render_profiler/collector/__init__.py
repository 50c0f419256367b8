# render_profiler/collector/__init__.py - Trace loading module
"""
Collector module for turning parsed trace files into the canonical model.

This module provides:
- profile.py: Canonical render-event model and parsing
- trace_loader.py: Detection and conversion of begin/end event traces
"""
