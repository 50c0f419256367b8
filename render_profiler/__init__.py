# render_profiler/__init__.py - Render trace profiler
"""
Render trace profiler: diagnoses UI jank from rendering profiler exports.
"""

from render_profiler.analyzer.profile_analyzer import AnalysisBundle, analyze_profile
from render_profiler.collector.trace_loader import InvalidTraceFormatError

__version__ = "0.1.0"

__all__ = ["AnalysisBundle", "InvalidTraceFormatError", "analyze_profile"]
