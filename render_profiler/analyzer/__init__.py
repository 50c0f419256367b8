# render_profiler/analyzer/__init__.py - Analysis module
"""
Analyzer module for classifying renders and deriving insights.

This module provides:
- commit_classifier.py: Commit severity buckets and component statistics
- fiber_durations.py: Slow per-component renders inside commits
- page_attributor.py: Breakdown by screen
- patterns.py: Pattern vocabulary and rule table
- insights.py: Pattern detection, health score and recommendations
- profile_analyzer.py: End-to-end pipeline
- report_generator.py: Report generation
"""
