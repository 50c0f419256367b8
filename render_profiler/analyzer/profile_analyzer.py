# render_profiler/analyzer/profile_analyzer.py - End-to-end trace analysis
"""
Composes the analysis stages for one trace submission and provides the
ranking helpers used by reports.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple
import logging

from render_profiler.analyzer.commit_classifier import AnalysisResults, CommitClassifier, ComponentStats
from render_profiler.analyzer.fiber_durations import FiberDurationExtractor, SlowFiber
from render_profiler.analyzer.insights import InsightEngine, PerformanceInsights
from render_profiler.analyzer.page_attributor import PageAnalysisResults, PageAttributor
from render_profiler.collector.profile import CanonicalTrace
from render_profiler.collector.trace_loader import load_profile_data


@dataclass(frozen=True)
class AnalysisBundle:
    """
    Every result produced for one trace.
    """
    trace: CanonicalTrace
    is_converted: bool
    commits: AnalysisResults
    slow_fibers: Tuple[SlowFiber, ...]
    pages: PageAnalysisResults
    insights: PerformanceInsights

    def to_dict(self) -> Dict:
        return {
            'is_converted': self.is_converted,
            'commits': self.commits.to_dict(),
            'slow_fibers': [f.to_dict() for f in self.slow_fibers],
            'pages': self.pages.to_dict(),
            'insights': self.insights.to_dict(),
        }


class ProfileAnalyzer:
    """
    Runs the full analysis pipeline.

    The classifier, fiber extractor and page attributor each read the same
    canonical trace independently; the insight engine consumes their output.
    """

    def __init__(self):
        """
        Initialize the analyzer and its stages.
        """
        self.logger = logging.getLogger(__name__)

        self.classifier = CommitClassifier()
        self.fiber_extractor = FiberDurationExtractor()
        self.page_attributor = PageAttributor()
        self.insight_engine = InsightEngine()

    def analyze(self, json_data: Any) -> AnalysisBundle:
        """
        Analyze a parsed trace.

        Args:
            json_data: Parsed JSON value (event trace or canonical profile)

        Returns:
            AnalysisBundle

        Raises:
            InvalidTraceFormatError: If the value is not a JSON object
        """
        trace, converted = load_profile_data(json_data)
        if converted:
            self.logger.info("Converted event trace to render profile format")

        commits = self.classifier.classify(trace)
        slow_fibers = tuple(self.fiber_extractor.extract(trace))
        pages = self.page_attributor.analyze(trace)

        insights = self.insight_engine.generate(commits, slow_fibers)

        return AnalysisBundle(
            trace=trace,
            is_converted=converted,
            commits=commits,
            slow_fibers=slow_fibers,
            pages=pages,
            insights=insights,
        )


def analyze_profile(json_data: Any) -> AnalysisBundle:
    """
    Analyze a parsed trace with the default pipeline.

    Args:
        json_data: Parsed JSON value

    Returns:
        AnalysisBundle
    """
    return ProfileAnalyzer().analyze(json_data)


def get_top_components(
    component_stats: Dict[str, ComponentStats],
    limit: int = 10,
) -> List[Tuple[str, ComponentStats]]:
    """
    Get the components with the most total render time.

    Args:
        component_stats: Per-component statistics
        limit: Number of components to return

    Returns:
        List of (name, stats) sorted by total duration descending
    """
    ranked = sorted(component_stats.items(), key=lambda item: item[1].total_duration, reverse=True)
    return ranked[:limit]


def get_slowest_renders(slow_fibers: Sequence[SlowFiber], limit: int = 15) -> List[SlowFiber]:
    """
    Get the slowest individual fiber renders.

    Args:
        slow_fibers: Slow fiber renders
        limit: Number of renders to return

    Returns:
        List of SlowFiber sorted by duration descending
    """
    return sorted(slow_fibers, key=lambda f: f.duration, reverse=True)[:limit]
