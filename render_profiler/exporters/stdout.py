# render_profiler/exporters/stdout.py - Console output exporter
"""
Prints analysis results to stdout in human-readable format.
"""

from typing import Dict, List, Sequence, Tuple
from colorama import Fore, Style, init
import logging

from render_profiler.analyzer.commit_classifier import (
    CRITICAL_RENDER_THRESHOLD,
    SLOW_RENDER_THRESHOLD,
    VERY_SLOW_RENDER_THRESHOLD,
    ComponentStats,
)
from render_profiler.analyzer.fiber_durations import SlowFiber
from render_profiler.analyzer.page_attributor import PageMetrics
from render_profiler.analyzer.patterns import CriticalPattern, Grade, Recommendation, Severity
from render_profiler.analyzer.profile_analyzer import AnalysisBundle, get_slowest_renders, get_top_components
from render_profiler.utils.helpers import format_duration, severity_label, truncate


# Initialize colorama
init(autoreset=True)


class StdoutExporter:
    """
    Prints analysis results to stdout with colored output.
    """

    def __init__(self, use_colors: bool = True, top_components: int = 10,
                 slowest_renders: int = 15, top_pages: int = 10):
        """
        Initialize the stdout exporter.

        Args:
            use_colors: Whether to use colored output
            top_components: Number of components listed by total time
            slowest_renders: Number of slow fiber renders listed
            top_pages: Number of pages listed
        """
        self.use_colors = use_colors
        self.top_components = top_components
        self.slowest_renders = slowest_renders
        self.top_pages = top_pages
        self.logger = logging.getLogger(__name__)

    def _color(self, color: str) -> str:
        return color if self.use_colors else ""

    @property
    def _reset(self) -> str:
        return Style.RESET_ALL if self.use_colors else ""

    def _header(self, title: str):
        cyan = self._color(Fore.CYAN)
        print(f"\n{cyan}{'='*80}{self._reset}")
        print(f"{cyan}{title}{self._reset}")
        print(f"{cyan}{'='*80}{self._reset}\n")

    def print_summary(self, bundle: AnalysisBundle):
        """
        Print the health score and commit summary.

        Args:
            bundle: Analysis results
        """
        commits = bundle.commits
        insights = bundle.insights
        grade_color = self._get_grade_color(insights.performance_grade)

        self._header("Render Performance Summary")

        if bundle.is_converted:
            print(f"{self._color(Fore.YELLOW)}Converted from a begin/end event trace{self._reset}\n")

        print(f"  Health Score: {grade_color}{insights.health_score}/100 "
              f"(grade {insights.performance_grade.value}){self._reset}")
        print(f"  Total Commits: {commits.total_commits}")
        print(f"  {severity_label(CRITICAL_RENDER_THRESHOLD)}: {len(commits.critical_commits)}")
        print(f"  {severity_label(VERY_SLOW_RENDER_THRESHOLD)}: {len(commits.very_slow_commits)}")
        print(f"  {severity_label(SLOW_RENDER_THRESHOLD)}: {len(commits.slow_commits)}")
        print(f"  Estimated FPS: {insights.fps:.1f}")
        print(f"  Dropped Frames: {insights.dropped_frames} ({insights.frame_drop_percentage:.1f}%)")
        print(f"  Startup Estimate: {format_duration(insights.startup_time_estimate)}")
        print(f"  Components: {insights.mounted_components}")

    def print_patterns(self, patterns: Sequence[CriticalPattern]):
        """
        Print detected patterns.

        Args:
            patterns: Detected critical patterns
        """
        if not patterns:
            return

        self._header("Critical Issues")

        for i, pattern in enumerate(patterns, 1):
            color = self._get_severity_color(pattern.severity)
            print(f"{i}. {color}[{pattern.severity.value.upper()}]{self._reset} "
                  f"{pattern.type.value} - {pattern.component}")
            print(f"   {pattern.description}")
            print(f"   Fix: {pattern.recommendation}")

    def print_top_components(self, component_stats: Dict[str, ComponentStats]):
        """
        Print components with the most total render time.

        Args:
            component_stats: Per-component statistics
        """
        top: List[Tuple[str, ComponentStats]] = get_top_components(component_stats, self.top_components)
        if not top:
            return

        self._header("Top Components by Total Render Time")

        print(f"{'Rank':<6} {'Component':<40} {'Renders':<10} {'Total (ms)':<12} {'Max (ms)':<10}")
        print(f"{'-'*80}")

        for i, (name, stats) in enumerate(top, 1):
            color = self._get_color_for_duration(stats.max_duration)
            print(f"{i:<6} "
                  f"{truncate(name, 40):<40} "
                  f"{stats.count:<10} "
                  f"{stats.total_duration:<12.2f} "
                  f"{color}{stats.max_duration:<10.2f}{self._reset}")

    def print_slowest_renders(self, slow_fibers: Sequence[SlowFiber]):
        """
        Print the slowest individual fiber renders.

        Args:
            slow_fibers: Slow fiber renders
        """
        slowest = get_slowest_renders(slow_fibers, self.slowest_renders)
        if not slowest:
            return

        self._header("Slowest Renders")

        for i, fiber in enumerate(slowest, 1):
            color = self._get_color_for_duration(fiber.duration)
            print(f"{i:<4} {truncate(fiber.component, 40):<40} "
                  f"{color}{fiber.duration:8.2f}ms{self._reset}  {severity_label(fiber.duration)}")

        if len(slow_fibers) > len(slowest):
            print(f"\n{self._color(Fore.YELLOW)}... and {len(slow_fibers) - len(slowest)} more slow renders{self._reset}")

    def print_pages(self, pages: Sequence[PageMetrics]):
        """
        Print the per-page breakdown.

        Args:
            pages: Page metrics, slowest first
        """
        if not pages:
            return

        self._header("Pages")

        print(f"{'Page':<30} {'Renders':<10} {'Total (ms)':<12} {'Avg (ms)':<10} {'Critical':<10} {'Slow':<6}")
        print(f"{'-'*80}")

        for page in pages[:self.top_pages]:
            color = self._get_color_for_duration(page.max_duration)
            print(f"{color}{truncate(page.page_name, 30):<30}{self._reset} "
                  f"{page.render_count:<10} "
                  f"{page.total_duration:<12.2f} "
                  f"{page.avg_duration:<10.2f} "
                  f"{page.critical_renders:<10} "
                  f"{page.slow_renders:<6}")

    def print_recommendations(self, recommendations: Sequence[Recommendation]):
        """
        Print recommendations in their priority order.

        Args:
            recommendations: Prioritized recommendations
        """
        if not recommendations:
            return

        self._header("Recommendations")

        for i, rec in enumerate(recommendations, 1):
            print(f"{self._color(Fore.GREEN)}{i}. [P{int(rec.priority)}] {rec.title}{self._reset}")
            print(f"   {rec.description}")
            print(f"   Impact: {rec.impact} | Effort: {rec.effort.value}")

    def print_analysis(self, bundle: AnalysisBundle):
        """
        Print the complete analysis to stdout.

        Args:
            bundle: Analysis results
        """
        self.logger.debug(f"Printing analysis of {bundle.commits.total_commits} commits")
        self.print_summary(bundle)
        self.print_patterns(bundle.insights.critical_patterns)
        self.print_top_components(bundle.commits.component_stats)
        self.print_slowest_renders(bundle.slow_fibers)
        self.print_pages(bundle.pages.pages)
        self.print_recommendations(bundle.insights.top_recommendations)

        print()

    def _get_color_for_duration(self, duration_ms: float) -> str:
        """
        Get color based on render duration thresholds.

        Args:
            duration_ms: Duration in milliseconds

        Returns:
            Color code
        """
        if not self.use_colors:
            return ""

        if duration_ms >= CRITICAL_RENDER_THRESHOLD:
            return Fore.RED
        elif duration_ms >= VERY_SLOW_RENDER_THRESHOLD:
            return Fore.YELLOW
        else:
            return Fore.GREEN

    def _get_severity_color(self, severity: Severity) -> str:
        if not self.use_colors:
            return ""

        if severity == Severity.CRITICAL:
            return Fore.RED
        elif severity == Severity.WARNING:
            return Fore.YELLOW
        else:
            return Fore.CYAN

    def _get_grade_color(self, grade: Grade) -> str:
        if not self.use_colors:
            return ""

        if grade in (Grade.A, Grade.B):
            return Fore.GREEN
        elif grade in (Grade.C, Grade.D):
            return Fore.YELLOW
        else:
            return Fore.RED
