# render_profiler/analyzer/report_generator.py - Report generation
"""
Generates Markdown, JSON and CSV reports from analysis results.
"""

from datetime import datetime
from typing import Dict, List
import csv
import io
import json
import logging

from render_profiler.analyzer.commit_classifier import (
    CRITICAL_RENDER_THRESHOLD,
    SLOW_RENDER_THRESHOLD,
    VERY_SLOW_RENDER_THRESHOLD,
    ComponentStats,
)
from render_profiler.analyzer.profile_analyzer import AnalysisBundle, get_slowest_renders, get_top_components
from render_profiler.utils.helpers import format_duration, severity_label


class ReportGenerator:
    """
    Generates reports from an analysis bundle in various formats.
    """

    def __init__(self, top_components: int = 10, slowest_renders: int = 15, top_pages: int = 10):
        """
        Initialize the report generator.

        Args:
            top_components: Number of components listed by total time
            slowest_renders: Number of slow fiber renders listed
            top_pages: Number of pages listed
        """
        self.top_components = top_components
        self.slowest_renders = slowest_renders
        self.top_pages = top_pages
        self.logger = logging.getLogger(__name__)

    def generate_json_report(self, bundle: AnalysisBundle) -> str:
        """
        Generate a JSON report.

        Args:
            bundle: Analysis results

        Returns:
            JSON string
        """
        report = {
            'timestamp': datetime.now().isoformat(),
            'analysis': bundle.to_dict(),
        }

        return json.dumps(report, indent=2)

    def generate_csv_components(self, component_stats: Dict[str, ComponentStats]) -> str:
        """
        Generate CSV of per-component statistics, slowest total first.

        Args:
            component_stats: Per-component statistics

        Returns:
            CSV string
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(['component', 'count', 'total_duration_ms', 'avg_duration_ms', 'max_duration_ms'])

        for name, stats in get_top_components(component_stats, limit=len(component_stats)):
            avg = stats.total_duration / stats.count if stats.count else 0
            writer.writerow([
                name,
                stats.count,
                f"{stats.total_duration:.2f}",
                f"{avg:.2f}",
                f"{stats.max_duration:.2f}",
            ])

        return buffer.getvalue()

    def generate_markdown_report(self, bundle: AnalysisBundle) -> str:
        """
        Generate a Markdown report.

        Args:
            bundle: Analysis results

        Returns:
            Markdown formatted report
        """
        commits = bundle.commits
        insights = bundle.insights

        lines: List[str] = []
        lines.append("# Render Performance Report")
        lines.append(f"\n**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if bundle.is_converted:
            lines.append("_Converted from a begin/end event trace._\n")

        lines.append("## Summary\n")
        lines.append(f"- **Health Score:** {insights.health_score}/100 (grade {insights.performance_grade.value})")
        lines.append(f"- **Total Commits:** {commits.total_commits}")
        lines.append(f"- **{severity_label(CRITICAL_RENDER_THRESHOLD)}:** {len(commits.critical_commits)}")
        lines.append(f"- **{severity_label(VERY_SLOW_RENDER_THRESHOLD)}:** {len(commits.very_slow_commits)}")
        lines.append(f"- **{severity_label(SLOW_RENDER_THRESHOLD)}:** {len(commits.slow_commits)}")
        lines.append(f"- **Estimated FPS:** {insights.fps:.1f}")
        lines.append(f"- **Dropped Frames:** {insights.dropped_frames} ({insights.frame_drop_percentage:.1f}%)")
        lines.append(f"- **Startup Estimate:** {format_duration(insights.startup_time_estimate)}\n")

        if insights.critical_patterns:
            lines.append("## Critical Issues\n")
            lines.append("| Severity | Type | Component | Description |")
            lines.append("|----------|------|-----------|-------------|")
            for pattern in insights.critical_patterns:
                lines.append(
                    f"| {pattern.severity.value} | {pattern.type.value} | "
                    f"{pattern.component} | {pattern.description} |"
                )
            lines.append("")

        top = get_top_components(commits.component_stats, self.top_components)
        if top:
            lines.append("## Top Components by Total Render Time\n")
            lines.append("| Component | Renders | Total (ms) | Max (ms) |")
            lines.append("|-----------|---------|------------|----------|")
            for name, stats in top:
                lines.append(f"| {name} | {stats.count} | {stats.total_duration:.2f} | {stats.max_duration:.2f} |")
            lines.append("")

        slowest = get_slowest_renders(bundle.slow_fibers, self.slowest_renders)
        if slowest:
            lines.append("## Slowest Renders\n")
            for i, fiber in enumerate(slowest, 1):
                lines.append(f"{i}. {fiber.component}: {fiber.duration:.2f}ms ({severity_label(fiber.duration)})")
            lines.append("")

        if bundle.pages.pages:
            lines.append("## Pages\n")
            lines.append("| Page | Renders | Total (ms) | Avg (ms) | Critical | Slow |")
            lines.append("|------|---------|------------|----------|----------|------|")
            for page in bundle.pages.pages[:self.top_pages]:
                lines.append(
                    f"| {page.page_name} | {page.render_count} | {page.total_duration:.2f} | "
                    f"{page.avg_duration:.2f} | {page.critical_renders} | {page.slow_renders} |"
                )
            lines.append("")

        if insights.top_recommendations:
            lines.append("## Recommendations\n")
            for i, rec in enumerate(insights.top_recommendations, 1):
                lines.append(f"{i}. **[P{int(rec.priority)}] {rec.title}** - {rec.description}")
                lines.append(f"   - Impact: {rec.impact} (effort: {rec.effort.value})")
            lines.append("")

        self.logger.debug(f"Generated markdown report with {len(lines)} lines")
        return "\n".join(lines)
