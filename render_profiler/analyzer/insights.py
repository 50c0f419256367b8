# render_profiler/analyzer/insights.py - Performance insights and health scoring
"""
Runs the pattern detectors over classified render statistics, computes the
health score and grade, and builds prioritized recommendations.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Sequence, Tuple
import logging
import math

from render_profiler.analyzer.commit_classifier import (
    CRITICAL_RENDER_THRESHOLD,
    SLOW_RENDER_THRESHOLD,
    VERY_SLOW_RENDER_THRESHOLD,
    AnalysisResults,
    ComponentStats,
)
from render_profiler.analyzer.fiber_durations import SlowFiber
from render_profiler.analyzer.patterns import (
    ANIMATION_COMPONENT,
    BASIC_LIST_COMPONENT,
    CONSOLE_TOKEN,
    IMAGE_COMPONENT,
    LIST_COMPONENT,
    MEMOIZED_COMPONENT,
    NAVIGATION_COMPONENT,
    PATTERN_RULES,
    RECYCLING_LIST_COMPONENT,
    SCROLL_VIEW_COMPONENT,
    STARTUP_COMPONENT,
    TEXT_COMPONENT,
    VIEW_COMPONENT,
    VIRTUALIZED_SCROLL_COMPONENT,
    WRAPPED_COMPONENT,
    CriticalPattern,
    Effort,
    Grade,
    PatternRule,
    PatternType,
    Priority,
    Recommendation,
)


TARGET_FPS = 60
TTI_BUDGET_MS = 2000
STARTUP_BUDGET_MS = 1000
FREQUENT_UPDATE_COUNT = 20
EXPECTED_RENDER_COUNT = 10
MISSING_MEMO_COUNT = 30
SCROLL_VIEW_RENDER_COUNT = 50
DEEP_NESTING_COUNT = 10

Match = Tuple[str, Dict]


@dataclass(frozen=True)
class FrequentUpdater:
    name: str
    count: int

    def to_dict(self) -> Dict:
        return {'name': self.name, 'count': self.count}


@dataclass(frozen=True)
class ListComponent:
    name: str
    render_time: float
    item_count: int

    def to_dict(self) -> Dict:
        return {'name': self.name, 'renderTime': self.render_time, 'itemCount': self.item_count}


@dataclass(frozen=True)
class LargeComponent:
    name: str
    size: float

    def to_dict(self) -> Dict:
        return {'name': self.name, 'size': self.size}


@dataclass(frozen=True)
class PerformanceInsights:
    """
    Trace-wide insights. Thread blocking figures are proxies derived from
    commit severity, not measurements.
    """
    dropped_frames: int = 0
    avg_frame_time: float = 0
    fps: float = TARGET_FPS
    frame_drop_percentage: float = 0

    unnecessary_renders: int = 0
    deep_component_trees: Tuple[str, ...] = ()
    frequent_updaters: Tuple[FrequentUpdater, ...] = ()

    list_components: Tuple[ListComponent, ...] = ()
    heavy_list_renders: int = 0

    large_components: Tuple[LargeComponent, ...] = ()
    mounted_components: int = 0

    js_thread_blocking: int = 0
    ui_thread_blocking: int = 0

    slow_navigation_transitions: int = 0
    navigation_components: Tuple[str, ...] = ()

    image_optimization_issues: int = 0
    large_images: Tuple[str, ...] = ()

    console_statements: int = 0
    slow_fiber_count: int = 0

    critical_patterns: Tuple[CriticalPattern, ...] = ()

    startup_time_estimate: float = 0
    tti_budget: float = TTI_BUDGET_MS

    health_score: int = 100
    performance_grade: Grade = Grade.A
    top_recommendations: Tuple[Recommendation, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict:
        return {
            'droppedFrames': self.dropped_frames,
            'avgFrameTime': self.avg_frame_time,
            'fps': self.fps,
            'frameDropPercentage': self.frame_drop_percentage,
            'unnecessaryRenders': self.unnecessary_renders,
            'deepComponentTrees': list(self.deep_component_trees),
            'frequentUpdaters': [u.to_dict() for u in self.frequent_updaters],
            'listComponents': [c.to_dict() for c in self.list_components],
            'heavyListRenders': self.heavy_list_renders,
            'largeComponents': [c.to_dict() for c in self.large_components],
            'mountedComponents': self.mounted_components,
            'jsThreadBlocking': self.js_thread_blocking,
            'uiThreadBlocking': self.ui_thread_blocking,
            'slowNavigationTransitions': self.slow_navigation_transitions,
            'navigationComponents': list(self.navigation_components),
            'imageOptimizationIssues': self.image_optimization_issues,
            'largeImages': list(self.large_images),
            'consoleStatements': self.console_statements,
            'slowFiberCount': self.slow_fiber_count,
            'criticalPatterns': [p.to_dict() for p in self.critical_patterns],
            'startupTimeEstimate': self.startup_time_estimate,
            'ttiBudget': self.tti_budget,
            'healthScore': self.health_score,
            'performanceGrade': self.performance_grade.value,
            'topRecommendations': [r.to_dict() for r in self.top_recommendations],
        }


@dataclass(frozen=True)
class InsightContext:
    """
    Inputs shared by the pattern detectors.
    """
    component_stats: Dict[str, ComponentStats]
    frequent_updaters: Tuple[FrequentUpdater, ...]
    startup_components: Tuple[Tuple[str, ComponentStats], ...]
    startup_estimate: float
    nested_components: Tuple[str, ...]

    def matching(self, pattern) -> List[Tuple[str, ComponentStats]]:
        return [(name, stats) for name, stats in self.component_stats.items() if pattern.search(name)]


@dataclass(frozen=True)
class DetectionRule:
    """
    A detector paired with the rule its matches are reported with.
    """
    rule: PatternRule
    detect: Callable[[InsightContext], Iterable[Match]]

    def evaluate(self, context: InsightContext) -> List[CriticalPattern]:
        return [self.rule.build(component, **fields) for component, fields in self.detect(context)]


def _slow_basic_lists(context: InsightContext) -> Iterable[Match]:
    for name, stats in context.matching(LIST_COMPONENT):
        if (stats.max_duration > VERY_SLOW_RENDER_THRESHOLD
                and BASIC_LIST_COMPONENT.search(name)
                and not RECYCLING_LIST_COMPONENT.search(name)):
            yield name, {'max_duration': stats.max_duration}


def _slow_images(context: InsightContext) -> Iterable[Match]:
    for name, stats in context.matching(IMAGE_COMPONENT):
        if stats.max_duration > VERY_SLOW_RENDER_THRESHOLD:
            yield name, {'max_duration': stats.max_duration}


def _slow_navigators(context: InsightContext) -> Iterable[Match]:
    for name, stats in context.matching(NAVIGATION_COMPONENT):
        if stats.max_duration > CRITICAL_RENDER_THRESHOLD:
            yield name, {'max_duration': stats.max_duration}


def _janky_animations(context: InsightContext) -> Iterable[Match]:
    for name, stats in context.matching(ANIMATION_COMPONENT):
        if stats.max_duration > SLOW_RENDER_THRESHOLD:
            yield name, {'max_duration': stats.max_duration}


def _unmemoized_updaters(context: InsightContext) -> Iterable[Match]:
    for updater in context.frequent_updaters:
        if updater.count > MISSING_MEMO_COUNT and not MEMOIZED_COMPONENT.search(updater.name):
            yield updater.name, {'count': updater.count}


def _deeply_nested(context: InsightContext) -> Iterable[Match]:
    nested = context.nested_components
    if len(nested) > DEEP_NESTING_COUNT:
        yield nested[0], {'nested_count': len(nested)}


def _slow_startup(context: InsightContext) -> Iterable[Match]:
    if context.startup_estimate <= STARTUP_BUDGET_MS or not context.startup_components:
        return

    # max() keeps the first of equal durations
    name, _ = max(context.startup_components, key=lambda item: item[1].max_duration)
    yield name, {'startup_ms': context.startup_estimate}


def _overloaded_scroll_views(context: InsightContext) -> Iterable[Match]:
    for name, stats in context.matching(SCROLL_VIEW_COMPONENT):
        if not VIRTUALIZED_SCROLL_COMPONENT.search(name) and stats.count > SCROLL_VIEW_RENDER_COUNT:
            yield name, {'count': stats.count}


def _text_over_images(context: InsightContext) -> Iterable[Match]:
    images = context.matching(IMAGE_COMPONENT)
    texts = context.matching(TEXT_COMPONENT)
    views = context.matching(VIEW_COMPONENT)

    if images and texts and len(views) > 5:
        yield 'Layout', {}


def _console_statements(context: InsightContext) -> Iterable[Match]:
    count = count_console_statements(context.component_stats)
    if count > 0:
        yield 'Multiple Components', {'console_count': count}


# Evaluated in order; the order fixes the order of reported patterns.
DETECTION_RULES: Tuple[DetectionRule, ...] = (
    DetectionRule(PATTERN_RULES[PatternType.FLATLIST_OPTIMIZATION], _slow_basic_lists),
    DetectionRule(PATTERN_RULES[PatternType.IMAGE_RESIZE], _slow_images),
    DetectionRule(PATTERN_RULES[PatternType.BLOCKING_OPERATION], _slow_navigators),
    DetectionRule(PATTERN_RULES[PatternType.NO_NATIVE_DRIVER], _janky_animations),
    DetectionRule(PATTERN_RULES[PatternType.MISSING_MEMO], _unmemoized_updaters),
    DetectionRule(PATTERN_RULES[PatternType.DEEP_NESTING], _deeply_nested),
    DetectionRule(PATTERN_RULES[PatternType.HEAVY_COMPUTATION], _slow_startup),
    DetectionRule(PATTERN_RULES[PatternType.SCROLL_PERFORMANCE], _overloaded_scroll_views),
    DetectionRule(PATTERN_RULES[PatternType.TEXT_ON_IMAGE], _text_over_images),
    DetectionRule(PATTERN_RULES[PatternType.CONSOLE_LOG], _console_statements),
)


def count_console_statements(component_stats: Dict[str, ComponentStats]) -> int:
    """
    Count console/log/debug tokens across all component names.

    Args:
        component_stats: Per-component statistics

    Returns:
        Number of matches in the space-joined names
    """
    return len(CONSOLE_TOKEN.findall(' '.join(component_stats)))


def calculate_health_score(
    critical_count: int = 0,
    very_slow_count: int = 0,
    slow_navigation_transitions: int = 0,
    startup_time_estimate: float = 0,
    heavy_list_renders: int = 0,
    unnecessary_renders: int = 0,
    large_component_count: int = 0,
    image_optimization_issues: int = 0,
    console_statements: int = 0,
    fps: float = TARGET_FPS,
) -> int:
    """
    Compute the 0-100 health score.

    Args:
        critical_count: Commits at or above 100ms
        very_slow_count: Commits in the 50-100ms range
        slow_navigation_transitions: Navigation components above 100ms
        startup_time_estimate: Estimated startup time in ms
        heavy_list_renders: List components above 50ms
        unnecessary_renders: Excess renders of frequent updaters
        large_component_count: Components above 100ms
        image_optimization_issues: Image components above 50ms
        console_statements: Console tokens found in component names
        fps: Estimated frame rate

    Returns:
        Integer score clamped to [0, 100]
    """
    score = 100.0

    score -= critical_count * 5
    score -= slow_navigation_transitions * 8
    if startup_time_estimate > 2000:
        score -= 15
    elif startup_time_estimate > STARTUP_BUDGET_MS:
        score -= 10

    score -= very_slow_count * 2
    score -= heavy_list_renders * 3
    score -= min(20, unnecessary_renders * 0.1)

    score -= min(10, large_component_count * 2)
    score -= min(5, image_optimization_issues)
    score -= min(5, console_statements)

    if fps < 30:
        score -= 15
    elif fps < 45:
        score -= 10
    elif fps < 55:
        score -= 5

    # Round half up
    return int(min(100, max(0, math.floor(score + 0.5))))


def grade_for_score(score: float) -> Grade:
    """
    Map a health score to a letter grade.

    Args:
        score: Health score

    Returns:
        Grade
    """
    if score >= 90:
        return Grade.A
    elif score >= 75:
        return Grade.B
    elif score >= 60:
        return Grade.C
    elif score >= 45:
        return Grade.D
    return Grade.F


class InsightEngine:
    """
    Derives performance insights from classified commits.

    Metrics and detectors only read the classification results; the
    detectors write nothing but their own patterns.
    """

    def __init__(self, rules: Sequence[DetectionRule] = DETECTION_RULES):
        """
        Initialize the insight engine.

        Args:
            rules: Ordered detection rules
        """
        self.rules = tuple(rules)
        self.logger = logging.getLogger(__name__)

    def generate(self, results: AnalysisResults, slow_fibers: Sequence[SlowFiber] = ()) -> PerformanceInsights:
        """
        Generate insights for one trace.

        Args:
            results: Commit classification results
            slow_fibers: Slow fiber renders of the same trace

        Returns:
            PerformanceInsights (neutral baseline if there are no commits)
        """
        total_commits = results.total_commits
        if total_commits == 0:
            self.logger.info("No commits to analyze, returning baseline insights")
            return PerformanceInsights()

        stats = results.component_stats
        critical_count = len(results.critical_commits)
        very_slow_count = len(results.very_slow_commits)

        # Frame metrics
        total_duration = sum(s.total_duration for s in stats.values())
        avg_frame_time = total_duration / total_commits
        fps = min(TARGET_FPS, 1000 / avg_frame_time) if avg_frame_time > 0 else TARGET_FPS
        dropped_frames = len(results.slow_commits) + very_slow_count + critical_count

        frequent_updaters = self._find_frequent_updaters(stats)
        unnecessary_renders = sum(max(0, u.count - EXPECTED_RENDER_COUNT) for u in frequent_updaters)

        list_components = tuple(
            ListComponent(name=name, render_time=s.total_duration, item_count=s.count)
            for name, s in stats.items() if LIST_COMPONENT.search(name)
        )
        heavy_list_renders = sum(
            1 for c in list_components if stats[c.name].max_duration > VERY_SLOW_RENDER_THRESHOLD
        )

        large_images = tuple(
            name for name, s in stats.items()
            if IMAGE_COMPONENT.search(name) and s.max_duration > VERY_SLOW_RENDER_THRESHOLD
        )

        navigation_components = tuple(name for name in stats if NAVIGATION_COMPONENT.search(name))
        slow_navigation_transitions = sum(
            1 for name in navigation_components if stats[name].max_duration > CRITICAL_RENDER_THRESHOLD
        )

        large_components = self._find_large_components(stats)

        startup_components = tuple((name, s) for name, s in stats.items() if STARTUP_COMPONENT.search(name))
        startup_estimate = sum(s.max_duration for _, s in startup_components)

        nested_components = tuple(name for name in stats if '.' in name or WRAPPED_COMPONENT.search(name))
        console_statements = count_console_statements(stats)

        context = InsightContext(
            component_stats=stats,
            frequent_updaters=frequent_updaters,
            startup_components=startup_components,
            startup_estimate=startup_estimate,
            nested_components=nested_components,
        )
        patterns: List[CriticalPattern] = []
        for rule in self.rules:
            patterns.extend(rule.evaluate(context))

        health_score = calculate_health_score(
            critical_count=critical_count,
            very_slow_count=very_slow_count,
            slow_navigation_transitions=slow_navigation_transitions,
            startup_time_estimate=startup_estimate,
            heavy_list_renders=heavy_list_renders,
            unnecessary_renders=unnecessary_renders,
            large_component_count=len(large_components),
            image_optimization_issues=len(large_images),
            console_statements=console_statements,
            fps=fps,
        )

        recommendations = self._build_recommendations(
            startup_estimate=startup_estimate,
            fps=fps,
            slow_navigation_transitions=slow_navigation_transitions,
            heavy_list_renders=heavy_list_renders,
            unnecessary_renders=unnecessary_renders,
            image_optimization_issues=len(large_images),
        )

        self.logger.info(
            f"Health score {health_score} ({grade_for_score(health_score).value}), "
            f"{len(patterns)} patterns, {len(recommendations)} recommendations"
        )

        return PerformanceInsights(
            dropped_frames=dropped_frames,
            avg_frame_time=avg_frame_time,
            fps=fps,
            frame_drop_percentage=dropped_frames / total_commits * 100,
            unnecessary_renders=unnecessary_renders,
            deep_component_trees=nested_components[:5] if len(nested_components) > DEEP_NESTING_COUNT else (),
            frequent_updaters=frequent_updaters,
            list_components=list_components,
            heavy_list_renders=heavy_list_renders,
            large_components=large_components,
            mounted_components=len(stats),
            js_thread_blocking=critical_count,
            ui_thread_blocking=very_slow_count,
            slow_navigation_transitions=slow_navigation_transitions,
            navigation_components=navigation_components,
            image_optimization_issues=len(large_images),
            large_images=large_images,
            console_statements=console_statements,
            slow_fiber_count=len(slow_fibers),
            critical_patterns=tuple(patterns),
            startup_time_estimate=startup_estimate,
            health_score=health_score,
            performance_grade=grade_for_score(health_score),
            top_recommendations=tuple(recommendations),
        )

    def _find_frequent_updaters(self, stats: Dict[str, ComponentStats]) -> Tuple[FrequentUpdater, ...]:
        """
        Find the five components rendered most often (more than 20 times).

        Args:
            stats: Per-component statistics

        Returns:
            Tuple of FrequentUpdater sorted by count descending
        """
        frequent = [
            FrequentUpdater(name=name, count=s.count)
            for name, s in stats.items() if s.count > FREQUENT_UPDATE_COUNT
        ]
        frequent.sort(key=lambda u: u.count, reverse=True)
        return tuple(frequent[:5])

    def _find_large_components(self, stats: Dict[str, ComponentStats]) -> Tuple[LargeComponent, ...]:
        large = [
            LargeComponent(name=name, size=s.max_duration)
            for name, s in stats.items() if s.max_duration > CRITICAL_RENDER_THRESHOLD
        ]
        large.sort(key=lambda c: c.size, reverse=True)
        return tuple(large[:10])

    def _build_recommendations(
        self,
        startup_estimate: float,
        fps: float,
        slow_navigation_transitions: int,
        heavy_list_renders: int,
        unnecessary_renders: int,
        image_optimization_issues: int,
    ) -> List[Recommendation]:
        """
        Build recommendations in fixed priority order.

        Returns:
            List of Recommendation (never re-sorted)
        """
        recommendations = []

        if startup_estimate > STARTUP_BUDGET_MS:
            recommendations.append(Recommendation(
                priority=Priority.HIGH,
                title='Optimize App Startup Time',
                description=f"Current startup takes {startup_estimate:.0f}ms. Target is under 1 second.",
                impact='Critical - First impression, app store ratings',
                effort=Effort.MEDIUM,
            ))

        if fps < 50:
            recommendations.append(Recommendation(
                priority=Priority.HIGH,
                title='Improve Frame Rate to 60 FPS',
                description=f"Currently at {fps:.1f} FPS. Animations appear janky.",
                impact='Critical - User experience, perceived smoothness',
                effort=Effort.HIGH,
            ))

        if slow_navigation_transitions > 2:
            recommendations.append(Recommendation(
                priority=Priority.HIGH,
                title='Fix Slow Navigation Transitions',
                description=f"{slow_navigation_transitions} screens have slow transitions (>100ms)",
                impact='High - Navigation feels sluggish',
                effort=Effort.MEDIUM,
            ))

        if heavy_list_renders > 3:
            recommendations.append(Recommendation(
                priority=Priority.MEDIUM,
                title='Optimize List Performance',
                description=f"{heavy_list_renders} lists are rendering slowly",
                impact='High - Scrolling performance, memory usage',
                effort=Effort.LOW,
            ))

        if unnecessary_renders > 50:
            recommendations.append(Recommendation(
                priority=Priority.MEDIUM,
                title='Reduce Unnecessary Re-renders',
                description=f"{unnecessary_renders} excess renders detected. Enable React Compiler",
                impact='Medium - Battery life, responsiveness',
                effort=Effort.LOW,
            ))

        if image_optimization_issues > 0:
            recommendations.append(Recommendation(
                priority=Priority.LOW,
                title='Optimize Image Rendering',
                description=f"{image_optimization_issues} images causing slow renders",
                impact='Medium - Load times, memory usage',
                effort=Effort.LOW,
            ))

        return recommendations


def generate_performance_insights(
    results: AnalysisResults,
    slow_fibers: Sequence[SlowFiber] = (),
) -> PerformanceInsights:
    """
    Generate insights with the default rule set.

    Args:
        results: Commit classification results
        slow_fibers: Slow fiber renders

    Returns:
        PerformanceInsights
    """
    return InsightEngine().generate(results, slow_fibers)
