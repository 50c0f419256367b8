# render_profiler/analyzer/page_attributor.py - Per-screen breakdown
"""
Groups components into logical screens by name and aggregates render
metrics per screen.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging
import re

from render_profiler.analyzer.commit_classifier import (
    CRITICAL_RENDER_THRESHOLD,
    VERY_SLOW_RENDER_THRESHOLD,
)
from render_profiler.collector.profile import CanonicalTrace


OTHER_COMPONENTS_PAGE = 'Other Components'

PAGE_NAME_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r'Screen$',
        r'Page$',
        r'Navigator',
        r'Stack\.Screen',
        r'Tab\.Screen',
        r'Drawer\.Screen',
        r'HomeScreen',
        r'ProfileScreen',
        r'SettingsScreen',
        r'DetailScreen',
        r'ListScreen',
        r'LoginScreen',
        r'Dashboard',
        r'Navigation',
    )
]

COMMON_PAGES = [
    'Home', 'Profile', 'Settings', 'Detail', 'List',
    'Login', 'Dashboard', 'Search', 'Cart', 'Checkout',
]

_WRAPPER_PREFIX = re.compile(r'^(Lazy|Memo|ForwardRef|Anonymous)\(')
_WRAPPER_SUFFIX = re.compile(r'\)$')
_PAGE_SUFFIX = re.compile(r'Screen$|Page$')


@dataclass(frozen=True)
class PageMetrics:
    """
    Aggregated render metrics of one screen.
    """
    page_name: str
    total_duration: float
    render_count: int
    avg_duration: float
    max_duration: float
    critical_renders: int
    slow_renders: int
    components: Tuple[str, ...]

    def to_dict(self) -> Dict:
        return {
            'pageName': self.page_name,
            'totalDuration': self.total_duration,
            'renderCount': self.render_count,
            'avgDuration': self.avg_duration,
            'maxDuration': self.max_duration,
            'criticalRenders': self.critical_renders,
            'slowRenders': self.slow_renders,
            'components': list(self.components),
        }


@dataclass(frozen=True)
class PageAnalysisResults:
    """
    All screens, slowest first.
    """
    pages: Tuple[PageMetrics, ...] = ()
    total_pages: int = 0
    slowest_page: Optional[PageMetrics] = None

    def to_dict(self) -> Dict:
        return {
            'pages': [p.to_dict() for p in self.pages],
            'totalPages': self.total_pages,
            'slowestPage': self.slowest_page.to_dict() if self.slowest_page else None,
        }


def is_page_component(component_name: str) -> bool:
    """
    Check whether a component name looks like a screen or navigator.

    Args:
        component_name: Component display name

    Returns:
        True if any screen pattern matches
    """
    return any(pattern.search(component_name) for pattern in PAGE_NAME_PATTERNS)


def extract_page_name(component_name: str) -> str:
    """
    Derive a page name from a screen-like component name.

    Examples:
        HomeScreen -> Home
        Memo(SettingsPage) -> Settings
        Stack.Screen -> Stack.Screen (nothing left after stripping)

    Args:
        component_name: Component display name

    Returns:
        Page name, or the original name if nothing is left
    """
    page_name = _WRAPPER_PREFIX.sub('', component_name, count=1)
    page_name = _WRAPPER_SUFFIX.sub('', page_name, count=1)

    if '.' in page_name:
        page_name = page_name.split('.')[-1]

    page_name = _PAGE_SUFFIX.sub('', page_name, count=1).strip()

    return page_name or component_name


def attribute_page(component_name: str) -> str:
    """
    Assign a component to a page.

    Args:
        component_name: Component display name

    Returns:
        Page name
    """
    if is_page_component(component_name):
        return extract_page_name(component_name)

    lower_name = component_name.lower()
    for page in COMMON_PAGES:
        if page.lower() in lower_name:
            return page

    return OTHER_COMPONENTS_PAGE


class _PageAccumulator:
    """Running totals for one page while the trace is walked."""

    def __init__(self):
        self.total_duration = 0
        self.render_count = 0
        self.max_duration = 0
        self.critical_renders = 0
        self.slow_renders = 0
        self.components: Dict[str, None] = {}

    def add(self, component_name: str, duration: float):
        self.total_duration += duration
        self.render_count += 1
        self.max_duration = max(self.max_duration, duration)
        self.components.setdefault(component_name, None)

        if duration >= CRITICAL_RENDER_THRESHOLD:
            self.critical_renders += 1
        elif duration >= VERY_SLOW_RENDER_THRESHOLD:
            self.slow_renders += 1

    def finalize(self, page_name: str) -> PageMetrics:
        return PageMetrics(
            page_name=page_name,
            total_duration=self.total_duration,
            render_count=self.render_count,
            avg_duration=self.total_duration / self.render_count if self.render_count > 0 else 0,
            max_duration=self.max_duration,
            critical_renders=self.critical_renders,
            slow_renders=self.slow_renders,
            components=tuple(self.components),
        )


class PageAttributor:
    """
    Breaks render time down by screen.

    A page's slow-render counter uses the very-slow threshold (50ms), not the
    16ms slow threshold used for commit classification.
    """

    def __init__(self):
        """
        Initialize the page attributor.
        """
        self.logger = logging.getLogger(__name__)

    def analyze(self, trace: CanonicalTrace) -> PageAnalysisResults:
        """
        Aggregate render metrics per page.

        Args:
            trace: Canonical trace

        Returns:
            PageAnalysisResults sorted by total duration descending
        """
        accumulators: Dict[str, _PageAccumulator] = {}

        for event in trace.iter_commits():
            for component_name in event.updater_names:
                page_name = attribute_page(component_name)
                if page_name not in accumulators:
                    accumulators[page_name] = _PageAccumulator()
                accumulators[page_name].add(component_name, event.duration)

        pages: List[PageMetrics] = [
            acc.finalize(page_name) for page_name, acc in accumulators.items()
        ]
        pages.sort(key=lambda p: p.total_duration, reverse=True)

        self.logger.debug(f"Attributed renders to {len(pages)} pages")

        return PageAnalysisResults(
            pages=tuple(pages),
            total_pages=len(pages),
            slowest_page=pages[0] if pages else None,
        )


def analyze_by_page(trace: CanonicalTrace) -> PageAnalysisResults:
    """
    Aggregate render metrics per page.

    Args:
        trace: Canonical trace

    Returns:
        PageAnalysisResults
    """
    return PageAttributor().analyze(trace)
