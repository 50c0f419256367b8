# render_profiler/analyzer/patterns.py - Pattern vocabulary and rule table
"""
Closed vocabularies for detected patterns and recommendations, component
name matchers, and the message templates each pattern is reported with.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional
import re


class PatternType(str, Enum):
    MISSING_MEMO = 'missing-memo'
    HEAVY_COMPUTATION = 'heavy-computation'
    DEEP_NESTING = 'deep-nesting'
    IMAGE_RESIZE = 'image-resize'
    NO_NATIVE_DRIVER = 'no-native-driver'
    BLOCKING_OPERATION = 'blocking-operation'
    CONSOLE_LOG = 'console-log'
    FLATLIST_OPTIMIZATION = 'flatlist-optimization'
    SCROLL_PERFORMANCE = 'scroll-performance'
    TEXT_ON_IMAGE = 'text-on-image'


class Severity(str, Enum):
    CRITICAL = 'critical'
    WARNING = 'warning'
    INFO = 'info'


class Impact(str, Enum):
    STARTUP = 'startup'
    RUNTIME = 'runtime'
    NAVIGATION = 'navigation'
    LIST = 'list'
    ANIMATION = 'animation'
    MEMORY = 'memory'


class Effort(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


class Priority(IntEnum):
    HIGH = 1
    MEDIUM = 2
    LOW = 3


class Grade(str, Enum):
    A = 'A'
    B = 'B'
    C = 'C'
    D = 'D'
    F = 'F'


# Component name matchers
LIST_COMPONENT = re.compile(
    r'FlatList|SectionList|VirtualizedList|ScrollView|RecyclerListView|FlashList|LegendList',
    re.IGNORECASE,
)
BASIC_LIST_COMPONENT = re.compile(r'FlatList|ScrollView')
RECYCLING_LIST_COMPONENT = re.compile(r'Flash|Legend')
IMAGE_COMPONENT = re.compile(r'Image|Img|Photo|Picture|Avatar', re.IGNORECASE)
NAVIGATION_COMPONENT = re.compile(r'Navigator|Navigation|Stack|Tab|Drawer|Router|Screen', re.IGNORECASE)
ANIMATION_COMPONENT = re.compile(r'Animated|Reanimated|Motion|Transition', re.IGNORECASE)
STARTUP_COMPONENT = re.compile(r'Mount|Provider|App|Root|Index', re.IGNORECASE)
MEMOIZED_COMPONENT = re.compile(r'memo|Memo|Pure', re.IGNORECASE)
WRAPPED_COMPONENT = re.compile(r'ForwardRef|Anonymous|HOC', re.IGNORECASE)
SCROLL_VIEW_COMPONENT = re.compile(r'ScrollView', re.IGNORECASE)
VIRTUALIZED_SCROLL_COMPONENT = re.compile(r'Flat|Flash|Legend', re.IGNORECASE)
VIEW_COMPONENT = re.compile(r'View|Container', re.IGNORECASE)
TEXT_COMPONENT = re.compile(r'Text|Label', re.IGNORECASE)
CONSOLE_TOKEN = re.compile(r'console|log|debug', re.IGNORECASE)


@dataclass(frozen=True)
class CriticalPattern:
    """
    A detected anti-pattern with remediation advice.
    """
    type: PatternType
    component: str
    severity: Severity
    description: str
    recommendation: str
    impact: Impact

    def to_dict(self) -> Dict:
        return {
            'type': self.type.value,
            'component': self.component,
            'severity': self.severity.value,
            'description': self.description,
            'recommendation': self.recommendation,
            'impact': self.impact.value,
        }


@dataclass(frozen=True)
class Recommendation:
    """
    A prioritized, trace-wide improvement suggestion.
    """
    priority: Priority
    title: str
    description: str
    impact: str
    effort: Effort

    def to_dict(self) -> Dict:
        return {
            'priority': int(self.priority),
            'title': self.title,
            'description': self.description,
            'impact': self.impact,
            'effort': self.effort.value,
        }


@dataclass(frozen=True)
class PatternRule:
    """
    How one pattern type is reported.

    The description is a ``str.format`` template filled from the detector's
    match fields. When ``escalate_above_ms`` is set, matches whose
    ``max_duration`` exceeds it are reported as critical.
    """
    type: PatternType
    severity: Severity
    impact: Impact
    description: str
    recommendation: str
    escalate_above_ms: Optional[float] = None

    def build(self, component: str, **fields) -> CriticalPattern:
        severity = self.severity
        if self.escalate_above_ms is not None and fields.get('max_duration', 0) > self.escalate_above_ms:
            severity = Severity.CRITICAL

        return CriticalPattern(
            type=self.type,
            component=component,
            severity=severity,
            description=self.description.format(component=component, **fields),
            recommendation=self.recommendation,
            impact=self.impact,
        )


PATTERN_RULES: Dict[PatternType, PatternRule] = {
    rule.type: rule for rule in (
        PatternRule(
            type=PatternType.FLATLIST_OPTIMIZATION,
            severity=Severity.WARNING,
            impact=Impact.LIST,
            description='{component} is slow ({max_duration:.0f}ms). Consider using FlashList or LegendList',
            recommendation=(
                'Replace FlatList with @shopify/flash-list or @legendapp/list. '
                'Implement getItemLayout, windowSize and removeClippedSubviews'
            ),
        ),
        PatternRule(
            type=PatternType.IMAGE_RESIZE,
            severity=Severity.WARNING,
            impact=Impact.RUNTIME,
            description='Image component causing slow renders ({max_duration:.0f}ms), likely unoptimized',
            recommendation=(
                'Animate with transform: [{scale}] instead of width/height. '
                'Serve correctly sized images, use FastImage and progressive loading'
            ),
        ),
        PatternRule(
            type=PatternType.BLOCKING_OPERATION,
            severity=Severity.CRITICAL,
            impact=Impact.NAVIGATION,
            description='Slow navigation transition ({max_duration:.0f}ms) blocking UI',
            recommendation=(
                'Defer heavy work with InteractionManager.runAfterInteractions(), '
                'preload screens and use the native stack navigator'
            ),
        ),
        PatternRule(
            type=PatternType.NO_NATIVE_DRIVER,
            severity=Severity.WARNING,
            impact=Impact.ANIMATION,
            description='Animation causing frame drops ({max_duration:.0f}ms per frame)',
            recommendation=(
                'Use useNativeDriver: true with the Animated API. Consider Reanimated '
                'for complex animations and avoid animating layout properties'
            ),
            escalate_above_ms=50,
        ),
        PatternRule(
            type=PatternType.MISSING_MEMO,
            severity=Severity.CRITICAL,
            impact=Impact.RUNTIME,
            description='Component re-renders {count} times without memoization',
            recommendation=(
                'Wrap with React.memo(), use useMemo for expensive calculations and '
                'useCallback for function props. Enable React Compiler'
            ),
        ),
        PatternRule(
            type=PatternType.DEEP_NESTING,
            severity=Severity.WARNING,
            impact=Impact.RUNTIME,
            description='{nested_count} deeply nested or wrapped components detected',
            recommendation=(
                'Extract inline components into named components, flatten the hierarchy '
                'and reduce HOC wrapping'
            ),
        ),
        PatternRule(
            type=PatternType.HEAVY_COMPUTATION,
            severity=Severity.CRITICAL,
            impact=Impact.STARTUP,
            description='App startup takes {startup_ms:.0f}ms, exceeding the 1 second budget',
            recommendation=(
                'Enable Hermes, use React.lazy() with Suspense, split the bundle and '
                'defer non-critical initialization'
            ),
        ),
        PatternRule(
            type=PatternType.SCROLL_PERFORMANCE,
            severity=Severity.WARNING,
            impact=Impact.LIST,
            description='ScrollView with {count} renders, likely rendering all children at once',
            recommendation=(
                'Replace ScrollView with FlatList or FlashList for long lists and tune '
                'windowSize, removeClippedSubviews and getItemLayout'
            ),
        ),
        PatternRule(
            type=PatternType.TEXT_ON_IMAGE,
            severity=Severity.INFO,
            impact=Impact.RUNTIME,
            description='Multiple Text and Image components detected; watch for transparent text over images',
            recommendation=(
                'On Android avoid transparent Text backgrounds over Image. Use '
                'renderToHardwareTextureAndroid or solid backgrounds'
            ),
        ),
        PatternRule(
            type=PatternType.CONSOLE_LOG,
            severity=Severity.WARNING,
            impact=Impact.RUNTIME,
            description='Detected {console_count} potential console statements in component names',
            recommendation=(
                'Strip console calls from production builds with '
                'babel-plugin-transform-remove-console or route them through a logger'
            ),
        ),
    )
}
