# render_profiler/analyzer/commit_classifier.py - Commit severity classification
"""
Buckets render events by duration severity and accumulates per-component
render statistics.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
import logging

from render_profiler.collector.profile import CanonicalTrace, RenderEvent, Updater


# Severity thresholds (milliseconds). Report labels quote these values.
SLOW_RENDER_THRESHOLD = 16
VERY_SLOW_RENDER_THRESHOLD = 50
CRITICAL_RENDER_THRESHOLD = 100


@dataclass(frozen=True)
class ComponentStats:
    """
    Render statistics of one component name.
    """
    count: int = 0
    total_duration: float = 0
    max_duration: float = 0

    def record(self, duration: float) -> 'ComponentStats':
        """Return the stats with one more render of the given duration"""
        return ComponentStats(
            count=self.count + 1,
            total_duration=self.total_duration + duration,
            max_duration=max(self.max_duration, duration),
        )

    def to_dict(self) -> Dict:
        return {
            'count': self.count,
            'total_duration': self.total_duration,
            'max_duration': self.max_duration,
        }


@dataclass(frozen=True)
class CommitInfo:
    """
    Classified, read-only view of a render event.
    """
    duration: float
    timestamp: float
    updaters: Tuple[Updater, ...]
    components_affected: int

    @classmethod
    def from_event(cls, event: RenderEvent) -> 'CommitInfo':
        return cls(
            duration=event.duration,
            timestamp=event.timestamp,
            updaters=event.updaters,
            components_affected=event.components_affected,
        )

    def to_dict(self) -> Dict:
        return {
            'duration': self.duration,
            'timestamp': self.timestamp,
            'updaters': [u.to_dict() for u in self.updaters],
            'components_affected': self.components_affected,
        }


@dataclass(frozen=True)
class AnalysisResults:
    """
    Output of commit classification.
    """
    total_commits: int = 0
    slow_commits: Tuple[CommitInfo, ...] = ()
    very_slow_commits: Tuple[CommitInfo, ...] = ()
    critical_commits: Tuple[CommitInfo, ...] = ()
    component_stats: Dict[str, ComponentStats] = field(default_factory=dict)

    @property
    def good_count(self) -> int:
        """Commits below the slow threshold"""
        return (
            self.total_commits
            - len(self.slow_commits)
            - len(self.very_slow_commits)
            - len(self.critical_commits)
        )

    def to_dict(self) -> Dict:
        return {
            'total_commits': self.total_commits,
            'slow_commits': [c.to_dict() for c in self.slow_commits],
            'very_slow_commits': [c.to_dict() for c in self.very_slow_commits],
            'critical_commits': [c.to_dict() for c in self.critical_commits],
            'component_stats': {
                name: stats.to_dict() for name, stats in self.component_stats.items()
            },
        }


def classify_duration(duration: float) -> Optional[str]:
    """
    Classify a render duration into a severity bucket.

    Args:
        duration: Render duration in milliseconds

    Returns:
        'critical', 'very_slow', 'slow', or None for a good render
    """
    if duration >= CRITICAL_RENDER_THRESHOLD:
        return 'critical'
    elif duration >= VERY_SLOW_RENDER_THRESHOLD:
        return 'very_slow'
    elif duration >= SLOW_RENDER_THRESHOLD:
        return 'slow'
    return None


class CommitClassifier:
    """
    Classifies render events by severity.

    Every updater of an event is credited with the full event duration, so
    component totals can add up to more than the trace's total render time.
    """

    def __init__(self):
        """
        Initialize the commit classifier.
        """
        self.logger = logging.getLogger(__name__)

    def classify(self, trace: CanonicalTrace) -> AnalysisResults:
        """
        Classify every render event of a trace.

        Args:
            trace: Canonical trace

        Returns:
            AnalysisResults with severity buckets and component stats
        """
        buckets = {'slow': [], 'very_slow': [], 'critical': []}
        component_stats: Dict[str, ComponentStats] = {}
        total = 0

        for event in trace.iter_commits():
            total += 1

            severity = classify_duration(event.duration)
            if severity is not None:
                buckets[severity].append(CommitInfo.from_event(event))

            for name in event.updater_names:
                stats = component_stats.get(name, ComponentStats())
                component_stats[name] = stats.record(event.duration)

        results = AnalysisResults(
            total_commits=total,
            slow_commits=tuple(buckets['slow']),
            very_slow_commits=tuple(buckets['very_slow']),
            critical_commits=tuple(buckets['critical']),
            component_stats=component_stats,
        )

        self.logger.info(
            f"Classified {total} commits: {len(results.critical_commits)} critical, "
            f"{len(results.very_slow_commits)} very slow, {len(results.slow_commits)} slow"
        )

        return results


def analyze_commits(trace: CanonicalTrace) -> AnalysisResults:
    """
    Classify the commits of a trace.

    Args:
        trace: Canonical trace

    Returns:
        AnalysisResults
    """
    return CommitClassifier().classify(trace)
