# render_profiler/analyzer/fiber_durations.py - Per-fiber slow render extraction
"""
Surfaces individually slow component contributions inside render events.
"""

from dataclasses import dataclass
from typing import Dict, List
import logging

from render_profiler.analyzer.commit_classifier import SLOW_RENDER_THRESHOLD
from render_profiler.collector.profile import CanonicalTrace


@dataclass(frozen=True)
class SlowFiber:
    """
    A single component contribution at or above the slow threshold.
    """
    component: str
    duration: float
    timestamp: float

    def to_dict(self) -> Dict:
        return {
            'component': self.component,
            'duration': self.duration,
            'timestamp': self.timestamp,
        }


class FiberDurationExtractor:
    """
    Resolves fiber ids to names and finds slow fiber renders.
    """

    def __init__(self):
        """
        Initialize the extractor.
        """
        self.logger = logging.getLogger(__name__)

    def extract(self, trace: CanonicalTrace) -> List[SlowFiber]:
        """
        Find every (fiber, commit) pair whose own duration is slow.

        Args:
            trace: Canonical trace

        Returns:
            List of SlowFiber in commit order
        """
        names = trace.snapshot_table()
        slow_fibers = []

        for event in trace.iter_commits():
            for fiber_id, duration in event.fiber_durations:
                if duration < SLOW_RENDER_THRESHOLD:
                    continue

                slow_fibers.append(SlowFiber(
                    component=names.get(fiber_id) or f"Component-{fiber_id}",
                    duration=duration,
                    timestamp=event.timestamp,
                ))

        self.logger.debug(f"Found {len(slow_fibers)} slow fiber renders across {len(names)} known fibers")

        return slow_fibers


def analyze_fiber_durations(trace: CanonicalTrace) -> List[SlowFiber]:
    """
    Extract slow fiber renders from a trace.

    Args:
        trace: Canonical trace

    Returns:
        List of SlowFiber
    """
    return FiberDurationExtractor().extract(trace)
