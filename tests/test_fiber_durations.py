# tests/test_fiber_durations.py - Tests for slow fiber extraction
"""
Unit tests for the FiberDurationExtractor class.
"""

from render_profiler.analyzer.fiber_durations import (
    FiberDurationExtractor,
    SlowFiber,
    analyze_fiber_durations,
)
from render_profiler.collector.profile import parse_profile


def _profile(commits, snapshots=None):
    return parse_profile({'dataForRoots': [{'commitData': commits, 'snapshots': snapshots or []}]})


class TestFiberDurationExtractor:
    """Test cases for FiberDurationExtractor"""

    def setup_method(self):
        """Setup test fixtures"""
        self.extractor = FiberDurationExtractor()

    def test_only_slow_fibers_reported(self):
        """Test fibers below 16ms are ignored"""
        trace = _profile(
            [{'timestamp': 500, 'fiberActualDurations': [[1, 15.9], [2, 16], [3, 48.5]]}],
            [[1, {'displayName': 'Icon'}], [2, {'displayName': 'Row'}], [3, {'displayName': 'Feed'}]],
        )

        slow = self.extractor.extract(trace)

        assert slow == [
            SlowFiber(component='Row', duration=16, timestamp=500),
            SlowFiber(component='Feed', duration=48.5, timestamp=500),
        ]

    def test_no_reported_fiber_below_threshold(self):
        """Test every reported fiber is at least 16ms"""
        durations = [0, 3, 15, 16, 17, 99, 250, 15.999]
        trace = _profile([{'fiberActualDurations': [[i, d] for i, d in enumerate(durations)]}])

        slow = analyze_fiber_durations(trace)

        assert len(slow) == 4
        assert all(f.duration >= 16 for f in slow)

    def test_unknown_fiber_id_falls_back_to_component_id(self):
        """Test ids missing from the snapshot table get Component-{id}"""
        trace = _profile([{'fiberActualDurations': [[42, 30]]}])

        slow = self.extractor.extract(trace)

        assert slow[0].component == 'Component-42'

    def test_snapshot_without_name_uses_fiber_id(self):
        """Test snapshots without a display name resolve to Fiber-{id}"""
        trace = _profile([{'fiberActualDurations': [[7, 30]]}], [[7, {}]])

        slow = self.extractor.extract(trace)

        assert slow[0].component == 'Fiber-7'

    def test_string_fiber_id_resolves_numeric_snapshot(self):
        """Test a "3" duration id resolves against snapshot id 3"""
        trace = _profile([{'fiberActualDurations': [['3', 30]]}], [[3, {'displayName': 'Row'}]])

        slow = self.extractor.extract(trace)

        assert slow[0].component == 'Row'

    def test_numeric_snapshot_name_is_string(self):
        """Test a numeric display name is reported as a string"""
        trace = _profile([{'fiberActualDurations': [[1, 30]]}], [[1, {'displayName': 5}]])

        slow = self.extractor.extract(trace)

        assert slow[0].component == '5'

    def test_names_resolved_across_roots(self):
        """Test snapshot tables of every root are used"""
        trace = parse_profile({'dataForRoots': [
            {'commitData': [{'fiberActualDurations': [[2, 20]]}], 'snapshots': []},
            {'commitData': [], 'snapshots': [[2, {'displayName': 'Late'}]]},
        ]})

        slow = self.extractor.extract(trace)

        assert slow[0].component == 'Late'

    def test_commit_order_preserved(self):
        """Test slow fibers are listed in commit order"""
        trace = _profile(
            [
                {'timestamp': 1, 'fiberActualDurations': [[1, 20]]},
                {'timestamp': 2, 'fiberActualDurations': [[1, 90]]},
            ],
            [[1, {'displayName': 'Row'}]],
        )

        slow = self.extractor.extract(trace)

        assert [f.timestamp for f in slow] == [1, 2]

    def test_empty_trace(self):
        """Test an empty trace yields no slow fibers"""
        assert self.extractor.extract(parse_profile({})) == []

    def test_to_dict(self):
        """Test serialization"""
        fiber = SlowFiber(component='Row', duration=20, timestamp=5)

        assert fiber.to_dict() == {'component': 'Row', 'duration': 20, 'timestamp': 5}
