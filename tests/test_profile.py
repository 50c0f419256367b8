# tests/test_profile.py - Tests for canonical profile parsing
"""
Unit tests for parsing profiling exports with defaulted fields.
"""

import dataclasses

import pytest
from render_profiler.collector.profile import (
    RenderEvent,
    Updater,
    parse_commit,
    parse_profile,
    parse_snapshots,
)


class TestParseCommit:
    """Test cases for parse_commit"""

    def test_full_commit(self):
        """Test all fields are read"""
        event = parse_commit({
            'duration': 42.5,
            'timestamp': 1200,
            'updaters': [{'displayName': 'App'}, {'displayName': 'List'}],
            'changeDescriptions': [[1, {}], [2, {}], [3, {}]],
            'fiberActualDurations': [[1, 20.0], [2, 3.5]],
        })

        assert event.duration == 42.5
        assert event.timestamp == 1200
        assert event.updater_names == ['App', 'List']
        assert event.components_affected == 3
        assert event.fiber_durations == (('1', 20.0), ('2', 3.5))

    def test_missing_fields_defaulted(self):
        """Test an empty commit parses to zero values"""
        event = parse_commit({})

        assert event == RenderEvent()
        assert event.duration == 0
        assert event.updaters == ()
        assert event.components_affected == 0

    def test_missing_display_name_is_unknown(self):
        """Test updaters without a name become Unknown"""
        event = parse_commit({'updaters': [{}, {'displayName': None}, 'x']})

        assert event.updater_names == ['Unknown', 'Unknown', 'Unknown']

    def test_non_string_display_names_coerced(self):
        """Test numeric and list names become strings, empty ones Unknown"""
        event = parse_commit({'updaters': [{'displayName': 42}, {'displayName': ['A']}, {'displayName': 0}]})

        assert event.updater_names == ['42', "['A']", 'Unknown']

    def test_fiber_ids_normalized(self):
        """Test integer, float and string ids of one fiber compare equal"""
        event = parse_commit({'fiberActualDurations': [[3, 20], [3.0, 21], ['3', 22], [True, 23]]})

        assert event.fiber_durations == (('3', 20), ('3', 21), ('3', 22))

    def test_non_numeric_duration_defaulted(self):
        """Test non-numeric durations count as zero"""
        assert parse_commit({'duration': 'slow'}).duration == 0
        assert parse_commit({'duration': None}).duration == 0

    def test_change_descriptions_as_object(self):
        """Test change descriptions exported as an object are counted"""
        assert parse_commit({'changeDescriptions': {'1': {}, '2': {}}}).components_affected == 2

    def test_malformed_fiber_pairs_skipped(self):
        """Test fiber entries that are not pairs are dropped"""
        event = parse_commit({'fiberActualDurations': [[7], 'x', [8, 30], [[1], 20]]})

        assert event.fiber_durations == (('8', 30),)

    def test_events_are_immutable(self):
        """Test parsed events cannot be modified"""
        event = parse_commit({'duration': 10})

        with pytest.raises(dataclasses.FrozenInstanceError):
            event.duration = 20


class TestParseSnapshots:
    """Test cases for parse_snapshots"""

    def test_display_names(self):
        """Test id/data pairs map to display names"""
        table = parse_snapshots([[1, {'displayName': 'App'}], [2, {'displayName': 'Row'}]])

        assert table == {'1': 'App', '2': 'Row'}

    def test_missing_display_name_falls_back_to_fiber_id(self):
        """Test snapshots without a name get Fiber-{id}"""
        table = parse_snapshots([[5, {'id': 5}], [6, {'displayName': ''}]])

        assert table == {'5': 'Fiber-5', '6': 'Fiber-6'}

    def test_non_string_display_name_coerced(self):
        """Test a numeric snapshot name is stored as a string"""
        assert parse_snapshots([[1, {'displayName': 5}]]) == {'1': '5'}

    def test_string_and_numeric_ids_share_a_key(self):
        """Test snapshot ids are keyed the same way as fiber durations"""
        assert parse_snapshots([['7', {'displayName': 'A'}], [8.0, {'displayName': 'B'}]]) == {
            '7': 'A',
            '8': 'B',
        }

    def test_non_object_data_left_unmapped(self):
        """Test entries whose data is not an object are skipped"""
        table = parse_snapshots([[1, 'App'], [2, None], 'bad', [3]])

        assert table == {}


class TestParseProfile:
    """Test cases for parse_profile"""

    def test_empty_profile(self):
        """Test a profile without roots"""
        trace = parse_profile({})

        assert trace.roots == ()
        assert trace.commit_count == 0
        assert list(trace.iter_commits()) == []

    def test_roots_without_fields(self):
        """Test roots missing commitData and snapshots"""
        trace = parse_profile({'dataForRoots': [{}, 'bad']})

        assert len(trace.roots) == 1
        assert trace.roots[0].commits == ()
        assert trace.roots[0].snapshots == {}

    def test_multiple_roots_iterated_in_order(self):
        """Test commits of all roots are visited root by root"""
        trace = parse_profile({'dataForRoots': [
            {'commitData': [{'duration': 1}, {'duration': 2}], 'snapshots': [[1, {'displayName': 'A'}]]},
            {'commitData': [{'duration': 3}], 'snapshots': [[1, {'displayName': 'B'}]]},
        ]})

        assert [e.duration for e in trace.iter_commits()] == [1, 2, 3]
        # Later roots win when ids collide
        assert trace.snapshot_table() == {'1': 'B'}

    def test_updater_serialization(self):
        """Test updaters serialize with the export's key name"""
        assert Updater('Row').to_dict() == {'displayName': 'Row'}
