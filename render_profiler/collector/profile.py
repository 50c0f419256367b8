# render_profiler/collector/profile.py - Canonical render profile model
"""
Canonical render-event model.
Converts a parsed profiling export (``dataForRoots`` shape) into structured,
immutable objects with every optional field defaulted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging


logger = logging.getLogger(__name__)

UNKNOWN_COMPONENT = 'Unknown'

FiberId = str


@dataclass(frozen=True)
class Updater:
    """
    A component named as a cause of a render event.
    """
    display_name: str = UNKNOWN_COMPONENT

    def to_dict(self) -> Dict:
        return {'displayName': self.display_name}


@dataclass(frozen=True)
class RenderEvent:
    """
    One commit of the UI tree.
    """
    duration: float = 0
    timestamp: float = 0
    updaters: Tuple[Updater, ...] = ()
    fiber_durations: Tuple[Tuple[FiberId, float], ...] = ()
    components_affected: int = 0

    @property
    def updater_names(self) -> List[str]:
        """Display names of every updater, in order"""
        return [u.display_name for u in self.updaters]


@dataclass(frozen=True)
class RootData:
    """
    A profiled root: its commits plus the fiber id -> display name table.
    """
    commits: Tuple[RenderEvent, ...] = ()
    snapshots: Dict[FiberId, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CanonicalTrace:
    """
    Normalized trace covering one or more roots.
    """
    roots: Tuple[RootData, ...] = ()

    def iter_commits(self):
        """Yield every render event across all roots, in order"""
        for root in self.roots:
            for commit in root.commits:
                yield commit

    @property
    def commit_count(self) -> int:
        return sum(len(root.commits) for root in self.roots)

    def snapshot_table(self) -> Dict[FiberId, str]:
        """
        Merge the snapshot tables of all roots.

        Returns:
            Dictionary mapping fiber ids to names (later roots win)
        """
        table: Dict[FiberId, str] = {}
        for root in self.roots:
            table.update(root.snapshots)
        return table


def as_number(value: Any) -> float:
    """
    Coerce a JSON value to a number, defaulting to 0.

    Args:
        value: Raw JSON value

    Returns:
        The value if it is numeric, otherwise 0
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def as_name(value: Any) -> Optional[str]:
    """
    Coerce a JSON display name to a string.

    Args:
        value: Raw JSON value

    Returns:
        None for empty values, otherwise the value as a string
    """
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


def fiber_key(value: Any) -> Optional[FiberId]:
    """
    Normalize a fiber id so numeric and string ids of one fiber compare equal.

    Args:
        value: Raw JSON id

    Returns:
        The id as a string (3, 3.0 and "3" all give "3"), or None if the
        value cannot be an id
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _parse_updater(raw: Any) -> Updater:
    name = as_name(raw.get('displayName')) if isinstance(raw, dict) else None
    return Updater(display_name=name or UNKNOWN_COMPONENT)


def _parse_fiber_durations(raw: Any) -> Tuple[Tuple[FiberId, float], ...]:
    pairs = []
    for entry in _as_list(raw):
        if not isinstance(entry, (list, tuple)) or len(entry) < 2:
            continue
        fiber_id, duration = fiber_key(entry[0]), entry[1]
        if fiber_id is None:
            continue
        pairs.append((fiber_id, as_number(duration)))
    return tuple(pairs)


def _count_changes(raw: Any) -> int:
    # Profilers export change descriptions either as pair lists or as objects
    if isinstance(raw, (list, dict)):
        return len(raw)
    return 0


def parse_commit(raw: Any) -> RenderEvent:
    """
    Build a RenderEvent from one ``commitData`` entry.

    Args:
        raw: Raw commit dictionary

    Returns:
        RenderEvent with defaults applied to missing fields
    """
    if not isinstance(raw, dict):
        return RenderEvent()

    return RenderEvent(
        duration=as_number(raw.get('duration')),
        timestamp=as_number(raw.get('timestamp')),
        updaters=tuple(_parse_updater(u) for u in _as_list(raw.get('updaters'))),
        fiber_durations=_parse_fiber_durations(raw.get('fiberActualDurations')),
        components_affected=_count_changes(raw.get('changeDescriptions')),
    )


def parse_snapshots(raw: Any) -> Dict[FiberId, str]:
    """
    Build the fiber id -> display name table of a root.

    Snapshot entries are ``[id, data]`` pairs. Entries whose data is not an
    object are left unmapped; objects without a display name fall back to
    ``Fiber-{id}``.

    Args:
        raw: Raw ``snapshots`` value

    Returns:
        Dictionary mapping fiber ids to names
    """
    table: Dict[FiberId, str] = {}

    for entry in _as_list(raw):
        if not isinstance(entry, (list, tuple)) or len(entry) < 2:
            continue

        fiber_id, fiber_data = fiber_key(entry[0]), entry[1]
        if fiber_id is None or not isinstance(fiber_data, dict):
            continue

        table[fiber_id] = as_name(fiber_data.get('displayName')) or f"Fiber-{fiber_id}"

    return table


def parse_profile(data: Dict) -> CanonicalTrace:
    """
    Convert a canonical profiling export into a CanonicalTrace.

    Args:
        data: Parsed JSON object with a ``dataForRoots`` list

    Returns:
        CanonicalTrace (empty if there are no roots)
    """
    roots = []

    for raw_root in _as_list(data.get('dataForRoots')):
        if not isinstance(raw_root, dict):
            logger.debug(f"Skipping non-object root entry: {type(raw_root).__name__}")
            continue

        roots.append(RootData(
            commits=tuple(parse_commit(c) for c in _as_list(raw_root.get('commitData'))),
            snapshots=parse_snapshots(raw_root.get('snapshots')),
        ))

    trace = CanonicalTrace(roots=tuple(roots))
    logger.debug(f"Parsed profile with {len(trace.roots)} roots and {trace.commit_count} commits")

    return trace
