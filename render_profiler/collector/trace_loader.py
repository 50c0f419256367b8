# render_profiler/collector/trace_loader.py - Trace detection and normalization
"""
Detects low-level begin/end event traces and converts them into the
canonical render profile format.
"""

from typing import Any, Dict, List, Tuple
import logging

from render_profiler.collector.profile import CanonicalTrace, as_name, as_number, parse_profile


logger = logging.getLogger(__name__)

PHASE_BEGIN = 'b'
PHASE_END = 'e'


class InvalidTraceFormatError(ValueError):
    """
    Raised when the trace root is not a JSON object.
    """

    def __init__(self, value: Any = None):
        super().__init__(f"invalid trace format: expected a JSON object, got {type(value).__name__}")


def is_event_trace(data: Dict) -> bool:
    """
    Check whether a parsed trace is a low-level event trace.

    Args:
        data: Parsed JSON object

    Returns:
        True if the object has ``traceEvents`` and no ``dataForRoots``
    """
    return 'traceEvents' in data and 'dataForRoots' not in data


def convert_trace_to_profile(trace_data: Dict) -> Dict:
    """
    Convert a begin/end event trace into the canonical profile format.

    Spans are matched with a single LIFO stack. Each closed span with a
    positive duration becomes one commit whose only updater is the span name.

    Args:
        trace_data: Parsed JSON object with a ``traceEvents`` list

    Returns:
        Dictionary in ``dataForRoots`` form with a single root
    """
    commits: List[Dict] = []
    snapshots: List[list] = []

    events = trace_data.get('traceEvents') or []
    if not isinstance(events, list):
        events = []

    open_spans: List[Tuple[str, float]] = []
    fiber_ids: Dict[str, int] = {}
    unmatched_ends = 0

    for event in events:
        if not isinstance(event, dict):
            continue

        name = as_name(event.get('name')) or ''
        phase = event.get('ph') or ''
        ts = as_number(event.get('ts'))

        if phase == PHASE_BEGIN:
            open_spans.append((name, ts))
            continue

        if phase != PHASE_END:
            continue

        if not open_spans:
            unmatched_ends += 1
            continue

        span_name, start_ts = open_spans.pop()
        duration = (ts - start_ts) / 1000  # us -> ms

        if duration <= 0:
            continue

        if span_name not in fiber_ids:
            fiber_ids[span_name] = len(fiber_ids)
            snapshots.append([fiber_ids[span_name], {'displayName': span_name}])

        commits.append({
            'duration': duration,
            'timestamp': start_ts,
            'updaters': [{'displayName': span_name}],
            'changeDescriptions': [],
            'fiberActualDurations': [[fiber_ids[span_name], duration]],
        })

    if unmatched_ends or open_spans:
        logger.debug(f"Ignored {unmatched_ends} unmatched end events and {len(open_spans)} open spans")

    logger.info(f"Converted {len(events)} trace events into {len(commits)} commits")

    return {
        'dataForRoots': [{
            'commitData': commits,
            'snapshots': snapshots,
        }]
    }


def normalize_profile(json_data: Any) -> Tuple[Dict, bool]:
    """
    Bring a parsed trace into canonical JSON form.

    Args:
        json_data: Any parsed JSON value

    Returns:
        Tuple of (canonical profile dictionary, whether it was converted)

    Raises:
        InvalidTraceFormatError: If the value is not a JSON object
    """
    if not isinstance(json_data, dict):
        raise InvalidTraceFormatError(json_data)

    if is_event_trace(json_data):
        return convert_trace_to_profile(json_data), True

    return json_data, False


def load_profile_data(json_data: Any) -> Tuple[CanonicalTrace, bool]:
    """
    Load a parsed trace into the canonical model, converting if needed.

    Args:
        json_data: Any parsed JSON value

    Returns:
        Tuple of (CanonicalTrace, whether the input was converted)

    Raises:
        InvalidTraceFormatError: If the value is not a JSON object
    """
    profile, converted = normalize_profile(json_data)
    return parse_profile(profile), converted
