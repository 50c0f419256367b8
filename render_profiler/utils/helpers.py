# render_profiler/utils/helpers.py - Helper functions
"""
General utility and helper functions.
"""

import json
from pathlib import Path
from typing import Any, Union
import logging

from render_profiler.analyzer.commit_classifier import (
    CRITICAL_RENDER_THRESHOLD,
    SLOW_RENDER_THRESHOLD,
    VERY_SLOW_RENDER_THRESHOLD,
    classify_duration,
)


logger = logging.getLogger(__name__)

SEVERITY_LABELS = {
    'critical': f"Critical (>={CRITICAL_RENDER_THRESHOLD}ms)",
    'very_slow': f"Very slow (>={VERY_SLOW_RENDER_THRESHOLD}ms)",
    'slow': f"Slow (>={SLOW_RENDER_THRESHOLD}ms)",
    None: f"Good (<{SLOW_RENDER_THRESHOLD}ms)",
}


class TraceFileError(ValueError):
    """
    Raised when a trace file cannot be read or is not JSON.
    """


def load_trace_file(path: Union[str, Path]) -> Any:
    """
    Read and parse a trace file.

    Args:
        path: Path to a JSON trace file

    Returns:
        Parsed JSON value

    Raises:
        TraceFileError: If the file cannot be read or parsed
    """
    trace_path = Path(path)

    try:
        with open(trace_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise TraceFileError(f"Cannot read trace file {trace_path}: {e}") from e
    except ValueError as e:
        raise TraceFileError(f"Trace file {trace_path} is not valid JSON: {e}") from e

    logger.debug(f"Loaded trace file {trace_path} ({trace_path.stat().st_size} bytes)")
    return data


def severity_label(duration_ms: float) -> str:
    """
    Get the display label for a render duration.

    Args:
        duration_ms: Duration in milliseconds

    Returns:
        Label quoting the matching threshold
    """
    return SEVERITY_LABELS[classify_duration(duration_ms)]


def format_duration(duration_ms: float) -> str:
    """
    Format a duration in milliseconds to a human-readable string.

    Args:
        duration_ms: Duration in milliseconds

    Returns:
        Formatted string (e.g., "12.5ms", "1.20s")
    """
    if duration_ms < 1000:
        return f"{duration_ms:.1f}ms"
    return f"{duration_ms / 1000:.2f}s"


def truncate(text: str, width: int) -> str:
    """
    Shorten text to a column width.

    Args:
        text: Text to shorten
        width: Maximum length

    Returns:
        Text, cut with an ellipsis if it was too long
    """
    if len(text) <= width:
        return text
    return text[:max(0, width - 3)] + '...'
