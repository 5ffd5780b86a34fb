"""Error types and precondition checks (library-facing)."""

from __future__ import annotations

from typing import Sequence

MIN_START_HOUR = 0
MAX_END_HOUR = 24


class DayGridError(ValueError):
    """Base class for layout engine failures."""


class ConfigurationError(DayGridError):
    """Raised when an hour window is empty or inverted after clamping."""


class PreconditionError(DayGridError):
    """Raised when host-supplied lists do not line up with the current grid."""


class LayoutStateError(PreconditionError):
    """Raised when the grid is queried before a layout pass has run."""


class RangeError(DayGridError, IndexError):
    """Raised for hour queries outside the laid-out window."""


def clamp_hour(hour: int) -> int:
    return max(MIN_START_HOUR, min(MAX_END_HOUR, int(hour)))


def check_hour_range(start_hour: int, end_hour: int) -> tuple[int, int]:
    """Clamp both hours to [0, 24] and require a non-empty window."""
    start = clamp_hour(start_hour)
    end = clamp_hour(end_hour)
    if end <= start:
        raise ConfigurationError(
            f"hour window is empty after clamping: {start_hour}..{end_hour} -> {start}..{end}"
        )
    return start, end


def check_label_heights(label_heights: Sequence[int], expected: int) -> None:
    if len(label_heights) == 0:
        raise PreconditionError("No hour label heights; one per hour label is required before layout")
    if len(label_heights) != expected:
        raise PreconditionError(
            f"Inconsistent number of hour labels, there should be {expected} but {len(label_heights)} were found"
        )


def check_handles(handles: Sequence[object], ranges: Sequence[object]) -> None:
    if len(handles) != len(ranges):
        raise PreconditionError(
            "Inconsistent number of event handles or event time ranges, "
            f"they should be equal in length (handles={len(handles)}, ranges={len(ranges)})"
        )


__all__ = [
    "MAX_END_HOUR",
    "MIN_START_HOUR",
    "ConfigurationError",
    "DayGridError",
    "LayoutStateError",
    "PreconditionError",
    "RangeError",
    "check_handles",
    "check_hour_range",
    "check_label_heights",
    "clamp_hour",
]
