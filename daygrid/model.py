# daygrid/model.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple


class Direction(str, Enum):
    LTR = "ltr"
    RTL = "rtl"

    @property
    def is_rtl(self) -> bool:
        return self is Direction.RTL


@dataclass(frozen=True)
class TimeRange:
    """Start and end of an event, in minutes since the start of the rendered day."""

    start_minute: int
    end_minute: int

    def __post_init__(self) -> None:
        if int(self.end_minute) <= int(self.start_minute):
            raise ValueError(
                f"end_minute must be after start_minute (got {self.start_minute}..{self.end_minute})"
            )

    def conflicts(self, other: "TimeRange") -> bool:
        # Open-interval overlap: touching endpoints do not conflict.
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute

    @property
    def duration_min(self) -> int:
        return self.end_minute - self.start_minute


@dataclass
class ColumnSpan:
    start_column: int = -1
    end_column: int = -1

    @property
    def width(self) -> int:
        return self.end_column - self.start_column

    def as_tuple(self) -> tuple[int, int]:
        return (self.start_column, self.end_column)


class Quad(NamedTuple):
    """Direction-agnostic box: `start`/`end` are leading/trailing edges in LTR terms."""

    start: int
    top: int
    end: int
    bottom: int


@dataclass(frozen=True)
class Rect:
    """Screen rectangle, already mirrored for the layout direction.

    `left <= right` and `top <= bottom` hold for any sane metrics. Margins wider than
    a column, or a minute scale too small for the event insets, yield rects with
    zero or negative width/height; they are returned as computed, so hosts that
    cannot place such views should check `width`/`height` first.
    """

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def to_dict(self) -> Dict[str, Any]:
        return {"left": self.left, "top": self.top, "right": self.right, "bottom": self.bottom}


__all__ = [
    "ColumnSpan",
    "Direction",
    "Quad",
    "Rect",
    "TimeRange",
]
