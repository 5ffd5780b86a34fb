# daygrid/geometry.py
"""
Pixel geometry for the day grid.

Every rectangle is built from a direction-agnostic Quad and mirrored exactly once,
in `to_rect`. Column and minute math above that point never looks at direction.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from .config import GridConfig
from .model import ColumnSpan, Direction, Quad, Rect, TimeRange


@dataclass(frozen=True)
class GridFrame:
    """Horizontal and vertical anchors shared by all rects of one layout pass."""

    container_width: int
    first_divider_top: int
    label_start: int
    label_end: int
    divider_start: int
    divider_end: int
    minute_height: float


def mirror(quad: Quad, container_width: int) -> Quad:
    return Quad(container_width - quad.end, quad.top, container_width - quad.start, quad.bottom)


def to_rect(quad: Quad, direction: Direction, container_width: int) -> Rect:
    if direction.is_rtl:
        quad = mirror(quad, container_width)
    return Rect(left=quad.start, top=quad.top, right=quad.end, bottom=quad.bottom)


def round_px(value: float) -> int:
    # Half-up, so .5 offsets land on the same pixel regardless of parity.
    return int(math.floor(value + 0.5))


def hour_divider_quads(cfg: GridConfig, first_divider_top: int, divider_start: int, divider_end: int) -> List[Quad]:
    step = cfg.usable_half_hour_height
    out: List[Quad] = []
    for i in range(cfg.hour_divider_count):
        top = first_divider_top + i * 2 * step
        out.append(Quad(divider_start, top, divider_end, top + cfg.divider_height))
    return out


def half_hour_divider_quads(cfg: GridConfig, first_divider_top: int, divider_start: int, divider_end: int) -> List[Quad]:
    step = cfg.usable_half_hour_height
    out: List[Quad] = []
    for i in range(cfg.half_hour_divider_count):
        top = first_divider_top + (i * 2 + 1) * step
        out.append(Quad(divider_start, top, divider_end, top + cfg.divider_height))
    return out


def hour_label_quads(
    cfg: GridConfig,
    label_heights: Sequence[int],
    first_divider_top: int,
    label_start: int,
    label_end: int,
) -> List[Quad]:
    """Each label is vertically centered on its hour divider."""
    out: List[Quad] = []
    for i, height in enumerate(label_heights):
        top = first_divider_top + cfg.usable_half_hour_height * i * 2 - int(height) // 2
        out.append(Quad(label_start, top, label_end, top + int(height)))
    return out


def clip_to_window(rng: TimeRange, cfg: GridConfig) -> tuple[int, int]:
    """Return (start_minute, duration) of `rng` inside the visible window.

    Events shorter than the minimum duration are stretched to it and pinned to the
    window's closing boundary.
    """
    start = max(cfg.start_minute, rng.start_minute)
    duration = min(cfg.end_minute, rng.end_minute) - start
    if duration < cfg.min_duration_min:
        duration = cfg.min_duration_min
        start = cfg.end_minute - duration
    return start, duration


def event_quads(
    cfg: GridConfig,
    ranges: Sequence[TimeRange],
    spans: Sequence[ColumnSpan],
    column_count: int,
    first_divider_top: int,
    minute_height: float,
    divider_start: int,
    divider_end: int,
) -> List[Quad]:
    column_width = (divider_end - divider_start) // column_count if column_count > 0 else 0
    margin = cfg.event_margin

    out: List[Quad] = []
    for rng, span in zip(ranges, spans):
        start_minute, duration = clip_to_window(rng, cfg)

        start = span.start_column * column_width + divider_start + margin
        end = start + (span.end_column - span.start_column) * column_width - margin * 2

        top_offset = round_px((start_minute - cfg.start_minute) * minute_height)
        top = first_divider_top + top_offset + cfg.divider_height + margin
        bottom = top + round_px(duration * minute_height) - margin * 2 - cfg.divider_height
        out.append(Quad(start, top, end, bottom))
    return out


def frame_for(
    cfg: GridConfig,
    container_width: int,
    direction: Direction,
    label_heights: Sequence[int],
) -> GridFrame:
    """Measure pass: derive the anchors every rect of the pass hangs off."""
    leading_pad = cfg.padding_right if direction.is_rtl else cfg.padding_left
    trailing_pad = cfg.padding_left if direction.is_rtl else cfg.padding_right

    label_start = leading_pad
    label_end = label_start + cfg.hour_label_width

    first_divider_top = (int(label_heights[0]) // 2 if label_heights else 0) + cfg.padding_top

    usable_height = grid_usable_height(cfg)
    minute_height = usable_height / cfg.minute_count if cfg.minute_count > 0 else 0.0

    return GridFrame(
        container_width=int(container_width),
        first_divider_top=first_divider_top,
        label_start=label_start,
        label_end=label_end,
        divider_start=label_end + cfg.hour_label_margin_end,
        divider_end=int(container_width) - trailing_pad,
        minute_height=minute_height,
    )


def grid_usable_height(cfg: GridConfig) -> int:
    return (cfg.hour_divider_count + cfg.half_hour_divider_count - 1) * cfg.usable_half_hour_height


def measured_height(cfg: GridConfig, frame: GridFrame, label_heights: Sequence[int]) -> int:
    last_divider_margin_bottom = int(label_heights[-1]) // 2 if len(label_heights) > 1 else 0
    vertical_padding = frame.first_divider_top + last_divider_margin_bottom + cfg.padding_bottom + cfg.divider_height
    return grid_usable_height(cfg) + vertical_padding


def quads_to_rects(quads: Sequence[Quad], direction: Direction, container_width: int) -> List[Rect]:
    return [to_rect(q, direction, container_width) for q in quads]


__all__ = [
    "GridFrame",
    "clip_to_window",
    "event_quads",
    "frame_for",
    "grid_usable_height",
    "half_hour_divider_quads",
    "hour_divider_quads",
    "hour_label_quads",
    "measured_height",
    "mirror",
    "quads_to_rects",
    "round_px",
    "to_rect",
]
