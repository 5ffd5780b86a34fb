# daygrid/dayview.py
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .config import GridConfig, normalize_config
from .geometry import (
    GridFrame,
    event_quads,
    frame_for,
    half_hour_divider_quads,
    hour_divider_quads,
    hour_label_quads,
    measured_height,
    quads_to_rects,
)
from .model import ColumnSpan, Direction, Rect, TimeRange
from .packer import PackResult, pack_columns
from .validate import (
    ConfigurationError,
    LayoutStateError,
    RangeError,
    check_handles,
    check_label_heights,
)

logger = logging.getLogger(__name__)

DirectionLike = Union[Direction, str]

_CONFIG_FIELDS = frozenset(f.name for f in fields(GridConfig))


@dataclass(frozen=True)
class DayLayout:
    """Everything the host needs to place and draw one pass, index-aligned with its views."""

    config: GridConfig
    direction: Direction
    container_width: int
    height: int
    minute_height: float
    frame: GridFrame

    hour_dividers: Tuple[Rect, ...]
    half_hour_dividers: Tuple[Rect, ...]
    hour_labels: Tuple[Rect, ...]

    events: Tuple[Rect, ...]
    event_ranges: Tuple[TimeRange, ...]
    event_handles: Tuple[Any, ...]
    column_spans: Tuple[Tuple[int, int], ...]
    column_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_hour": self.config.start_hour,
            "end_hour": self.config.end_hour,
            "direction": self.direction.value,
            "width": self.container_width,
            "height": self.height,
            "minute_height": self.minute_height,
            "column_count": self.column_count,
            "hour_dividers": [r.to_dict() for r in self.hour_dividers],
            "half_hour_dividers": [r.to_dict() for r in self.half_hour_dividers],
            "hour_labels": [r.to_dict() for r in self.hour_labels],
            "events": [
                {
                    "start_minute": rng.start_minute,
                    "end_minute": rng.end_minute,
                    "columns": list(span),
                    "rect": rect.to_dict(),
                }
                for rng, span, rect in zip(self.event_ranges, self.column_spans, self.events)
            ],
        }


def _as_direction(direction: DirectionLike) -> Direction:
    if isinstance(direction, Direction):
        return direction
    return Direction(str(direction).strip().lower())


class DayGrid:
    """
    Layout state for one rendered day.

    Lifecycle:
      - configure(...)       -> window/metrics change; recomputes if laid out and the
                                label count holds, else back to uninitialized
      - set_events(...)      -> filter to the window and repack; recomputes if laid out
      - compute_layout(...)  -> full pass, uninitialized -> laid-out

    Not thread-safe: callers serialize passes.
    """

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        self._config = normalize_config(config or GridConfig())
        self._ranges: List[TimeRange] = []
        self._handles: Optional[List[Any]] = None

        self._filtered_ranges: List[TimeRange] = []
        self._filtered_handles: List[Any] = []
        self._pack = PackResult()

        self._layout: Optional[DayLayout] = None
        self._last_pass: Optional[Tuple[int, Direction, Tuple[int, ...]]] = None

    # --- configuration -------------------------------------------------------

    @property
    def config(self) -> GridConfig:
        return self._config

    def configure(self, start_hour: Optional[int] = None, end_hour: Optional[int] = None, **metrics: Any) -> GridConfig:
        """Set the visible hour window and any pixel metrics (GridConfig field names).

        Out-of-range hours are clamped; an empty window falls back to the full day.
        Unknown setting names or non-numeric values raise ConfigurationError and
        leave the grid untouched.

        A laid-out grid is recomputed with the previous pass's width, direction and
        label heights while the hour label count stays the same; otherwise it goes
        back to uninitialized until the host supplies matching label heights.
        """
        unknown = sorted(k for k in metrics if k not in _CONFIG_FIELDS)
        if unknown:
            raise ConfigurationError(f"Unknown grid setting(s): {', '.join(unknown)}")

        changes: Dict[str, Any] = dict(metrics)
        if start_hour is not None:
            changes["start_hour"] = start_hour
        if end_hour is not None:
            changes["end_hour"] = end_hour

        try:
            cfg = normalize_config(replace(self._config, **changes))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid grid setting(s) {sorted(changes)}: {e}") from e

        previous_label_count = self._config.hour_label_count
        self._config = cfg
        self._refilter()

        if self._last_pass is not None and cfg.hour_label_count == previous_label_count:
            width, direction, label_heights = self._last_pass
            self.compute_layout(width, direction, label_heights)
        else:
            self._layout = None
            self._last_pass = None
        return self._config

    # --- events --------------------------------------------------------------

    def set_events(self, time_ranges: Optional[Sequence[TimeRange]], handles: Optional[Sequence[Any]] = None) -> None:
        """Replace the full event set.

        `handles` are opaque host objects (views, ids) carried alongside each range;
        when given they must match `time_ranges` one-to-one.
        """
        ranges = list(time_ranges or [])
        if handles is not None:
            check_handles(handles, ranges)

        self._ranges = ranges
        self._handles = list(handles) if handles is not None else None
        self._refilter()

        if self._last_pass is not None:
            width, direction, label_heights = self._last_pass
            self.compute_layout(width, direction, label_heights)

    def remove_events(self) -> List[Any]:
        """Drop every event; returns the handles that were set (safe to reuse)."""
        # Without host handles, the input indices are what was set.
        removed = list(self._handles) if self._handles is not None else list(range(len(self._ranges)))
        self.set_events(None)
        return removed

    def _refilter(self) -> None:
        start_minute = self._config.start_minute
        end_minute = self._config.end_minute

        self._filtered_ranges = []
        # Without host handles, the input index stands in for the handle.
        self._filtered_handles = []
        for i, rng in enumerate(self._ranges):
            if rng.end_minute > start_minute and rng.start_minute < end_minute:
                self._filtered_ranges.append(rng)
                self._filtered_handles.append(self._handles[i] if self._handles is not None else i)

        self._pack = pack_columns(self._filtered_ranges)
        dropped = len(self._ranges) - len(self._filtered_ranges)
        if dropped:
            logger.debug("dropped %d event(s) outside %d..%d", dropped, start_minute, end_minute)

    @property
    def filtered_ranges(self) -> Tuple[TimeRange, ...]:
        return tuple(self._filtered_ranges)

    @property
    def filtered_handles(self) -> Tuple[Any, ...]:
        return tuple(self._filtered_handles)

    @property
    def column_spans(self) -> Tuple[ColumnSpan, ...]:
        return tuple(ColumnSpan(s.start_column, s.end_column) for s in self._pack.spans)

    @property
    def column_count(self) -> int:
        return self._pack.column_count

    # --- layout --------------------------------------------------------------

    def compute_layout(
        self,
        container_width: int,
        direction: DirectionLike = Direction.LTR,
        label_heights: Sequence[int] = (),
    ) -> DayLayout:
        cfg = self._config
        direction = _as_direction(direction)
        heights = tuple(int(h) for h in label_heights)
        check_label_heights(heights, cfg.hour_label_count)
        check_handles(self._filtered_handles, self._filtered_ranges)

        width = int(container_width)
        frame = frame_for(cfg, width, direction, heights)

        hour_dividers = hour_divider_quads(cfg, frame.first_divider_top, frame.divider_start, frame.divider_end)
        half_hour_dividers = half_hour_divider_quads(cfg, frame.first_divider_top, frame.divider_start, frame.divider_end)
        hour_labels = hour_label_quads(cfg, heights, frame.first_divider_top, frame.label_start, frame.label_end)
        events = event_quads(
            cfg,
            self._filtered_ranges,
            self._pack.spans,
            self._pack.column_count,
            frame.first_divider_top,
            frame.minute_height,
            frame.divider_start,
            frame.divider_end,
        )

        layout = DayLayout(
            config=cfg,
            direction=direction,
            container_width=width,
            height=measured_height(cfg, frame, heights),
            minute_height=frame.minute_height,
            frame=frame,
            hour_dividers=tuple(quads_to_rects(hour_dividers, direction, width)),
            half_hour_dividers=tuple(quads_to_rects(half_hour_dividers, direction, width)),
            hour_labels=tuple(quads_to_rects(hour_labels, direction, width)),
            events=tuple(quads_to_rects(events, direction, width)),
            event_ranges=tuple(self._filtered_ranges),
            event_handles=tuple(self._filtered_handles),
            column_spans=tuple(s.as_tuple() for s in self._pack.spans),
            column_count=self._pack.column_count,
        )

        self._layout = layout
        self._last_pass = (width, direction, heights)
        logger.debug(
            "layout %d..%d width=%d dir=%s events=%d columns=%d height=%d",
            cfg.start_hour,
            cfg.end_hour,
            width,
            direction.value,
            len(layout.events),
            layout.column_count,
            layout.height,
        )
        return layout

    @property
    def is_laid_out(self) -> bool:
        return self._layout is not None

    @property
    def layout(self) -> DayLayout:
        return self._require_layout()

    def _require_layout(self) -> DayLayout:
        if self._layout is None:
            raise LayoutStateError("compute_layout() must be called before querying the grid")
        return self._layout

    # --- queries -------------------------------------------------------------

    def _hour_index(self, hour: int) -> int:
        cfg = self._config
        if hour < 0 or hour >= cfg.hour_label_count + cfg.start_hour or hour < cfg.start_hour:
            raise RangeError(f"Hour must be between {cfg.start_hour} and {cfg.end_hour} (got {hour})")
        return hour - cfg.start_hour

    def hour_top(self, hour: int) -> int:
        """Vertical offset of the top of `hour` (hour of day), e.g. for scrolling to it."""
        layout = self._require_layout()
        return layout.hour_dividers[self._hour_index(hour)].bottom

    def hour_bottom(self, hour: int) -> int:
        layout = self._require_layout()
        idx = self._hour_index(hour)
        if idx == self._config.hour_label_count - 1:
            return layout.hour_dividers[idx].bottom
        return layout.hour_dividers[idx + 1].top

    def first_event_top(self) -> int:
        events = self._require_layout().events
        return events[0].top if events else 0

    def first_event_bottom(self) -> int:
        events = self._require_layout().events
        return events[0].bottom if events else 0

    def last_event_top(self) -> int:
        events = self._require_layout().events
        return events[-1].top if events else 0

    def last_event_bottom(self) -> int:
        events = self._require_layout().events
        return events[-1].bottom if events else 0


__all__ = [
    "DayGrid",
    "DayLayout",
]
