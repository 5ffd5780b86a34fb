# daygrid/config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping

from .validate import MAX_END_HOUR, MIN_START_HOUR, ConfigurationError, check_hour_range

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60
MIN_DURATION_MINUTES = 15


@dataclass(frozen=True)
class GridConfig:
    start_hour: int = MIN_START_HOUR
    end_hour: int = MAX_END_HOUR

    # Pixel metrics
    divider_height: int = 0
    half_hour_height: int = 0      # excludes the divider
    hour_label_width: int = 0
    hour_label_margin_end: int = 0
    event_margin: int = 0
    min_duration_min: int = MIN_DURATION_MINUTES

    padding_left: int = 0
    padding_top: int = 0
    padding_right: int = 0
    padding_bottom: int = 0

    # Draw-only (SVG renderer)
    hour_divider_color: str = "#c8c8c8"
    half_hour_divider_color: str = "#e6e6e6"

    # Derived values are always computed from the current hours.

    @property
    def start_minute(self) -> int:
        return self.start_hour * MINUTES_PER_HOUR

    @property
    def end_minute(self) -> int:
        return self.end_hour * MINUTES_PER_HOUR

    @property
    def hour_count(self) -> int:
        return self.end_hour - self.start_hour

    @property
    def minute_count(self) -> int:
        return self.hour_count * MINUTES_PER_HOUR

    @property
    def hour_divider_count(self) -> int:
        # One more than the hour count so the closing boundary gets a divider too.
        return self.hour_count + 1

    @property
    def half_hour_divider_count(self) -> int:
        return self.hour_count

    @property
    def hour_label_count(self) -> int:
        return self.hour_count + 1

    @property
    def usable_half_hour_height(self) -> int:
        return self.half_hour_height + self.divider_height

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "GridConfig":
        """Build a config from a plain dict (JSON config files, CLI payloads).

        Unknown keys are ignored; missing or falsy numeric values use the defaults.
        """
        d = cls()

        def _int(key: str, default: int) -> int:
            v = cfg.get(key, default)
            if v is None or isinstance(v, bool):
                return default
            return int(v)

        def _str(key: str, default: str) -> str:
            v = cfg.get(key)
            return v.strip() if isinstance(v, str) and v.strip() else default

        out = cls(
            start_hour=_int("start_hour", d.start_hour),
            end_hour=_int("end_hour", d.end_hour),
            divider_height=_int("divider_height", d.divider_height),
            half_hour_height=_int("half_hour_height", d.half_hour_height),
            hour_label_width=_int("hour_label_width", d.hour_label_width),
            hour_label_margin_end=_int("hour_label_margin_end", d.hour_label_margin_end),
            event_margin=_int("event_margin", d.event_margin),
            min_duration_min=_int("min_duration_min", d.min_duration_min) or d.min_duration_min,
            padding_left=_int("padding_left", d.padding_left),
            padding_top=_int("padding_top", d.padding_top),
            padding_right=_int("padding_right", d.padding_right),
            padding_bottom=_int("padding_bottom", d.padding_bottom),
            hour_divider_color=_str("hour_divider_color", d.hour_divider_color),
            half_hour_divider_color=_str("half_hour_divider_color", d.half_hour_divider_color),
        )
        return normalize_config(out)


def normalize_config(cfg: GridConfig) -> GridConfig:
    """Clamp hours and pixel metrics; never rejects.

    An hour window that is still empty after clamping falls back to the full day.
    """
    try:
        start_hour, end_hour = check_hour_range(cfg.start_hour, cfg.end_hour)
    except ConfigurationError as e:
        logger.warning("%s; falling back to %d..%d", e, MIN_START_HOUR, MAX_END_HOUR)
        start_hour, end_hour = MIN_START_HOUR, MAX_END_HOUR

    return replace(
        cfg,
        start_hour=start_hour,
        end_hour=end_hour,
        divider_height=max(0, int(cfg.divider_height)),
        half_hour_height=max(0, int(cfg.half_hour_height)),
        hour_label_width=max(0, int(cfg.hour_label_width)),
        hour_label_margin_end=max(0, int(cfg.hour_label_margin_end)),
        event_margin=max(0, int(cfg.event_margin)),
        min_duration_min=max(1, int(cfg.min_duration_min)),
        padding_left=max(0, int(cfg.padding_left)),
        padding_top=max(0, int(cfg.padding_top)),
        padding_right=max(0, int(cfg.padding_right)),
        padding_bottom=max(0, int(cfg.padding_bottom)),
    )


__all__ = [
    "MINUTES_PER_HOUR",
    "MIN_DURATION_MINUTES",
    "GridConfig",
    "normalize_config",
]
