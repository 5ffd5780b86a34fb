"""daygrid.api

Stable *library* entrypoint for DAYGRID.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from daygrid.config import MIN_DURATION_MINUTES, GridConfig, normalize_config
from daygrid.dayview import DayGrid, DayLayout
from daygrid.geometry import mirror, to_rect
from daygrid.model import ColumnSpan, Direction, Quad, Rect, TimeRange
from daygrid.packer import PackResult, pack_columns
from daygrid.validate import (
    ConfigurationError,
    DayGridError,
    LayoutStateError,
    PreconditionError,
    RangeError,
)


__all__ = [
    "MIN_DURATION_MINUTES",
    "ColumnSpan",
    "ConfigurationError",
    "DayGrid",
    "DayGridError",
    "DayLayout",
    "Direction",
    "GridConfig",
    "LayoutStateError",
    "PackResult",
    "PreconditionError",
    "Quad",
    "RangeError",
    "Rect",
    "TimeRange",
    "mirror",
    "normalize_config",
    "pack_columns",
    "to_rect",
]
