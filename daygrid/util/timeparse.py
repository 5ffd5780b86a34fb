# daygrid/util/timeparse.py
from __future__ import annotations

import re
from typing import Tuple, Union

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_HOUR_RE = re.compile(r"^(\d{1,2})(?::(00))?$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    """Parse `HH:MM`; `24:00` is accepted as the closing boundary of the day."""
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if (hh, mm) == (24, 0):
        return hh, mm
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_minute(v: Union[int, str]) -> int:
    """Minutes since the start of the day, from an int or an `HH:MM` string."""
    if isinstance(v, bool):
        raise ValueError(f"Invalid minute value: {v!r}")
    if isinstance(v, int):
        return v
    s = str(v).strip()
    if s.lstrip("-").isdigit():
        return int(s)
    hh, mm = parse_hhmm(s)
    return hh * 60 + mm


def parse_hour_window(s: str) -> Tuple[int, int]:
    """Parse `08-18` or `08:00-18:00` into whole hours (start, end)."""
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("hours must be like 08-18 or 08:00-18:00")
    hours = []
    for p in parts:
        m = _HOUR_RE.match(p.strip())
        if not m:
            raise ValueError(f"Invalid hour (whole hours only): {p.strip()!r}")
        hours.append(int(m.group(1)))
    start, end = hours
    if not (0 <= start <= 24 and 0 <= end <= 24):
        raise ValueError(f"hours must be within 0-24: {s!r}")
    if end <= start:
        raise ValueError("hours end must be after start")
    return start, end


def format_minute(minute: int) -> str:
    return f"{minute // 60:02d}:{minute % 60:02d}"
