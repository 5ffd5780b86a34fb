# daygrid/render/svg.py
from __future__ import annotations

from html import escape
from typing import List, Optional, Sequence

from daygrid.dayview import DayLayout
from daygrid.model import Rect
from daygrid.util.timeparse import format_minute

_EVENT_FILL = "#4f86c6"
_EVENT_TEXT = "#ffffff"
_LABEL_TEXT = "#555555"


def _rect(r: Rect, fill: str, extra: str = "") -> str:
    return (
        f'<rect x="{r.left}" y="{r.top}" width="{max(0, r.width)}" height="{max(0, r.height)}" '
        f'fill="{escape(fill)}"{extra}/>'
    )


def _text(x: int, y: int, body: str, fill: str, anchor: str) -> str:
    return (
        f'<text x="{x}" y="{y}" fill="{fill}" font-size="11" font-family="sans-serif" '
        f'text-anchor="{anchor}" dominant-baseline="middle">{escape(body)}</text>'
    )


def hour_label_texts(layout: DayLayout) -> List[str]:
    start = layout.config.start_hour
    return [format_minute((start + i) * 60) for i in range(len(layout.hour_labels))]


def build_svg(layout: DayLayout, event_labels: Optional[Sequence[str]] = None) -> str:
    """Draw pass: dividers straight onto the canvas, labels and events at their rects.

    `event_labels` is index-aligned with `layout.events`; missing entries fall back
    to the event's time range.
    """
    cfg = layout.config
    rtl = layout.direction.is_rtl
    anchor = "start" if rtl else "end"

    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{layout.container_width}" height="{layout.height}" '
        f'viewBox="0 0 {layout.container_width} {layout.height}" direction="{layout.direction.value}">'
    ]

    for r in layout.hour_dividers:
        parts.append(_rect(r, cfg.hour_divider_color))
    for r in layout.half_hour_dividers:
        parts.append(_rect(r, cfg.half_hour_divider_color))

    for r, body in zip(layout.hour_labels, hour_label_texts(layout)):
        # Text hugs the edge facing the grid.
        x = r.left if rtl else r.right
        parts.append(_text(x, r.top + r.height // 2, body, _LABEL_TEXT, anchor))

    labels = list(event_labels or [])
    for i, (r, rng) in enumerate(zip(layout.events, layout.event_ranges)):
        body = labels[i] if i < len(labels) and labels[i] else (
            f"{format_minute(rng.start_minute)}-{format_minute(rng.end_minute)}"
        )
        parts.append(_rect(r, _EVENT_FILL, ' rx="3"'))
        x = r.right - 4 if rtl else r.left + 4
        parts.append(
            f'<text x="{x}" y="{r.top + 12}" fill="{_EVENT_TEXT}" font-size="11" font-family="sans-serif" '
            f'text-anchor="{"end" if rtl else "start"}">{escape(body)}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts) + "\n"
