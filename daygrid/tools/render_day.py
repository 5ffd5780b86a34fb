#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Tuple

from daygrid.config import GridConfig
from daygrid.dayview import DayGrid
from daygrid.model import Direction, TimeRange
from daygrid.render.svg import build_svg
from daygrid.util.timeparse import parse_hour_window, parse_minute
from daygrid.validate import ConfigurationError, PreconditionError, check_hour_range

logger = logging.getLogger(__name__)


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daygrid-render] ERROR: {msg}", file=sys.stderr)
    return rc


def _load_input(path: Path) -> Tuple[Dict[str, Any], List[Any]]:
    """Accept either a bare event list or {"config": {...}, "events": [...]}."""
    obj = json.loads(path.read_text(encoding="utf-8", errors="replace"))
    if isinstance(obj, list):
        return {}, obj
    if not isinstance(obj, dict):
        raise ValueError(f"input must be a JSON list or object; got {type(obj).__name__}")
    cfg = obj.get("config") or {}
    events = obj.get("events") or []
    if not isinstance(cfg, dict):
        raise ValueError("config must be an object")
    if not isinstance(events, list):
        raise ValueError("events must be a list")
    return cfg, events


def _parse_events(raw: List[Any]) -> Tuple[List[TimeRange], List[str]]:
    ranges: List[TimeRange] = []
    labels: List[str] = []
    for i, ev in enumerate(raw):
        if not isinstance(ev, dict):
            raise ValueError(f"events[{i}] must be an object")
        try:
            rng = TimeRange(parse_minute(ev.get("start")), parse_minute(ev.get("end")))
        except (TypeError, ValueError) as e:
            raise ValueError(f"events[{i}]: {e}") from e
        ranges.append(rng)
        labels.append(str(ev.get("label") or ""))
    return ranges, labels


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="daygrid-render",
        description="Lay out one day's events on an hour grid and write the result as JSON or SVG.",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Input JSON: event list, or {config, events}")
    ap.add_argument("--out", default=None, help="Output path (default: stdout)")
    ap.add_argument("--format", choices=("json", "svg"), default="json", help="Output format (default: json)")
    ap.add_argument("--hours", default=None, help="Visible hour window, e.g. 08-18 (default: config or 00-24)")
    ap.add_argument("--width", type=int, default=360, help="Container width in pixels (default: 360)")
    ap.add_argument("--rtl", action="store_true", help="Lay out right-to-left")
    ap.add_argument("--label-height", type=int, default=14, help="Measured height of each hour label (default: 14)")
    ap.add_argument("--divider-height", type=int, default=None, help="Divider thickness in pixels")
    ap.add_argument("--half-hour-height", type=int, default=None, help="Half-hour slot height, excluding the divider")
    ap.add_argument("--hour-label-width", type=int, default=None, help="Hour label column width")
    ap.add_argument("--hour-label-margin-end", type=int, default=None, help="Gap between labels and the grid")
    ap.add_argument("--event-margin", type=int, default=None, help="Inset around each event")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    ns = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    in_path = Path(ns.in_json)
    if not in_path.exists():
        return _die(f"Missing input JSON: {in_path}")

    try:
        cfg_raw, events_raw = _load_input(in_path)
        ranges, labels = _parse_events(events_raw)
    except Exception as e:
        return _die(f"Failed to load input: {in_path} ({e})")

    hours = None
    if ns.hours:
        try:
            hours = parse_hour_window(ns.hours)
        except ValueError as e:
            return _die(f"Invalid --hours value: {e}")
    elif "start_hour" in cfg_raw or "end_hour" in cfg_raw:
        # The engine would silently fall back to the full day; be loud at the edge instead.
        try:
            check_hour_range(cfg_raw.get("start_hour", 0), cfg_raw.get("end_hour", 24))
        except (ConfigurationError, TypeError, ValueError) as e:
            return _die(f"Invalid config hours: {e}")

    # Sensible drawing defaults; config file and flags override.
    defaults = {
        "divider_height": 1,
        "half_hour_height": 24,
        "hour_label_width": 40,
        "hour_label_margin_end": 8,
        "event_margin": 2,
    }
    try:
        cfg = GridConfig.from_mapping({**defaults, **cfg_raw})
    except (TypeError, ValueError) as e:
        return _die(f"Invalid config: {e}")
    if hours is not None:
        cfg = replace(cfg, start_hour=hours[0], end_hour=hours[1])

    overrides = {
        "divider_height": ns.divider_height,
        "half_hour_height": ns.half_hour_height,
        "hour_label_width": ns.hour_label_width,
        "hour_label_margin_end": ns.hour_label_margin_end,
        "event_margin": ns.event_margin,
    }
    cfg = replace(cfg, **{k: int(v) for k, v in overrides.items() if v is not None})

    grid = DayGrid(cfg)
    grid.set_events(ranges, handles=labels)
    direction = Direction.RTL if ns.rtl else Direction.LTR

    try:
        layout = grid.compute_layout(ns.width, direction, [ns.label_height] * grid.config.hour_label_count)
    except PreconditionError as e:
        return _die(f"Layout failed: {e}", rc=3)

    if ns.format == "svg":
        text = build_svg(layout, event_labels=[str(h) for h in layout.event_handles])
    else:
        data = layout.to_dict()
        for ev, label in zip(data["events"], layout.event_handles):
            ev["label"] = label
        text = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n"

    if not ns.out:
        sys.stdout.write(text)
        return 0

    out = Path(ns.out).expanduser()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8", newline="\n")
    logger.info("wrote %s (%d events, %d columns)", out, len(layout.events), layout.column_count)
    print(f"[daygrid-render] OK: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
