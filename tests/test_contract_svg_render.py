from __future__ import annotations

import unittest

from daygrid.config import GridConfig
from daygrid.dayview import DayGrid
from daygrid.model import Direction, TimeRange
from daygrid.render.svg import build_svg, hour_label_texts


class TestSvgRenderContract(unittest.TestCase):
    def _layout(self, direction: Direction):
        grid = DayGrid(
            GridConfig(
                start_hour=9,
                end_hour=11,
                divider_height=1,
                half_hour_height=19,
                hour_label_width=40,
                hour_label_margin_end=8,
                hour_divider_color="#111111",
                half_hour_divider_color="#999999",
            )
        )
        grid.set_events([TimeRange(540, 600), TimeRange(560, 575)], handles=["Plan <A>", ""])
        return grid.compute_layout(240, direction, [14, 14, 14])

    def test_draws_every_rect(self) -> None:
        layout = self._layout(Direction.LTR)
        svg = build_svg(layout, event_labels=list(layout.event_handles))

        self.assertTrue(svg.startswith("<svg"))
        self.assertTrue(svg.rstrip().endswith("</svg>"))
        self.assertEqual(svg.count('fill="#111111"'), len(layout.hour_dividers))
        self.assertEqual(svg.count('fill="#999999"'), len(layout.half_hour_dividers))
        self.assertEqual(svg.count("<rect"), 3 + 2 + 2)

    def test_labels_are_escaped_and_defaulted(self) -> None:
        layout = self._layout(Direction.LTR)
        svg = build_svg(layout, event_labels=list(layout.event_handles))

        self.assertIn("Plan &lt;A&gt;", svg)
        # Empty label falls back to the event's time range.
        self.assertIn("09:20-09:35", svg)

    def test_hour_label_texts(self) -> None:
        layout = self._layout(Direction.RTL)
        self.assertEqual(hour_label_texts(layout), ["09:00", "10:00", "11:00"])
        self.assertIn('direction="rtl"', build_svg(layout))


if __name__ == "__main__":
    unittest.main(verbosity=2)
