from __future__ import annotations

import unittest

from daygrid.config import GridConfig
from daygrid.dayview import DayGrid
from daygrid.model import Direction, Rect, TimeRange
from daygrid.validate import ConfigurationError, LayoutStateError, PreconditionError, RangeError


def _grid_8_to_10(**kw) -> DayGrid:
    # usable half hour = 30px, 4 slots -> 120px for 120 minutes (1px per minute).
    cfg = GridConfig(start_hour=8, end_hour=10, divider_height=2, half_hour_height=28, **kw)
    return DayGrid(cfg)


class TestDayGridContract(unittest.TestCase):
    def test_queries_fail_before_layout(self) -> None:
        grid = _grid_8_to_10()
        self.assertFalse(grid.is_laid_out)
        with self.assertRaises(LayoutStateError):
            grid.hour_top(8)
        with self.assertRaises(LayoutStateError):
            grid.first_event_top()
        with self.assertRaises(LayoutStateError):
            _ = grid.layout

    def test_label_height_count_must_match(self) -> None:
        grid = _grid_8_to_10()
        with self.assertRaises(PreconditionError):
            grid.compute_layout(200, Direction.LTR, [10, 10])
        with self.assertRaises(PreconditionError):
            grid.compute_layout(200, Direction.LTR, [])
        self.assertFalse(grid.is_laid_out)

    def test_handle_count_must_match(self) -> None:
        grid = _grid_8_to_10()
        with self.assertRaises(PreconditionError):
            grid.set_events([TimeRange(480, 500)], handles=["a", "b"])

    def test_measured_height_and_minute_height(self) -> None:
        grid = _grid_8_to_10()
        layout = grid.compute_layout(200, Direction.LTR, [10, 10, 10])
        self.assertEqual(layout.minute_height, 1.0)
        # 120 usable + 5 (first label half) + 5 (last label half) + 2 (divider)
        self.assertEqual(layout.height, 132)
        self.assertEqual(len(layout.hour_dividers), 3)
        self.assertEqual(len(layout.half_hour_dividers), 2)
        self.assertEqual(len(layout.hour_labels), 3)

    def test_hour_top_and_bottom(self) -> None:
        grid = _grid_8_to_10()
        grid.compute_layout(200, Direction.LTR, [10, 10, 10])

        self.assertEqual(grid.hour_top(8), 7)
        self.assertEqual(grid.hour_top(9), 67)
        self.assertEqual(grid.hour_top(10), 127)
        self.assertEqual(grid.hour_bottom(8), 65)
        self.assertEqual(grid.hour_bottom(9), 125)
        self.assertEqual(grid.hour_bottom(10), 127)

    def test_hour_queries_outside_window_raise(self) -> None:
        grid = _grid_8_to_10()
        grid.compute_layout(200, Direction.LTR, [10, 10, 10])
        for bad in (-1, 7, 11, 24):
            with self.assertRaises(RangeError):
                grid.hour_top(bad)
            with self.assertRaises(IndexError):
                grid.hour_bottom(bad)

    def test_event_accessors(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events([TimeRange(480, 540), TimeRange(540, 600)])
        layout = grid.compute_layout(200, Direction.LTR, [10, 10, 10])

        self.assertEqual(layout.column_count, 1)
        self.assertEqual(grid.first_event_top(), 7)
        self.assertEqual(grid.first_event_bottom(), 65)
        self.assertEqual(grid.last_event_top(), 67)
        self.assertEqual(grid.last_event_bottom(), 125)

    def test_event_accessors_without_events(self) -> None:
        grid = _grid_8_to_10()
        grid.compute_layout(200, Direction.LTR, [10, 10, 10])
        self.assertEqual(grid.first_event_top(), 0)
        self.assertEqual(grid.first_event_bottom(), 0)
        self.assertEqual(grid.last_event_top(), 0)
        self.assertEqual(grid.last_event_bottom(), 0)

    def test_filtering_boundary(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events(
            [TimeRange(470, 480), TimeRange(470, 481), TimeRange(600, 620), TimeRange(470, 540)],
            handles=["ends-at-open", "one-minute-in", "starts-at-close", "straddles"],
        )
        self.assertEqual(grid.filtered_handles, ("one-minute-in", "straddles"))
        self.assertEqual(grid.filtered_ranges, (TimeRange(470, 481), TimeRange(470, 540)))

        layout = grid.compute_layout(200, Direction.LTR, [10, 10, 10])
        self.assertEqual(layout.event_handles, ("one-minute-in", "straddles"))
        self.assertEqual(len(layout.events), 2)
        # The straddling event is clipped to the window's opening boundary.
        self.assertEqual(layout.events[1].top, 5 + 0 + 2)

    def test_default_handles_are_input_indices(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events([TimeRange(0, 30), TimeRange(490, 520), TimeRange(500, 530)])
        self.assertEqual(grid.filtered_handles, (1, 2))

    def test_fixture_spans_through_grid(self) -> None:
        grid = DayGrid(GridConfig(divider_height=7, half_hour_height=28))
        grid.set_events([TimeRange(30, 180), TimeRange(90, 120), TimeRange(150, 300), TimeRange(150, 300)])
        self.assertEqual([s.as_tuple() for s in grid.column_spans], [(0, 1), (1, 3), (1, 2), (2, 3)])
        self.assertEqual(grid.column_count, 3)

        layout = grid.compute_layout(200, Direction.LTR, [20] * 25)
        self.assertEqual(layout.column_spans, ((0, 1), (1, 3), (1, 2), (2, 3)))

    def test_rtl_mirrors_labels_dividers_and_events(self) -> None:
        grid = _grid_8_to_10(hour_label_width=30, hour_label_margin_end=10, padding_left=4, padding_right=6)
        grid.set_events([TimeRange(480, 540)])

        ltr = grid.compute_layout(200, Direction.LTR, [10, 10, 10])
        self.assertEqual((ltr.hour_labels[0].left, ltr.hour_labels[0].right), (4, 34))
        self.assertEqual((ltr.hour_dividers[0].left, ltr.hour_dividers[0].right), (44, 194))
        self.assertEqual((ltr.events[0].left, ltr.events[0].right), (44, 194))

        rtl = grid.compute_layout(200, "rtl", [10, 10, 10])
        self.assertIs(rtl.direction, Direction.RTL)
        self.assertEqual((rtl.hour_labels[0].left, rtl.hour_labels[0].right), (164, 194))
        self.assertEqual((rtl.hour_dividers[0].left, rtl.hour_dividers[0].right), (4, 154))
        self.assertEqual((rtl.events[0].left, rtl.events[0].right), (4, 154))
        self.assertEqual(rtl.hour_dividers[0].top, ltr.hour_dividers[0].top)

    def test_set_events_after_layout_recomputes(self) -> None:
        grid = _grid_8_to_10()
        grid.compute_layout(200, Direction.RTL, [10, 10, 10])
        grid.set_events([TimeRange(480, 540)], handles=["only"])

        self.assertTrue(grid.is_laid_out)
        layout = grid.layout
        self.assertEqual(layout.direction, Direction.RTL)
        self.assertEqual(layout.event_handles, ("only",))
        self.assertEqual(len(layout.events), 1)

    def test_remove_events_returns_handles(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events([TimeRange(480, 500), TimeRange(490, 520)], handles=["a", "b"])
        grid.compute_layout(200, Direction.LTR, [10, 10, 10])

        self.assertEqual(grid.remove_events(), ["a", "b"])
        self.assertEqual(grid.layout.events, ())
        self.assertEqual(grid.column_count, 0)

    def test_configure_resets_layout_and_recounts(self) -> None:
        grid = DayGrid()
        grid.compute_layout(300, Direction.LTR, [12] * 25)
        cfg = grid.configure(8, 12)

        self.assertFalse(grid.is_laid_out)
        self.assertEqual((cfg.start_hour, cfg.end_hour), (8, 12))
        self.assertEqual(cfg.hour_label_count, 5)
        with self.assertRaises(PreconditionError):
            grid.compute_layout(300, Direction.LTR, [12] * 25)
        grid.compute_layout(300, Direction.LTR, [12] * 5)
        self.assertTrue(grid.is_laid_out)

    def test_configure_metrics_recomputes_laid_out_grid(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events([TimeRange(480, 540)])
        before = grid.compute_layout(200, Direction.RTL, [10, 10, 10])
        self.assertEqual(before.events[0], Rect(0, 7, 200, 65))

        grid.configure(event_margin=4)

        self.assertTrue(grid.is_laid_out)
        after = grid.layout
        self.assertIs(after.direction, Direction.RTL)
        self.assertEqual(after.events[0], Rect(4, 11, 196, 61))
        self.assertEqual(grid.first_event_top(), 11)
        self.assertEqual(grid.hour_top(9), 67)

    def test_configure_window_shift_with_same_label_count_recomputes(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events([TimeRange(480, 540), TimeRange(600, 630)])
        grid.compute_layout(200, Direction.LTR, [10, 10, 10])

        cfg = grid.configure(9, 11)

        self.assertTrue(grid.is_laid_out)
        self.assertEqual((cfg.start_hour, cfg.end_hour), (9, 11))
        self.assertEqual(grid.layout.event_ranges, (TimeRange(600, 630),))
        self.assertEqual(grid.hour_top(10), 67)
        with self.assertRaises(RangeError):
            grid.hour_top(8)

    def test_configure_rejects_unknown_setting(self) -> None:
        grid = _grid_8_to_10()
        grid.compute_layout(200, Direction.LTR, [10, 10, 10])

        with self.assertRaises(ConfigurationError) as cm:
            grid.configure(event_margn=4)
        self.assertIn("event_margn", str(cm.exception))
        self.assertTrue(grid.is_laid_out)
        self.assertEqual(grid.config.event_margin, 0)

    def test_configure_rejects_non_numeric_values(self) -> None:
        grid = _grid_8_to_10()
        with self.assertRaises(ConfigurationError):
            grid.configure("nine", 11)
        with self.assertRaises(ConfigurationError):
            grid.configure(divider_height="thick")
        self.assertEqual((grid.config.start_hour, grid.config.divider_height), (8, 2))

    def test_remove_events_without_handles_returns_indices(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events([TimeRange(0, 30), TimeRange(480, 500), TimeRange(490, 520)])
        self.assertEqual(grid.remove_events(), [0, 1, 2])
        self.assertEqual(grid.filtered_ranges, ())

    def test_narrow_columns_return_rects_as_computed(self) -> None:
        grid = _grid_8_to_10(event_margin=3)
        grid.set_events([TimeRange(480, 540)] * 10)
        layout = grid.compute_layout(60, Direction.LTR, [10, 10, 10])

        self.assertEqual(layout.column_count, 10)
        first = layout.events[0]
        # 6px columns minus 2 * 3px margin leave no width.
        self.assertEqual((first.left, first.right), (3, 3))
        self.assertEqual(first.width, 0)
        self.assertEqual((first.top, first.bottom), (10, 62))

    def test_configure_refilters_events(self) -> None:
        grid = DayGrid()
        grid.set_events([TimeRange(60, 120), TimeRange(600, 660)])
        self.assertEqual(len(grid.filtered_ranges), 2)
        grid.configure(8, 12)
        self.assertEqual(grid.filtered_ranges, (TimeRange(600, 660),))

    def test_configure_clamps_and_falls_back(self) -> None:
        grid = DayGrid()
        cfg = grid.configure(-3, 6)
        self.assertEqual((cfg.start_hour, cfg.end_hour), (0, 6))

        with self.assertLogs("daygrid.config", level="WARNING"):
            cfg = grid.configure(25, 30)
        self.assertEqual((cfg.start_hour, cfg.end_hour), (0, 24))

    def test_configure_metrics(self) -> None:
        grid = DayGrid()
        cfg = grid.configure(divider_height=3, event_margin=-2)
        self.assertEqual(cfg.divider_height, 3)
        self.assertEqual(cfg.event_margin, 0)
        self.assertEqual((cfg.start_hour, cfg.end_hour), (0, 24))

    def test_layout_to_dict(self) -> None:
        grid = _grid_8_to_10()
        grid.set_events([TimeRange(480, 540)])
        d = grid.compute_layout(200, Direction.LTR, [10, 10, 10]).to_dict()

        self.assertEqual(d["direction"], "ltr")
        self.assertEqual(d["column_count"], 1)
        self.assertEqual(d["events"][0]["columns"], [0, 1])
        self.assertEqual(d["hour_dividers"][0], Rect(0, 5, 200, 7).to_dict())


if __name__ == "__main__":
    unittest.main(verbosity=2)
