from __future__ import annotations

import io
import math
import unittest

import numpy as np

from textplot import (
    AxisStyle,
    Bars,
    Chart,
    ChartConfig,
    ConfigurationError,
    Continuous,
    Interval,
    Lines,
    PlotDataError,
    Points,
    chart,
)


BLANK = "\u2800"
PEAK = [(-1.0, -1.0), (0.0, 1.0), (1.0, -1.0)]


def _rows_by_column(dots: np.ndarray) -> list[list[int]]:
    return [np.flatnonzero(dots[:, col]).tolist() for col in range(dots.shape[1])]


class ChartConfigurationTests(unittest.TestCase):
    def test_degenerate_domain_is_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            Chart(xmin=5.0, xmax=5.0)
        with self.assertRaises(ConfigurationError):
            Chart(ymin=2.0, ymax=1.0)

    def test_one_sided_limits_are_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            Chart(xmin=1.0)
        with self.assertRaises(ConfigurationError):
            Chart(ymax=1.0)

    def test_invalid_config_is_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            ChartConfig(width=0)
        with self.assertRaises(ConfigurationError):
            ChartConfig(y_ticks=1)
        with self.assertRaises(ConfigurationError):
            ChartConfig(default_domain=(1.0, -1.0))
        with self.assertRaises(ConfigurationError):
            Chart(0, 10)

    def test_continuous_without_domain_is_a_configuration_error(self) -> None:
        ch = Chart(20, 5)
        with self.assertRaises(ConfigurationError):
            ch.plot(Continuous(math.sin))
        self.assertEqual(ch.shapes, ())

    def test_default_domain_backs_continuous_shapes(self) -> None:
        ch = Chart(20, 5, config=ChartConfig(default_domain=(-2.0, 2.0))).plot(Continuous(math.sin))
        self.assertEqual(ch.domain, Interval(-2.0, 2.0))
        self.assertEqual(Chart.default().domain, Interval(-10.0, 10.0))

    def test_plot_rejects_non_shapes(self) -> None:
        with self.assertRaises(PlotDataError):
            Chart(20, 5).plot([(0, 0), (1, 1)])  # type: ignore[arg-type]

    def test_render_without_domain_fails(self) -> None:
        with self.assertRaises(ConfigurationError):
            Chart(20, 5).render_text()

    def test_series_without_finite_points_needs_data(self) -> None:
        ch = Chart(20, 5)
        with self.assertRaisesRegex(PlotDataError, "no finite points"):
            ch.plot(Points([(math.nan, 1.0), (2.0, math.inf)]))
        self.assertEqual(ch.shapes, ())

        fixed = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Points([(math.nan, 1.0)]))
        self.assertEqual(fixed.canvas.grid.count(), 0)

    def test_overflowing_extent_leaves_chart_unchanged(self) -> None:
        ch = Chart(20, 5)
        with self.assertRaises(ConfigurationError):
            ch.plot(Lines([(0.0, -1e308), (1.0, 1e308)]))
        self.assertEqual(ch.shapes, ())
        self.assertIsNone(ch.canvas)
        self.assertIsNone(ch.domain)

        ch.plot(Lines([(0.0, 0.0), (1.0, 1.0)]))
        canvas = ch.canvas
        before = canvas.grid.count()
        with self.assertRaises(ConfigurationError):
            ch.plot(Points([(0.5, -1e308), (0.5, 1e308)]))
        self.assertIs(ch.canvas, canvas)
        self.assertEqual(canvas.grid.count(), before)
        self.assertEqual(ch.range, Interval(0.0, 1.0))
        self.assertEqual(len(ch.render_text().lines()), 6)

    def test_factory_builds_chart(self) -> None:
        ch = chart(30, 6, xmin=0.0, xmax=1.0)
        self.assertEqual((ch.width, ch.height), (30, 6))
        with self.assertRaises(TypeError):
            chart(30, 6, zmin=0.0)


class ChartLimitsTests(unittest.TestCase):
    def test_auto_range_is_the_union_of_plotted_shapes(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0)
        ch.plot(Lines([(0, 0), (1, 1)])).plot(Lines([(0, 5), (1, 10)]))
        self.assertEqual(ch.range, Interval(0.0, 10.0))

    def test_auto_domain_grows_with_data(self) -> None:
        ch = Chart(20, 5).plot(Lines([(0, 0), (1, 1)])).plot(Points([(5, 2)]))
        self.assertEqual(ch.domain, Interval(0.0, 5.0))
        self.assertEqual(ch.range, Interval(0.0, 2.0))

    def test_explicit_domain_filters_auto_range(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Points([(0.5, 1.0), (0.7, 3.0), (9.0, 100.0)]))
        self.assertEqual(ch.range, Interval(1.0, 3.0))

    def test_constant_function_gets_a_padded_range(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Continuous(lambda x: 3.0))
        self.assertEqual(ch.range, Interval(2.0, 4.0))

    def test_bars_include_zero_in_auto_range(self) -> None:
        ch = Chart(20, 5).plot(Bars([(1, 2), (2, 3)]))
        self.assertEqual(ch.domain, Interval(1.0, 2.0))
        self.assertEqual(ch.range, Interval(0.0, 3.0))

    def test_rescaling_replays_earlier_shapes(self) -> None:
        first = Lines([(0, 0), (1, 1)])
        second = Lines([(0, 5), (1, 10)])
        auto = Chart(20, 5, xmin=0.0, xmax=1.0).plot(first, (255, 0, 0)).plot(second)
        fixed = Chart(20, 5, xmin=0.0, xmax=1.0, ymin=0.0, ymax=10.0).plot(first, (255, 0, 0)).plot(second)
        self.assertTrue(np.array_equal(auto.canvas.grid.dots(), fixed.canvas.grid.dots()))
        self.assertEqual(auto.render_text(), fixed.render_text())

    def test_domain_growth_resamples_continuous_shapes(self) -> None:
        ch = Chart(20, 5, config=ChartConfig(default_domain=(0.0, 1.0)))
        ch.plot(Continuous(lambda x: x)).plot(Points([(4.0, 0.0)]))
        self.assertEqual(ch.domain, Interval(4.0 - 1.0, 4.0 + 1.0))
        self.assertEqual(ch.range, Interval(0.0, 5.0))


class ChartRenderTests(unittest.TestCase):
    def test_peak_lines_render(self) -> None:
        ch = Chart(40, 10, xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0).plot(Lines(PEAK))
        dots = ch.canvas.grid.dots()
        width = dots.shape[1]
        height = dots.shape[0]

        top_row = int(np.flatnonzero(dots.any(axis=1))[0])
        top_cols = np.flatnonzero(dots[top_row])
        self.assertTrue(np.all(top_cols >= width / 3))
        self.assertTrue(np.all(top_cols <= 2 * width / 3))

        columns = _rows_by_column(dots)
        self.assertTrue(columns[0])
        self.assertTrue(columns[-1])
        self.assertGreaterEqual(min(columns[0]), height - 4)
        self.assertGreaterEqual(min(columns[-1]), height - 4)

    def test_block_is_rectangular_with_label_row(self) -> None:
        ch = Chart(40, 10, xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0).plot(Lines(PEAK))
        block = ch.render_text()
        lines = block.lines()
        self.assertEqual(len(lines), 11)
        self.assertEqual({len(line) for line in lines}, {43})
        self.assertEqual(block.width, 43)
        self.assertTrue(lines[0].startswith(" 1 "))
        self.assertTrue(lines[9].startswith("-1 "))
        self.assertTrue(lines[10].startswith("   -1 "))
        self.assertTrue(lines[10].endswith(" 1"))
        for line in lines[:10]:
            self.assertTrue(all(0x2800 <= ord(ch) <= 0x28FF for ch in line[3:]))

    def test_render_is_idempotent(self) -> None:
        ch = Chart(30, 6, xmin=-3.0, xmax=3.0).plot(Continuous(math.sin), (10, 100, 200))
        first = ch.render_text()
        second = ch.render_text()
        self.assertEqual(first, second)
        self.assertEqual(str(first), str(second))

    def test_identity_renders_a_rising_staircase(self) -> None:
        ch = Chart(20, 5, xmin=-1.0, xmax=1.0).plot(Continuous(lambda x: x))
        columns = _rows_by_column(ch.canvas.grid.dots())
        self.assertTrue(all(columns))
        for left, right in zip(columns, columns[1:]):
            self.assertLessEqual(max(right), max(left))
            self.assertLessEqual(min(right), min(left))

    def test_fully_clipped_data_renders_an_empty_body(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0).plot(Lines([(0.0, -2.0), (1.0, -3.0)]))
        self.assertEqual(ch.canvas.grid.count(), 0)
        lines = ch.render_text().lines()
        self.assertEqual(len(lines), 6)
        self.assertEqual({len(line) for line in lines}, {22})
        for line in lines[:5]:
            self.assertEqual(line[2:], BLANK * 20)
        self.assertEqual(lines[5], "  0" + " " * 18 + "1")

    def test_bars_are_clipped_at_the_range_floor(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=2.0, ymin=1.0, ymax=3.0).plot(Bars([(1.0, 2.0)]))
        canvas = ch.canvas
        dots = canvas.grid.dots()
        col = canvas.map_x(1.0)
        top = canvas.map_y(2.0)
        height = canvas.grid.height
        self.assertEqual(np.flatnonzero(dots[:, col]).tolist(), list(range(top, height)))
        self.assertEqual(canvas.grid.count(), height - top)

    def test_math_errors_leave_gaps_in_continuous_shapes(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Continuous(lambda x: 1.0 / x))
        dots = ch.canvas.grid.dots()
        self.assertFalse(dots[:, 0].any())
        self.assertTrue(dots[:, -1].any())
        self.assertAlmostEqual(ch.range.hi, 39.0)

        ch = Chart(20, 5, xmin=0.0, xmax=2.0).plot(Continuous(math.log))
        self.assertGreater(ch.canvas.grid.count(), 0)
        self.assertEqual(len(ch.render_text().lines()), 6)

    def test_plot_aliases(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
        ch.lineplot(Lines([(0.0, 0.0), (1.0, 0.0)])).colorplot(Points([(1.0, 1.0)]), (0, 255, 0))
        self.assertEqual(len(ch.shapes), 2)
        self.assertIsNone(ch.canvas.grid.color_at(0, ch.canvas.grid.height - 1))
        self.assertEqual(ch.canvas.grid.color_at(ch.canvas.grid.width - 1, 0), (0, 255, 0))

    def test_color_does_not_affect_geometry(self) -> None:
        shape = Lines(PEAK)
        red = Chart(40, 10, xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0).plot(shape, (255, 0, 0))
        blue = Chart(40, 10, xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0).plot(shape, "#0000ff")
        self.assertTrue(np.array_equal(red.canvas.grid.dots(), blue.canvas.grid.dots()))
        self.assertEqual(red.render_text().lines(), blue.render_text().lines())

    def test_later_shapes_win_color_ties(self) -> None:
        shape = Lines([(0.0, 0.0), (1.0, 1.0)])
        ch = Chart(20, 5, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
        ch.plot(shape, (255, 0, 0)).plot(shape, (0, 0, 255))
        single = Chart(20, 5, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0).plot(shape)
        self.assertEqual(ch.canvas.grid.count(), single.canvas.grid.count())
        self.assertEqual(ch.canvas.grid.color_at(0, ch.canvas.grid.height - 1), (0, 0, 255))
        colors = {c for row in ch.render_text() for c in row.colors if c is not None}
        self.assertEqual(colors, {(0, 0, 255)})

    def test_default_color_comes_from_config(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0, config=ChartConfig(color=(1, 2, 3))).plot(Lines([(0, 0), (1, 1)]))
        self.assertEqual(ch.canvas.grid.color_at(0, ch.canvas.grid.height - 1), (1, 2, 3))

    def test_hidden_labels_drop_the_gutter(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Lines([(0, 0), (1, 1)]))
        ch.set_y_label_format(None).set_x_label_format(None)
        lines = ch.render_text().lines()
        self.assertEqual({len(line) for line in lines}, {20})
        self.assertEqual(lines[-1], " " * 20)

    def test_custom_label_format(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Lines([(0, 0), (1, 1)]))
        ch.set_x_label_format(lambda v: f"t{v:g}")
        label_row = ch.render_text().lines()[-1]
        self.assertIn("t0", label_row)
        self.assertTrue(label_row.endswith("t1"))
        with self.assertRaises(ConfigurationError):
            ch.set_y_label_format("percent")

    def test_intermediate_ticks(self) -> None:
        ch = Chart(40, 9, xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0, config=ChartConfig(x_ticks=3, y_ticks=3))
        lines = ch.plot(Lines(PEAK)).render_text().lines()
        self.assertTrue(lines[4].startswith(" 0 "))
        self.assertEqual(lines[-1][3 + 20], "0")

    def test_axis_lines_do_not_touch_the_canvas(self) -> None:
        ch = Chart(20, 5, xmin=-1.0, xmax=1.0, ymin=-1.0, ymax=1.0).plot(Points([(0.5, 0.5)]))
        before = ch.canvas.grid.count()
        plain = ch.render_text()
        ch.set_x_axis_style(AxisStyle.SOLID).set_y_axis_style("dotted")
        decorated = ch.render_text()
        self.assertEqual(ch.canvas.grid.count(), before)
        self.assertNotEqual(plain, decorated)
        self.assertEqual(ch.render_text(), decorated)

    def test_nice_draws_borders(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
        out = io.StringIO()
        ch.nice(out, color=False)
        first_body_line = out.getvalue().splitlines()[0]
        self.assertNotEqual(first_body_line[2:], BLANK * 20)
        self.assertIsNone(ch.canvas)

    def test_display_writes_plain_or_ansi_text(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Lines([(0, 0), (1, 1)]), (255, 0, 0))
        plain = io.StringIO()
        ch.display(plain)
        self.assertNotIn("\x1b[", plain.getvalue())
        self.assertEqual(plain.getvalue(), str(ch.render_text()) + "\n")

        colored = io.StringIO()
        ch.display(colored, color=True)
        self.assertIn("\x1b[38;2;255;0;0m", colored.getvalue())

    def test_frame_is_body_only(self) -> None:
        ch = Chart(20, 5, xmin=0.0, xmax=1.0).plot(Lines([(0, 0), (1, 1)]))
        frame = ch.frame().split("\n")
        self.assertEqual(len(frame), 5)
        self.assertEqual({len(line) for line in frame}, {20})


if __name__ == "__main__":
    unittest.main()
