from __future__ import annotations

import unittest

from linechart.config import CATEGORY10, ChartConfig, lighten_color, validate_chart_config
from linechart.errors import PaletteIndexError
from linechart.geometry import GeometryBuilder
from linechart.layout import LayoutEngine
from linechart.series import SeriesStore


def _builder(*series: list[float], config: ChartConfig | None = None, size=(120, 70)) -> GeometryBuilder:
    store = SeriesStore()
    for values in series:
        store.add(values)
    config = config or ChartConfig().with_inset(10)
    layout = LayoutEngine(store, config).compute(*size)
    return GeometryBuilder(layout, store, config)


class PolylineAndAreaTests(unittest.TestCase):
    def test_polyline_has_one_vertex_per_point(self) -> None:
        line = _builder([3, 4, 9, 11, 13, 15]).polyline(0)
        self.assertEqual(len(line), 6)
        self.assertEqual(line[0][0], 10.0)
        self.assertAlmostEqual(line[0][1], 50.0)
        self.assertAlmostEqual(line[1][0], 30.0)
        self.assertAlmostEqual(line[2][1], 70 - 9 / 15 * 50 - 10)
        self.assertEqual(line[-1][0], 110.0)
        self.assertAlmostEqual(line[-1][1], 10.0)

    def test_x_positions_are_strictly_increasing(self) -> None:
        line = _builder([5, 1, 5, 1, 5]).polyline(0)
        xs = [x for x, _ in line]
        self.assertEqual(xs, sorted(set(xs)))

    def test_area_closes_on_baseline(self) -> None:
        builder = _builder([3, 4, 9, 11, 13, 15])
        line = builder.polyline(0)
        area = builder.area(0)
        self.assertEqual(len(area), len(line) + 3)
        self.assertEqual(area[0], (10.0, 60.0))
        self.assertEqual(area[1:-2], line)
        self.assertEqual(area[-2], (110.0, 60.0))
        self.assertEqual(area[-1], area[0])

    def test_area_baseline_follows_zero_for_negative_data(self) -> None:
        builder = _builder([-5, 5])
        base = builder.layout.baseline_y()
        self.assertAlmostEqual(base, 70 - 25 - 10)
        self.assertEqual(builder.area(0)[0][1], base)

    def test_single_point_series(self) -> None:
        builder = _builder([5], config=ChartConfig(), size=(100, 100))
        self.assertEqual(builder.polyline(0), ((15.0, 15.0),))
        self.assertEqual(len(builder.area(0)), 4)
        self.assertEqual(len(builder.dots(0)), 1)
        labels = builder.x_labels()
        self.assertEqual([label.text for label in labels], ["0"])
        self.assertEqual(labels[0].width, 0.0)
        self.assertEqual(labels[0].x, 15.0)


class DotTests(unittest.TestCase):
    def test_dots_are_centered_on_vertices(self) -> None:
        builder = _builder([3, 4, 9, 11, 13, 15])
        dots = builder.dots(0)
        self.assertEqual(len(dots), 6)
        for dot, vertex in zip(dots, builder.polyline(0)):
            self.assertEqual(dot.center, vertex)
            self.assertEqual(dot.origin, (vertex[0] - 6.0, vertex[1] - 6.0))
            self.assertEqual(dot.outer_diameter, 12.0)
            self.assertEqual(dot.inner_diameter, 8.0)
            self.assertEqual(dot.fill_color, (255, 255, 255, 255))
            self.assertEqual(dot.inner_color, CATEGORY10[0])
            self.assertFalse(dot.highlighted)

    def test_highlighted_dot_uses_lightened_series_color(self) -> None:
        config = validate_chart_config({"inset": 10, "dots.outer_diameter_highlighted": 16})
        dots = _builder([3, 4, 9, 11, 13, 15], config=config).dots(0, highlighted_index=2)
        self.assertTrue(dots[2].highlighted)
        self.assertEqual(dots[2].fill_color, lighten_color(CATEGORY10[0]))
        self.assertEqual(dots[2].outer_diameter, 16.0)
        self.assertEqual(dots[2].origin, (dots[2].center[0] - 8.0, dots[2].center[1] - 8.0))
        self.assertEqual(sum(d.highlighted for d in dots), 1)

    def test_highlight_index_is_clamped(self) -> None:
        builder = _builder([3, 4, 9])
        self.assertTrue(builder.dots(0, highlighted_index=99)[-1].highlighted)
        self.assertTrue(builder.dots(0, highlighted_index=-3)[0].highlighted)


class GridAxisLabelTests(unittest.TestCase):
    def test_grid_lines_span_the_drawing_area(self) -> None:
        builder = _builder([3, 4, 9, 11, 13, 15])
        grid = builder.grid_lines()
        x_ticks = len(builder.layout.x.ticks)
        y_ticks = len(builder.layout.y.ticks)
        self.assertEqual((x_ticks, y_ticks), (11, 8))
        self.assertEqual(len(grid), x_ticks + y_ticks)
        self.assertEqual(grid[0].start, (10.0, 60.0))
        self.assertEqual(grid[0].end, (10.0, 10.0))
        horizontal = grid[x_ticks]
        self.assertEqual(horizontal.start, (10.0, 60.0))
        self.assertEqual(horizontal.end, (110.0, 60.0))
        self.assertEqual(horizontal.color, (238, 238, 238, 255))

    def test_axis_lines(self) -> None:
        x_axis, y_axis = _builder([3, 4, 9, 11, 13, 15]).axis_lines()
        self.assertEqual((x_axis.start, x_axis.end), ((10.0, 60.0), (110.0, 60.0)))
        self.assertEqual((y_axis.start, y_axis.end), ((10.0, 60.0), (10.0, 10.0)))
        self.assertEqual(x_axis.color, (96, 125, 139, 255))

    def test_x_labels_default_to_index(self) -> None:
        labels = _builder([3, 4, 9, 11, 13, 15]).x_labels()
        self.assertEqual([label.text for label in labels], ["0", "1", "2", "3", "4", "5"])
        self.assertAlmostEqual(labels[0].width, 20.0)
        self.assertAlmostEqual(labels[0].x, 0.0)
        self.assertAlmostEqual(labels[1].x, 20.0)
        self.assertEqual(labels[0].y, 60.0)
        self.assertEqual(labels[0].height, 10.0)

    def test_x_labels_use_configured_values_then_fall_back(self) -> None:
        config = validate_chart_config({"inset": 10, "x.labels.values": ["mon", "tue"]})
        labels = _builder([3, 4, 9, 11], config=config).x_labels()
        self.assertEqual([label.text for label in labels], ["mon", "tue", "2", "3"])

    def test_y_labels_follow_ticks(self) -> None:
        labels = _builder([3, 4, 9, 11, 13, 15]).y_labels()
        self.assertEqual([label.text for label in labels], ["0", "2", "4", "6", "8", "10", "12", "14"])
        self.assertEqual(labels[0].y, 55.0)
        self.assertEqual(labels[0].x, 0.0)
        self.assertEqual((labels[0].width, labels[0].height), (10.0, 10.0))

    def test_build_respects_visibility_flags(self) -> None:
        config = validate_chart_config(
            {"inset": 10, "x.grid.visible": False, "y.axis.visible": False, "y.labels.visible": False}
        )
        geom = _builder([3, 4, 9], config=config).build()
        self.assertEqual(geom.grid, ())
        self.assertEqual(geom.axes, ())
        self.assertEqual(geom.y_labels, ())
        self.assertEqual(len(geom.x_labels), 3)

    def test_build_full_geometry(self) -> None:
        geom = _builder([3, 4, 9], [1, 1, 1]).build(highlighted_index=1)
        self.assertEqual(len(geom.series), 2)
        self.assertEqual(len(geom.axes), 2)
        self.assertTrue(geom.series[1].dots[1].highlighted)


class SeriesStyleTests(unittest.TestCase):
    def test_palette_and_area_alpha(self) -> None:
        geom = _builder([3, 4, 9], [1, 2, 3]).build()
        first, second = geom.series
        self.assertEqual(first.color, CATEGORY10[0])
        self.assertEqual(second.color, CATEGORY10[1])
        self.assertEqual(first.area_color, CATEGORY10[0][:3] + (51,))
        self.assertEqual(first.line_width, 2.0)

    def test_area_and_dots_can_be_disabled(self) -> None:
        config = validate_chart_config({"inset": 10, "area": False, "dots.visible": False})
        series = _builder([3, 4, 9], config=config).series_geometry(0)
        self.assertIsNone(series.area)
        self.assertEqual(series.dots, ())

    def test_palette_cycles_by_default(self) -> None:
        colors = [(1, 2, 3, 255), (4, 5, 6, 255), (7, 8, 9, 255)]
        config = validate_chart_config({"colors": colors})
        with self.assertLogs("linechart.config", level="WARNING"):
            self.assertEqual(config.color_for_series(4), (4, 5, 6, 255))

    def test_strict_palette_rejects_overflow(self) -> None:
        config = validate_chart_config(
            {"inset": 10, "colors": ["#000000", "#ffffff"], "palette_policy": "strict"}
        )
        builder = _builder([1, 2], [3, 4], [5, 6], config=config)
        with self.assertRaises(PaletteIndexError):
            builder.build()
        with self.assertRaises(IndexError):
            config.color_for_series(2)


if __name__ == "__main__":
    unittest.main()
