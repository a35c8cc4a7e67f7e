from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, Callable

from linechart.backend import DrawingBackend
from linechart.config import ChartConfig, validate_chart_config
from linechart.errors import LayoutError
from linechart.geometry import ChartGeometry, GeometryBuilder
from linechart.hit_test import HitResult, HitTester
from linechart.layout import ChartLayout, LayoutEngine
from linechart.series import SeriesStore


LOGGER = logging.getLogger(__name__)

DataPointCallback = Callable[[int, tuple[float, ...]], None]


class LineChart:
    """Host-facing chart: owns the data, recomputes layout, paints via a backend.

    All calls are synchronous and expected on one owner thread.
    """

    def __init__(
        self,
        width: float = 320,
        height: float = 200,
        *,
        config: ChartConfig | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise LayoutError("width and height must be > 0")
        self.width = float(width)
        self.height = float(height)
        self._store = SeriesStore()
        self._engine = LayoutEngine(self._store, config or ChartConfig())
        self._callback: DataPointCallback | None = None
        self._blank = False
        self.highlighted_index: int | None = None

    @property
    def config(self) -> ChartConfig:
        return self._engine.config

    @property
    def series(self) -> SeriesStore:
        return self._store

    def add_series(self, values: Any) -> int:
        index = self._store.add(values)
        self._blank = False
        return index

    def clear_series(self) -> "LineChart":
        """Drop all series but keep axes and grid configuration."""
        self._store.clear()
        self.highlighted_index = None
        return self

    def clear_all(self) -> "LineChart":
        """Drop all series and paint nothing but a cleared surface on next render."""
        self.clear_series()
        self._blank = True
        return self

    def set_drawing_size(self, width: float, height: float) -> "LineChart":
        if width <= 0 or height <= 0:
            raise LayoutError("width and height must be > 0")
        self.width = float(width)
        self.height = float(height)
        return self

    def set_inset(self, inset: float) -> "LineChart":
        self._engine.set_config(self.config.with_inset(inset))
        return self

    def set_axis_insets(self, *, x: float | None = None, y: float | None = None) -> "LineChart":
        self._engine.set_config(self.config.with_axis_insets(x=x, y=y))
        return self

    def set_config(self, config: ChartConfig) -> "LineChart":
        self._engine.set_config(config)
        return self

    def configure(self, **overrides: Any) -> "LineChart":
        """Apply dotted-key overrides, e.g. ``configure(**{"x.grid.count": 5})``."""
        self._engine.set_config(validate_chart_config(overrides, base=self.config))
        return self

    def set_line_width(self, width: float) -> "LineChart":
        return self.configure(line_width=width)

    def set_area(self, enabled: bool) -> "LineChart":
        self._engine.set_config(replace(self.config, area=bool(enabled)))
        return self

    def on_data_point_selected(self, callback: DataPointCallback | None) -> "LineChart":
        self._callback = callback
        return self

    def layout(self) -> ChartLayout:
        return self._engine.layout(self.width, self.height)

    def geometry(self) -> ChartGeometry:
        builder = GeometryBuilder(self.layout(), self._store, self.config)
        return builder.build(highlighted_index=self.highlighted_index)

    def hit_test(self, pixel_x: float) -> HitResult:
        return HitTester(self.layout(), self._store).locate(pixel_x)

    def handle_pointer(self, pixel_x: float) -> HitResult | None:
        if self._store.is_empty:
            LOGGER.debug("pointer event at x=%s ignored: chart has no data", pixel_x)
            return None
        result = self.hit_test(pixel_x)
        self.highlighted_index = result.index
        if self._callback is not None:
            self._callback(result.index, result.values)
        return result

    def render(self, backend: DrawingBackend) -> ChartGeometry | None:
        backend.clear(None)
        if self._blank or self._store.is_empty:
            return None
        geom = self.geometry()

        for seg in geom.grid:
            backend.stroke_path((seg.start, seg.end), seg.color, seg.width)
        for seg in geom.axes:
            backend.stroke_path((seg.start, seg.end), seg.color, seg.width)
        for label in geom.x_labels + geom.y_labels:
            backend.draw_text(label.text, (label.x, label.y, label.width, label.height), label.color, label.align)

        for series in geom.series:
            backend.stroke_path(series.line, series.color, series.line_width)
            for dot in series.dots:
                backend.fill_circle(dot.center, dot.outer_diameter / 2.0, dot.fill_color)
                backend.fill_circle(dot.center, dot.inner_diameter / 2.0, dot.inner_color)
            if series.area is not None:
                backend.fill_path(series.area, series.area_color)
        return geom
