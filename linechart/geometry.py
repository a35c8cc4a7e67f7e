from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from linechart.config import RGBA, ChartConfig, lighten_color, with_alpha
from linechart.layout import ChartLayout
from linechart.scales import format_tick
from linechart.series import SeriesStore


Point = tuple[float, float]


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point
    color: RGBA
    width: float = 1.0


@dataclass(frozen=True)
class LabelGeometry:
    text: str
    x: float
    y: float
    width: float
    height: float
    color: RGBA
    align: str = "center"


@dataclass(frozen=True)
class DotGeometry:
    index: int
    center: Point
    origin: Point
    outer_diameter: float
    inner_diameter: float
    fill_color: RGBA
    inner_color: RGBA
    highlighted: bool = False


@dataclass(frozen=True)
class SeriesGeometry:
    series_index: int
    color: RGBA
    line: tuple[Point, ...]
    line_width: float
    area: tuple[Point, ...] | None
    area_color: RGBA
    dots: tuple[DotGeometry, ...]


@dataclass(frozen=True)
class ChartGeometry:
    layout: ChartLayout
    grid: tuple[Segment, ...]
    axes: tuple[Segment, ...]
    x_labels: tuple[LabelGeometry, ...]
    y_labels: tuple[LabelGeometry, ...]
    series: tuple[SeriesGeometry, ...]


class GeometryBuilder:
    """Turns series data into drawable geometry; draws nothing itself."""

    def __init__(self, layout: ChartLayout, store: SeriesStore, config: ChartConfig) -> None:
        self.layout = layout
        self.store = store
        self.config = config

    def _vertices(self, series_index: int) -> tuple[np.ndarray, np.ndarray]:
        data = self.store[series_index]
        lay = self.layout
        xs = lay.x.scale.scale_many(np.arange(data.size, dtype=np.float64)) + lay.x_inset
        ys = lay.height - lay.y.scale.scale_many(data) - lay.y_inset
        return xs, ys

    def polyline(self, series_index: int) -> tuple[Point, ...]:
        xs, ys = self._vertices(series_index)
        return tuple(zip(xs.tolist(), ys.tolist()))

    def area(self, series_index: int) -> tuple[Point, ...]:
        line = self.polyline(series_index)
        base = self.layout.baseline_y()
        first_x = line[0][0]
        last_x = line[-1][0]
        return ((first_x, base),) + line + ((last_x, base), (first_x, base))

    def dots(self, series_index: int, highlighted_index: int | None = None) -> tuple[DotGeometry, ...]:
        cfg = self.config.dots
        color = self.config.color_for_series(series_index)
        line = self.polyline(series_index)
        highlight = None
        if highlighted_index is not None:
            highlight = min(max(int(highlighted_index), 0), len(line) - 1)
        out: list[DotGeometry] = []
        for index, (cx, cy) in enumerate(line):
            is_hot = index == highlight
            outer = cfg.outer_diameter_highlighted if is_hot else cfg.outer_diameter
            inner = cfg.inner_diameter_highlighted if is_hot else cfg.inner_diameter
            out.append(
                DotGeometry(
                    index=index,
                    center=(cx, cy),
                    origin=(cx - outer / 2.0, cy - outer / 2.0),
                    outer_diameter=outer,
                    inner_diameter=inner,
                    fill_color=lighten_color(color) if is_hot else cfg.color,
                    inner_color=color,
                    highlighted=is_hot,
                )
            )
        return tuple(out)

    def grid_lines(self) -> tuple[Segment, ...]:
        lay = self.layout
        x_grid = lay.x.config.grid
        y_grid = lay.y.config.grid
        out: list[Segment] = []
        top = lay.y_inset
        bottom = lay.height - lay.y_inset
        for tick in lay.x.ticks:
            x = lay.x.scale.scale(tick) + lay.x_inset
            out.append(Segment(start=(x, bottom), end=(x, top), color=x_grid.color))
        left = lay.x_inset
        right = lay.width - lay.x_inset
        for tick in lay.y.ticks:
            y = lay.height - lay.y.scale.scale(tick) - lay.y_inset
            out.append(Segment(start=(left, y), end=(right, y), color=y_grid.color))
        return tuple(out)

    def axis_lines(self) -> tuple[Segment, ...]:
        lay = self.layout
        base = lay.baseline_y()
        x_axis = Segment(
            start=(lay.x_inset, base),
            end=(lay.width - lay.x_inset, base),
            color=lay.x.config.axis.color,
        )
        y_axis = Segment(
            start=(lay.x_inset, lay.height - lay.y_inset),
            end=(lay.x_inset, lay.y_inset),
            color=lay.y.config.axis.color,
        )
        return (x_axis, y_axis)

    def x_labels(self) -> tuple[LabelGeometry, ...]:
        lay = self.layout
        values = lay.x.config.labels.values
        step = lay.x.scale.ticks(lay.reference_length).step
        width = lay.x.scale.scale(step)
        y = lay.height - lay.x_inset
        out: list[LabelGeometry] = []
        for index in range(lay.reference_length):
            text = values[index] if index < len(values) else str(index)
            x = lay.x.scale.scale(index) + lay.x_inset - width / 2.0
            out.append(
                LabelGeometry(text=text, x=x, y=y, width=width, height=lay.x_inset, color=self.config.text_color)
            )
        return tuple(out)

    def y_labels(self) -> tuple[LabelGeometry, ...]:
        lay = self.layout
        step = lay.y.ticks.step
        out: list[LabelGeometry] = []
        for tick in lay.y.ticks:
            y = lay.height - lay.y.scale.scale(tick) - lay.y_inset * 1.5
            out.append(
                LabelGeometry(
                    text=format_tick(tick, step=step),
                    x=0.0,
                    y=y,
                    width=lay.y_inset,
                    height=lay.y_inset,
                    color=self.config.text_color,
                )
            )
        return tuple(out)

    def series_geometry(self, series_index: int, highlighted_index: int | None = None) -> SeriesGeometry:
        color = self.config.color_for_series(series_index)
        return SeriesGeometry(
            series_index=series_index,
            color=color,
            line=self.polyline(series_index),
            line_width=self.config.line_width,
            area=self.area(series_index) if self.config.area else None,
            area_color=with_alpha(color, self.config.area_alpha),
            dots=self.dots(series_index, highlighted_index) if self.config.dots.visible else (),
        )

    def build(self, highlighted_index: int | None = None) -> ChartGeometry:
        lay = self.layout
        show_grid = lay.x.config.grid.visible and lay.y.config.grid.visible
        show_axes = lay.x.config.axis.visible and lay.y.config.axis.visible
        return ChartGeometry(
            layout=lay,
            grid=self.grid_lines() if show_grid else (),
            axes=self.axis_lines() if show_axes else (),
            x_labels=self.x_labels() if lay.x.config.labels.visible else (),
            y_labels=self.y_labels() if lay.y.config.labels.visible else (),
            series=tuple(self.series_geometry(i, highlighted_index) for i in range(len(self.store))),
        )
