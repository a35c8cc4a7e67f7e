from __future__ import annotations

from dataclasses import dataclass
import logging

from linechart.config import ChartConfig, CoordinateConfig
from linechart.errors import EmptyDataError, LayoutError
from linechart.scales import LinearScale, TickSet
from linechart.series import SeriesStore


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinate:
    """One axis worth of layout: its scale, its ticks and its display flags."""

    scale: LinearScale
    ticks: TickSet
    config: CoordinateConfig


@dataclass(frozen=True)
class ChartLayout:
    width: float
    height: float
    x_inset: float
    y_inset: float
    drawing_width: float
    drawing_height: float
    reference_length: int
    x: Coordinate
    y: Coordinate

    @property
    def last_index(self) -> int:
        return self.reference_length - 1

    def to_pixel(self, index: float, value: float) -> tuple[float, float]:
        """Map a data point into widget pixels; pixel y grows downward."""
        px = self.x.scale.scale(index) + self.x_inset
        py = self.height - self.y.scale.scale(value) - self.y_inset
        return (px, py)

    def baseline_y(self) -> float:
        return self.height - self.y.scale.scale(0.0) - self.y_inset


class LayoutEngine:
    def __init__(self, store: SeriesStore, config: ChartConfig | None = None) -> None:
        self._store = store
        self._config = config or ChartConfig()
        self._cache_key: tuple[object, ...] | None = None
        self._cached: ChartLayout | None = None

    @property
    def config(self) -> ChartConfig:
        return self._config

    def set_config(self, config: ChartConfig) -> None:
        self._config = config
        self.invalidate()

    def invalidate(self) -> None:
        self._cache_key = None
        self._cached = None

    def layout(self, width: float, height: float) -> ChartLayout:
        key = (
            float(width),
            float(height),
            self._config.x,
            self._config.y,
            self._store.revision,
        )
        if self._cached is None or self._cache_key != key:
            self._cached = self.compute(width, height)
            self._cache_key = key
        return self._cached

    def compute(self, width: float, height: float) -> ChartLayout:
        if self._store.is_empty:
            raise EmptyDataError("cannot lay out a chart without series")
        reference_length = self._store.reference_length
        if reference_length <= 0:
            raise EmptyDataError("reference series is empty")

        x_cfg = self._config.x
        y_cfg = self._config.y
        x_inset = float(x_cfg.axis.inset)
        y_inset = float(y_cfg.axis.inset)
        drawing_width = float(width) - 2.0 * x_inset
        drawing_height = float(height) - 2.0 * y_inset
        if drawing_width <= 0 or drawing_height <= 0:
            raise LayoutError(
                f"drawing area too small: {width}x{height} with insets ({x_inset}, {y_inset})"
            )

        ymin = min(0.0, self._store.min_value())
        ymax = max(1.0, self._store.max_value())
        y_scale = LinearScale(domain=(ymin, ymax), range=(0.0, drawing_height))
        x_scale = LinearScale(domain=(0.0, float(reference_length - 1)), range=(0.0, drawing_width))

        out = ChartLayout(
            width=float(width),
            height=float(height),
            x_inset=x_inset,
            y_inset=y_inset,
            drawing_width=drawing_width,
            drawing_height=drawing_height,
            reference_length=reference_length,
            x=Coordinate(scale=x_scale, ticks=x_scale.ticks(x_cfg.grid.count), config=x_cfg),
            y=Coordinate(scale=y_scale, ticks=y_scale.ticks(y_cfg.grid.count), config=y_cfg),
        )
        LOGGER.debug(
            "layout %sx%s: x domain %s, y domain %s, %d series",
            width,
            height,
            x_scale.domain,
            y_scale.domain,
            len(self._store),
        )
        return out
