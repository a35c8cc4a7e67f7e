from linechart.backend import DrawingBackend
from linechart.chart import LineChart
from linechart.config import (
    CATEGORY10,
    AxisConfig,
    ChartConfig,
    CoordinateConfig,
    DotsConfig,
    GridConfig,
    LabelsConfig,
    load_chart_config,
    validate_chart_config,
)
from linechart.errors import (
    ConfigError,
    DegenerateDomainError,
    EmptyDataError,
    LayoutError,
    LineChartError,
    PaletteIndexError,
    SeriesDataError,
    SeriesLengthMismatchError,
)
from linechart.geometry import ChartGeometry, GeometryBuilder
from linechart.hit_test import HitResult, HitTester
from linechart.layout import ChartLayout, Coordinate, LayoutEngine
from linechart.scales import LinearScale, TickSet
from linechart.series import SeriesStore

__all__ = [
    "AxisConfig",
    "CATEGORY10",
    "ChartConfig",
    "ChartGeometry",
    "ChartLayout",
    "ConfigError",
    "Coordinate",
    "CoordinateConfig",
    "DegenerateDomainError",
    "DotsConfig",
    "DrawingBackend",
    "EmptyDataError",
    "GeometryBuilder",
    "GridConfig",
    "HitResult",
    "HitTester",
    "LabelsConfig",
    "LayoutEngine",
    "LayoutError",
    "LineChart",
    "LineChartError",
    "LinearScale",
    "PaletteIndexError",
    "SeriesDataError",
    "SeriesLengthMismatchError",
    "SeriesStore",
    "TickSet",
    "load_chart_config",
    "validate_chart_config",
]
