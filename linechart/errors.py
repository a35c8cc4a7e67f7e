from __future__ import annotations


class LineChartError(ValueError):
    """Base class for invalid chart input detected before computation."""


class EmptyDataError(LineChartError):
    pass


class SeriesDataError(LineChartError):
    pass


class SeriesLengthMismatchError(SeriesDataError):
    pass


class DegenerateDomainError(LineChartError):
    pass


class LayoutError(LineChartError):
    pass


class PaletteIndexError(LineChartError, IndexError):
    pass


class ConfigError(LineChartError):
    pass
