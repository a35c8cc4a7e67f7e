from __future__ import annotations

from typing import Protocol, Sequence

from linechart.config import RGBA


Point = tuple[float, float]
Rect = tuple[float, float, float, float]


class DrawingBackend(Protocol):
    """Surface the chart paints onto; coordinates are widget pixels, y down."""

    def clear(self, rect: Rect | None = None) -> None:
        ...

    def stroke_path(self, points: Sequence[Point], color: RGBA, width: float) -> None:
        ...

    def fill_path(self, points: Sequence[Point], color: RGBA) -> None:
        ...

    def fill_circle(self, center: Point, radius: float, color: RGBA) -> None:
        ...

    def draw_text(self, text: str, box: Rect, color: RGBA, align: str = "center") -> None:
        ...
