from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from linechart.config import RGBA
from linechart.raster.canvas import fill_rect, new_canvas
from linechart.raster.draw_lines import draw_polyline, draw_segment
from linechart.raster.draw_shapes import fill_circle, fill_polygon
from linechart.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX, draw_text_in_box


class RasterBackend:
    """numpy RGBA implementation of :class:`linechart.backend.DrawingBackend`."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: RGBA = (255, 255, 255, 255),
        font_family: str = DEFAULT_FONT_FAMILY,
        font_size_px: float = DEFAULT_FONT_SIZE_PX,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self.font_family = font_family
        self.font_size_px = font_size_px
        self._canvas = new_canvas(self.width, self.height, color=background)

    def clear(self, rect: tuple[float, float, float, float] | None = None) -> None:
        if rect is None:
            fill_rect(self._canvas, 0, 0, self.width, self.height, self.background)
            return
        x, y, w, h = rect
        fill_rect(
            self._canvas,
            int(np.floor(x)),
            int(np.floor(y)),
            int(np.ceil(x + w)),
            int(np.ceil(y + h)),
            self.background,
        )

    def stroke_path(self, points: Sequence[tuple[float, float]], color: RGBA, width: float) -> None:
        if len(points) == 2:
            draw_segment(self._canvas, points[0], points[1], color, width=width)
            return
        draw_polyline(self._canvas, points, color, width=width)

    def fill_path(self, points: Sequence[tuple[float, float]], color: RGBA) -> None:
        fill_polygon(self._canvas, points, color)

    def fill_circle(self, center: tuple[float, float], radius: float, color: RGBA) -> None:
        fill_circle(self._canvas, center, radius, color)

    def draw_text(self, text: str, box: tuple[float, float, float, float], color: RGBA, align: str = "center") -> None:
        draw_text_in_box(
            self._canvas,
            box,
            text,
            color,
            align=align,
            font_family=self.font_family,
            font_size_px=self.font_size_px,
        )

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas)

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        self.to_image().save(out, format="PNG")
        return out
