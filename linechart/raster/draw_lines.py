from __future__ import annotations

from typing import Sequence

import numpy as np

from linechart.config import RGBA
from linechart.raster.canvas import blend_mask, draw_hline, draw_vline


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, width: float = 1.0) -> None:
    if len(points) < 2:
        return
    brush = max(1, int(round(width)))
    # Rasterize into a coverage mask first so overlapping brush stamps blend once.
    mask = np.zeros(dst.shape[:2], dtype=bool)
    pts = [(int(round(x)), int(round(y))) for x, y in points]
    for (x0, y0), (x1, y1) in zip(pts[:-1], pts[1:]):
        _stamp_segment(mask, x0, y0, x1, y1, brush)
    blend_mask(dst, mask, color)


def draw_segment(dst: np.ndarray, start: tuple[float, float], end: tuple[float, float], color: RGBA, width: float = 1.0) -> None:
    x0, y0 = int(round(start[0])), int(round(start[1]))
    x1, y1 = int(round(end[0])), int(round(end[1]))
    if max(1, int(round(width))) == 1:
        if y0 == y1:
            draw_hline(dst, x0, x1, y0, color)
            return
        if x0 == x1:
            draw_vline(dst, x0, y0, y1, color)
            return
    draw_polyline(dst, [start, end], color, width=width)


def _stamp_segment(mask: np.ndarray, x0: int, y0: int, x1: int, y1: int, brush: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _stamp_square(mask, x0, y0, brush)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp_square(mask: np.ndarray, x: int, y: int, brush: int) -> None:
    radius = brush // 2
    ya = max(0, y - radius)
    yb = min(mask.shape[0], y - radius + brush)
    xa = max(0, x - radius)
    xb = min(mask.shape[1], x - radius + brush)
    if xa < xb and ya < yb:
        mask[ya:yb, xa:xb] = True
