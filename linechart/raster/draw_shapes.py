from __future__ import annotations

from typing import Sequence

import numpy as np

from linechart.config import RGBA
from linechart.raster.canvas import blend_mask


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    """Even-odd scanline fill, sampling at pixel centers."""
    if len(points) < 3:
        return
    pts = np.asarray(points, dtype=np.float64)
    height, width = dst.shape[:2]
    ymin = max(0, int(np.floor(pts[:, 1].min())))
    ymax = min(height - 1, int(np.ceil(pts[:, 1].max())))
    if ymin > ymax:
        return
    x0s = pts[:, 0]
    y0s = pts[:, 1]
    x1s = np.roll(x0s, -1)
    y1s = np.roll(y0s, -1)
    mask = np.zeros((ymax - ymin + 1, width), dtype=bool)
    cols = np.arange(width, dtype=np.float64) + 0.5
    for row in range(ymin, ymax + 1):
        yc = row + 0.5
        crosses = (y0s <= yc) != (y1s <= yc)
        if not np.any(crosses):
            continue
        xa, ya, xb, yb = x0s[crosses], y0s[crosses], x1s[crosses], y1s[crosses]
        xs = np.sort(xa + (yc - ya) * (xb - xa) / (yb - ya))
        for left, right in zip(xs[0::2], xs[1::2]):
            mask[row - ymin] |= (cols >= left) & (cols < right)
    blend_mask(dst, mask, color, x0=0, y0=ymin)


def fill_circle(dst: np.ndarray, center: tuple[float, float], radius: float, color: RGBA) -> None:
    if radius <= 0:
        return
    cx, cy = center
    x0 = int(np.floor(cx - radius))
    y0 = int(np.floor(cy - radius))
    x1 = int(np.ceil(cx + radius))
    y1 = int(np.ceil(cy + radius))
    yy, xx = np.mgrid[y0:y1, x0:x1]
    mask = (xx + 0.5 - cx) ** 2 + (yy + 0.5 - cy) ** 2 <= radius * radius
    blend_mask(dst, mask, color, x0=x0, y0=y0)
