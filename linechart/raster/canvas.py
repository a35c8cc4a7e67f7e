from __future__ import annotations

import numpy as np

from linechart.config import RGBA


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 0)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Overwrite (no blending) the half-open pixel rect [x0, x1) x [y0, y1)."""
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1], max(x0, x1))
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0], max(y0, y1))
    if xa >= xb or ya >= yb:
        return
    dst[ya:yb, xa:xb] = np.asarray(color, dtype=np.uint8)


def blend_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA, x0: int = 0, y0: int = 0) -> None:
    """Source-over blend ``color`` wherever ``mask`` (bool or 0..1 coverage) is set."""
    h, w = mask.shape
    xa = max(0, x0)
    ya = max(0, y0)
    xb = min(dst.shape[1], x0 + w)
    yb = min(dst.shape[0], y0 + h)
    if xa >= xb or ya >= yb:
        return
    cov = mask[ya - y0 : yb - y0, xa - x0 : xb - x0].astype(np.float32)
    if not np.any(cov > 0):
        return
    patch = dst[ya:yb, xa:xb]
    src_alpha = (color[3] / 255.0) * cov
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    dst_rgb = patch[:, :, :3].astype(np.float32)
    num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    patch[:, :, :3] = np.clip(num / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    blend_mask(dst, np.ones((1, 1), dtype=bool), color, x0=x, y0=y)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    xa = min(x0, x1)
    blend_mask(dst, np.ones((1, abs(x1 - x0) + 1), dtype=bool), color, x0=xa, y0=y)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    ya = min(y0, y1)
    blend_mask(dst, np.ones((abs(y1 - y0) + 1, 1), dtype=bool), color, x0=x, y0=ya)
