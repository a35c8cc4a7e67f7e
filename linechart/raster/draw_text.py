from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from linechart.config import RGBA
from linechart.raster.canvas import blend_mask


Font = ImageFont.FreeTypeFont | ImageFont.ImageFont

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 10.0
# Tried in order after the requested family.
FALLBACK_FAMILIES = ("dejavusans", "liberationsans", "helvetica", "arial")
FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    """Blend antialiased ``text`` with its top-left ink corner at ``(x, y)``."""
    if not text:
        return
    coverage = _glyph_coverage(text, _load_font(font_family, font_size_px))
    blend_mask(dst, coverage, color, x0=x, y0=y)


def draw_text_in_box(
    dst: np.ndarray,
    box: tuple[float, float, float, float],
    text: str,
    color: RGBA,
    *,
    align: str = "center",
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    """Center ``text`` vertically in ``box`` and align it horizontally."""
    if not text:
        return
    left, top, box_w, box_h = box
    text_w, text_h = text_size(text, font_family=font_family, font_size_px=font_size_px)
    offsets = {"left": 0.0, "right": box_w - text_w}
    x = left + offsets.get(align, (box_w - text_w) / 2.0)
    y = top + (box_h - text_h) / 2.0
    draw_text(dst, int(round(x)), int(round(y)), text, color, font_family=font_family, font_size_px=font_size_px)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    font = _load_font(font_family, font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    height, width = _glyph_coverage(text, font).shape
    return (width, height)


@lru_cache(maxsize=256)
def _glyph_coverage(text: str, font: Font) -> np.ndarray:
    x0, y0, x1, y1 = font.getbbox(text)
    size = (max(1, int(x1 - x0)), max(1, int(y1 - y0)))
    glyphs = Image.new("L", size, 0)
    ImageDraw.Draw(glyphs).text((-x0, -y0), text, fill=255, font=font)
    coverage = np.asarray(glyphs, dtype=np.float32) / 255.0
    coverage.flags.writeable = False
    return coverage


@lru_cache(maxsize=32)
def _load_font(font_family: str, font_size_px: float) -> Font:
    path = _resolve_font_path(font_family)
    if path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(path), size=max(1, int(round(font_size_px))))
    except OSError:
        return ImageFont.load_default()


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = _squash(font_family) or _squash(DEFAULT_FONT_FAMILY)
    installed = _installed_fonts()
    for family in (wanted,) + FALLBACK_FAMILIES:
        matches = [path for path in installed if family in _squash(path.stem)]
        if matches:
            # Prefer the regular face over Bold/Oblique variants.
            return min(matches, key=lambda path: len(path.name))
    return None


@lru_cache(maxsize=1)
def _installed_fonts() -> tuple[Path, ...]:
    found: list[Path] = []
    for root in FONT_DIRS:
        if root.is_dir():
            found.extend(sorted(root.rglob("*.ttf")))
            found.extend(sorted(root.rglob("*.otf")))
    return tuple(found)


def _squash(name: str) -> str:
    return name.strip().lower().replace(" ", "").replace("-", "")
