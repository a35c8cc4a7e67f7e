from __future__ import annotations

import colorsys
from dataclasses import asdict, dataclass, field, replace
from functools import lru_cache
import logging
from pathlib import Path
import re
import tomllib
from typing import Any, Literal, Mapping, Sequence

from linechart.errors import ConfigError, PaletteIndexError


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
PalettePolicy = Literal["cycle", "strict"]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

# category10 from d3
CATEGORY10: tuple[RGBA, ...] = (
    (31, 119, 180, 255),
    (255, 127, 14, 255),
    (44, 160, 44, 255),
    (214, 39, 40, 255),
    (148, 103, 189, 255),
    (140, 86, 75, 255),
    (227, 119, 194, 255),
    (127, 127, 127, 255),
    (188, 189, 34, 255),
    (23, 190, 207, 255),
)


@dataclass(frozen=True)
class LabelsConfig:
    visible: bool = True
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class GridConfig:
    visible: bool = True
    count: int = 10
    color: RGBA = (238, 238, 238, 255)


@dataclass(frozen=True)
class AxisConfig:
    visible: bool = True
    color: RGBA = (96, 125, 139, 255)
    inset: float = 15.0


@dataclass(frozen=True)
class CoordinateConfig:
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    grid: GridConfig = field(default_factory=GridConfig)
    axis: AxisConfig = field(default_factory=AxisConfig)


@dataclass(frozen=True)
class DotsConfig:
    visible: bool = True
    color: RGBA = (255, 255, 255, 255)
    inner_diameter: float = 8.0
    outer_diameter: float = 12.0
    inner_diameter_highlighted: float = 8.0
    outer_diameter_highlighted: float = 12.0


@dataclass(frozen=True)
class ChartConfig:
    x: CoordinateConfig = field(default_factory=CoordinateConfig)
    y: CoordinateConfig = field(default_factory=CoordinateConfig)
    area: bool = True
    area_alpha: float = 0.2
    line_width: float = 2.0
    dots: DotsConfig = field(default_factory=DotsConfig)
    colors: tuple[RGBA, ...] = CATEGORY10
    palette_policy: PalettePolicy = "cycle"
    text_color: RGBA = (33, 33, 33, 255)

    def with_inset(self, inset: float) -> "ChartConfig":
        return self.with_axis_insets(x=inset, y=inset)

    def with_axis_insets(self, *, x: float | None = None, y: float | None = None) -> "ChartConfig":
        out = self
        if x is not None:
            out = replace(out, x=replace(out.x, axis=replace(out.x.axis, inset=_non_negative_number("x.axis.inset", x))))
        if y is not None:
            out = replace(out, y=replace(out.y, axis=replace(out.y.axis, inset=_non_negative_number("y.axis.inset", y))))
        return out

    def color_for_series(self, series_index: int) -> RGBA:
        if series_index < 0:
            raise PaletteIndexError(f"series index must be >= 0, got {series_index}")
        if not self.colors:
            raise PaletteIndexError("color palette is empty")
        if series_index < len(self.colors):
            return self.colors[series_index]
        if self.palette_policy == "strict":
            raise PaletteIndexError(
                f"series index {series_index} exceeds palette of {len(self.colors)} colors"
            )
        _warn_palette_wrap(series_index, len(self.colors))
        return self.colors[series_index % len(self.colors)]


DEFAULT_CONFIG = ChartConfig()


@lru_cache(maxsize=256)
def _warn_palette_wrap(series_index: int, palette_size: int) -> None:
    LOGGER.warning("series %d exceeds palette of %d colors; cycling", series_index, palette_size)


def parse_hex_color(value: str) -> RGBA:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ConfigError(f"color must be a hex color (#RRGGBB or #RRGGBBAA), got {value!r}")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, a)


def lighten_color(color: RGBA, factor: float = 1.5) -> RGBA:
    r, g, b, a = color
    h, s, v = colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)
    lr, lg, lb = colorsys.hsv_to_rgb(h, s, min(1.0, v * factor))
    return (int(round(lr * 255)), int(round(lg * 255)), int(round(lb * 255)), a)


def with_alpha(color: RGBA, alpha: float) -> RGBA:
    r, g, b, a = color
    out_a = int(max(0.0, min(1.0, alpha)) * a)
    return (r, g, b, out_a)


def validate_chart_config(overrides: Mapping[str, Any] | None = None, *, base: ChartConfig = DEFAULT_CONFIG) -> ChartConfig:
    """Merge dotted-key overrides (``"x.grid.count"``) onto ``base`` and validate.

    ``"inset"`` is accepted as shorthand for both axis insets.
    """

    raw = _flatten(asdict(base))
    if overrides:
        for key, value in overrides.items():
            if key == "inset":
                raw["x.axis.inset"] = value
                raw["y.axis.inset"] = value
                continue
            if key not in raw:
                raise ConfigError(f"Unknown chart option: {key}")
            raw[key] = value

    def coordinate(prefix: str) -> CoordinateConfig:
        values = raw[f"{prefix}.labels.values"]
        if isinstance(values, str) or not isinstance(values, Sequence):
            raise ConfigError(f"Option `{prefix}.labels.values` must be a list of strings")
        return CoordinateConfig(
            labels=LabelsConfig(
                visible=_bool(f"{prefix}.labels.visible", raw[f"{prefix}.labels.visible"]),
                values=tuple(str(v) for v in values),
            ),
            grid=GridConfig(
                visible=_bool(f"{prefix}.grid.visible", raw[f"{prefix}.grid.visible"]),
                count=_positive_int(f"{prefix}.grid.count", raw[f"{prefix}.grid.count"]),
                color=_color(f"{prefix}.grid.color", raw[f"{prefix}.grid.color"]),
            ),
            axis=AxisConfig(
                visible=_bool(f"{prefix}.axis.visible", raw[f"{prefix}.axis.visible"]),
                color=_color(f"{prefix}.axis.color", raw[f"{prefix}.axis.color"]),
                inset=_non_negative_number(f"{prefix}.axis.inset", raw[f"{prefix}.axis.inset"]),
            ),
        )

    colors = raw["colors"]
    if isinstance(colors, str) or not isinstance(colors, Sequence) or not colors:
        raise ConfigError("Option `colors` must be a non-empty list of colors")
    policy = raw["palette_policy"]
    if policy not in ("cycle", "strict"):
        raise ConfigError("Option `palette_policy` must be 'cycle' or 'strict'")
    area_alpha = raw["area_alpha"]
    if isinstance(area_alpha, bool) or not isinstance(area_alpha, (int, float)) or not 0.0 <= float(area_alpha) <= 1.0:
        raise ConfigError("Option `area_alpha` must be a number in [0, 1]")

    return ChartConfig(
        x=coordinate("x"),
        y=coordinate("y"),
        area=_bool("area", raw["area"]),
        area_alpha=float(area_alpha),
        line_width=_positive_number("line_width", raw["line_width"]),
        dots=DotsConfig(
            visible=_bool("dots.visible", raw["dots.visible"]),
            color=_color("dots.color", raw["dots.color"]),
            inner_diameter=_positive_number("dots.inner_diameter", raw["dots.inner_diameter"]),
            outer_diameter=_positive_number("dots.outer_diameter", raw["dots.outer_diameter"]),
            inner_diameter_highlighted=_positive_number(
                "dots.inner_diameter_highlighted", raw["dots.inner_diameter_highlighted"]
            ),
            outer_diameter_highlighted=_positive_number(
                "dots.outer_diameter_highlighted", raw["dots.outer_diameter_highlighted"]
            ),
        ),
        colors=tuple(_color(f"colors[{i}]", c) for i, c in enumerate(colors)),
        palette_policy=policy,
        text_color=_color("text_color", raw["text_color"]),
    )


def load_chart_config(path: str | Path, *, base: ChartConfig = DEFAULT_CONFIG) -> ChartConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid chart config {config_path}: {exc}") from exc
    return validate_chart_config(_flatten(raw), base=base)


def _flatten(raw: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in raw.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            out.update(_flatten(value, prefix=f"{dotted}."))
        else:
            out[dotted] = value
    return out


def _bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"Option `{key}` must be a boolean")
    return value


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"Option `{key}` must be a positive integer")
    return value


def _positive_number(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
        raise ConfigError(f"Option `{key}` must be a positive number")
    return float(value)


def _non_negative_number(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not float(value) >= 0:
        raise ConfigError(f"Option `{key}` must be a number >= 0")
    return float(value)


def _color(key: str, value: Any) -> RGBA:
    if isinstance(value, str):
        try:
            return parse_hex_color(value)
        except ConfigError as exc:
            raise ConfigError(f"Option `{key}`: {exc}") from exc
    if isinstance(value, Sequence) and len(value) in (3, 4):
        channels = list(value)
        if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in channels):
            if len(channels) == 3:
                channels.append(255)
            return (channels[0], channels[1], channels[2], channels[3])
    raise ConfigError(f"Option `{key}` must be a hex color or an RGB(A) tuple of 0-255 ints")
