from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math
from typing import Iterator

import numpy as np

from linechart.errors import DegenerateDomainError


@dataclass(frozen=True)
class TickSet:
    """Arithmetic tick sequence, enumerated as ``i = start; i <= stop; i += step``."""

    start: float
    stop: float
    step: float

    def values(self) -> np.ndarray:
        if self.step <= 0 or not np.isfinite(self.step) or self.stop < self.start:
            return np.asarray([], dtype=np.float64)
        count = int(math.floor((self.stop - self.start) / self.step + 1e-9)) + 1
        if count == 1:
            return np.asarray([self.start], dtype=np.float64)
        ticks = self.start + self.step * np.arange(count, dtype=np.float64)
        # Normalize floating-point drift so values like -4.44e-16 become 0.
        ticks = np.rint(ticks / self.step) * self.step
        ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=self.step * 1e-9)] = 0.0
        return ticks

    def __iter__(self) -> Iterator[float]:
        return iter(self.values().tolist())

    def __len__(self) -> int:
        return int(self.values().size)


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float] = (0.0, 1.0)
    range: tuple[float, float] = (0.0, 1.0)

    def __post_init__(self) -> None:
        if len(self.domain) != 2 or len(self.range) != 2:
            raise ValueError("domain and range must be pairs")
        object.__setattr__(self, "domain", (float(self.domain[0]), float(self.domain[1])))
        object.__setattr__(self, "range", (float(self.range[0]), float(self.range[1])))

    def scale(self, value: float) -> float:
        return _bilinear(float(value), self.domain, self.range)

    def invert(self, value: float) -> float:
        return _bilinear(float(value), self.range, self.domain)

    def scale_many(self, values: np.ndarray) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        t = _uninterpolate(arr, self.domain)
        r0, r1 = self.range
        return r0 * (1.0 - t) + r1 * t

    def extent(self) -> tuple[float, float]:
        start, stop = self.domain
        return (start, stop) if start < stop else (stop, start)

    def ticks(self, count: int) -> TickSet:
        if count <= 0:
            raise ValueError("tick count must be > 0")
        lo, hi = self.extent()
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise DegenerateDomainError(f"cannot compute ticks for non-finite domain {self.domain!r}")
        span = hi - lo
        if span == 0:
            return TickSet(start=lo, stop=lo, step=1.0)
        if not math.isfinite(span):
            raise DegenerateDomainError(f"domain {self.domain!r} spans more than the float range")
        if span / count == 0:
            raise DegenerateDomainError(f"domain {self.domain!r} is too narrow for {count} ticks")

        step = 10.0 ** math.floor(math.log10(span / count))
        err = count / span * step
        # Pick the 1/2/5/10 multiple that lands closest to the requested count.
        if err <= 0.15:
            step *= 10.0
        elif err <= 0.35:
            step *= 5.0
        elif err <= 0.75:
            step *= 2.0

        start = math.ceil(lo / step) * step
        stop = math.floor(hi / step) * step + step * 0.5
        return TickSet(start=start, stop=stop, step=step)


def _uninterpolate(value, bounds: tuple[float, float]):
    a, b = bounds
    diff = b - a
    if diff == 0:
        return value * 0.0
    return (value - a) / diff


def _bilinear(value: float, source: tuple[float, float], target: tuple[float, float]) -> float:
    t = _uninterpolate(value, source)
    r0, r1 = target
    if math.isinf(t):
        # r0 * (1 - t) is NaN for r0 == 0; keep the sign of the overshoot instead.
        return r0 + (r1 - r0) * t
    return float(r0 * (1.0 - t) + r1 * t)


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks(ticks: TickSet) -> list[str]:
    return [format_tick(v, step=ticks.step) for v in ticks]


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
