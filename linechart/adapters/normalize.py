from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from numbers import Real
from typing import Any

import numpy as np

from linechart.errors import EmptyDataError, SeriesDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


_NUMERIC_KINDS = frozenset("iufb")


def normalize_series(values: Any, *, label: str = "series") -> np.ndarray:
    """Coerce host input into a finite, 1-D float64 array owned by the caller.

    Accepts sequences of numbers (``Decimal`` included), numpy arrays, and,
    when installed, pandas Series, single-numeric-column DataFrames and torch
    tensors.
    """
    raw = _as_array(values, label=label)
    if raw.ndim != 1:
        raise SeriesDataError(f"{label} must be 1-D, got shape {raw.shape}")
    if raw.size == 0:
        raise EmptyDataError(f"empty {label}")

    out = raw.astype(np.float64) if raw.dtype.kind in _NUMERIC_KINDS else _floats_from_objects(raw, label=label)
    bad = np.flatnonzero(~np.isfinite(out))
    if bad.size:
        raise SeriesDataError(f"{label} contains non-finite value at index {int(bad[0])}")
    # astype always copies, so the store never aliases caller buffers.
    return out


def _as_array(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        return value.detach().cpu().to(torch.float64).numpy()
    if pd is not None and isinstance(value, pd.DataFrame):
        return _single_numeric_column(value, label=label)
    if pd is not None and isinstance(value, pd.Series):
        return value.to_numpy()
    if isinstance(value, np.ndarray):
        return value
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return np.asarray(list(value), dtype=object)
    raise SeriesDataError(f"unsupported {label} input type: {type(value)!r}")


def _single_numeric_column(frame: Any, *, label: str) -> np.ndarray:
    numeric = [c for c in frame.columns if pd.api.types.is_numeric_dtype(frame[c])]
    if len(numeric) != 1:
        raise SeriesDataError(f"{label} DataFrame must contain exactly one numeric column, found {len(numeric)}")
    return frame[numeric[0]].to_numpy()


def _floats_from_objects(arr: np.ndarray, *, label: str) -> np.ndarray:
    out = np.empty(arr.size, dtype=np.float64)
    for i, item in enumerate(arr.tolist()):
        if item is None:
            out[i] = np.nan
        elif isinstance(item, (Real, Decimal)):
            out[i] = float(item)
        else:
            raise SeriesDataError(f"{label} contains non-numeric value at index {i}: {item!r}")
    return out
