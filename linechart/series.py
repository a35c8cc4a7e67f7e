from __future__ import annotations

import logging
from typing import Any, Iterator

import numpy as np

from linechart.adapters import normalize_series
from linechart.errors import EmptyDataError, SeriesLengthMismatchError


LOGGER = logging.getLogger(__name__)


class SeriesStore:
    """Ordered set of equal-length series sharing one implicit x index."""

    def __init__(self) -> None:
        self._series: list[np.ndarray] = []
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def is_empty(self) -> bool:
        return not self._series

    @property
    def reference_length(self) -> int:
        if not self._series:
            raise EmptyDataError("no series in store")
        return int(self._series[0].size)

    def add(self, values: Any) -> int:
        arr = normalize_series(values, label=f"series {len(self._series)}")
        if self._series and arr.size != self._series[0].size:
            raise SeriesLengthMismatchError(
                f"series length mismatch: {arr.size} != {self._series[0].size} (reference series)"
            )
        self._series.append(arr)
        self._revision += 1
        LOGGER.debug("added series %d (%d points)", len(self._series) - 1, arr.size)
        return len(self._series) - 1

    def clear(self) -> None:
        self._series.clear()
        self._revision += 1

    def min_value(self) -> float:
        if not self._series:
            raise EmptyDataError("no series in store")
        return float(min(np.min(s) for s in self._series))

    def max_value(self) -> float:
        if not self._series:
            raise EmptyDataError("no series in store")
        return float(max(np.max(s) for s in self._series))

    def value_at(self, series_index: int, index: int) -> float:
        if series_index < 0 or series_index >= len(self._series):
            raise IndexError(f"series index out of range: {series_index}")
        data = self._series[series_index]
        clamped = min(max(int(index), 0), data.size - 1)
        return float(data[clamped])

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[np.ndarray]:
        return (self[i] for i in range(len(self._series)))

    def __getitem__(self, series_index: int) -> np.ndarray:
        if series_index < 0 or series_index >= len(self._series):
            raise IndexError(f"series index out of range: {series_index}")
        view = self._series[series_index].view()
        view.flags.writeable = False
        return view
