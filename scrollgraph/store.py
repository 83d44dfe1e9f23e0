from __future__ import annotations

import logging
from typing import Iterator

from scrollgraph.errors import SeriesIndexError
from scrollgraph.series import Series


LOGGER = logging.getLogger(__name__)


class SeriesStore:
    """Ordered collection of the series drawn by one graph."""

    def __init__(self) -> None:
        self._series: list[Series] = []

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[Series]:
        return iter(list(self._series))

    def __getitem__(self, index: int) -> Series:
        return self._series[index]

    def add(self, series: Series) -> None:
        self._series.append(series)

    def remove(self, series: Series) -> bool:
        try:
            self._series.remove(series)
        except ValueError:
            LOGGER.debug("series %r is not part of this store", series.description)
            return False
        return True

    def pop(self, index: int) -> Series:
        if index < 0 or index >= len(self._series):
            raise SeriesIndexError(f"no series at index {index}")
        return self._series.pop(index)

    def clear(self) -> list[Series]:
        removed = list(self._series)
        self._series.clear()
        return removed

    def global_x_bounds(self) -> tuple[float, float] | None:
        # Series are x-sorted, so only the first and last point of each one matter.
        lowest: float | None = None
        highest: float | None = None
        for series in self._series:
            first = series.first_x()
            last = series.last_x()
            if first is None or last is None:
                continue
            lowest = first if lowest is None else min(lowest, first)
            highest = last if highest is None else max(highest, last)
        if lowest is None or highest is None:
            return None
        return (lowest, highest)
