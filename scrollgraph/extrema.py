from __future__ import annotations

from dataclasses import dataclass
import math

from scrollgraph.series import Point
from scrollgraph.store import SeriesStore
from scrollgraph.viewport import ViewportController


DEGENERATE_EXPANSION_RATIO = 0.05


@dataclass(frozen=True)
class AxisExtrema:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def has_data(self) -> bool:
        return all(math.isfinite(v) for v in (self.min_x, self.max_x, self.min_y, self.max_y))

    @property
    def span_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def span_y(self) -> float:
        return self.max_y - self.min_y


def normalize_y_range(min_y: float, max_y: float) -> tuple[float, float]:
    """Widen a flat range so it can be used as a divisor.

    Non-finite bounds are the "no data" sentinels and resolve to ``[0, 1]``.
    """
    if not (math.isfinite(min_y) and math.isfinite(max_y)):
        return (0.0, 1.0)
    if min_y != max_y:
        return (min_y, max_y)
    if max_y == 0:
        return (0.0, 1.0)
    lo = min_y * (1.0 - DEGENERATE_EXPANSION_RATIO)
    hi = max_y * (1.0 + DEGENERATE_EXPANSION_RATIO)
    return (min(lo, hi), max(lo, hi))


def finite_x_range(min_x: float, max_x: float) -> tuple[float, float]:
    if not (math.isfinite(min_x) and math.isfinite(max_x)):
        return (0.0, 1.0)
    return (min_x, max_x)


class ExtremaCalculator:
    """Derives axis extrema from the visible data or from pinned Y bounds."""

    def __init__(self, store: SeriesStore, viewport: ViewportController) -> None:
        self._store = store
        self._viewport = viewport
        self.manual_y_bounds: tuple[float, float] | None = None

    def set_manual_y_bounds(self, *, max_y: float, min_y: float) -> None:
        self.manual_y_bounds = (float(min_y), float(max_y))

    def clear_manual_y_bounds(self) -> None:
        self.manual_y_bounds = None

    def visible_points(self) -> list[list[Point]]:
        vp = self._viewport.viewport
        return [series.visible_points(vp.start, vp.size) for series in self._store]

    def min_x(self, ignore_viewport: bool = False) -> float:
        return self._viewport.effective_min_x(ignore_viewport)

    def max_x(self, ignore_viewport: bool = False) -> float:
        return self._viewport.effective_max_x(ignore_viewport)

    def max_y(self) -> float:
        if self.manual_y_bounds is not None:
            return self.manual_y_bounds[1]
        largest = -math.inf
        for points in self.visible_points():
            for p in points:
                if p.y > largest:
                    largest = p.y
        return largest

    def min_y(self) -> float:
        if self.manual_y_bounds is not None:
            return self.manual_y_bounds[0]
        smallest = math.inf
        for points in self.visible_points():
            for p in points:
                if p.y < smallest:
                    smallest = p.y
        return smallest

    def extrema(self) -> AxisExtrema:
        return AxisExtrema(min_x=self.min_x(), max_x=self.max_x(), min_y=self.min_y(), max_y=self.max_y())
