from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
import threading
from typing import Iterable, Protocol

from scrollgraph.errors import SeriesAttachError


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class SeriesStyle:
    color: str = "#0077CCFF"
    thickness: float = 3.0

    def __post_init__(self) -> None:
        if self.thickness < 0:
            raise ValueError("thickness must be >= 0")


class SeriesOwner(Protocol):
    def _on_series_changed(self, series: "Series", *, scroll_to_end: bool) -> None:
        ...


class Series:
    """Ordered x-sorted point sequence shared between a producer and the render pass.

    Points must be appended in ascending x order. The order is never checked;
    unsorted input produces undefined extrema and labels.
    """

    def __init__(
        self,
        points: Iterable[Point] = (),
        *,
        style: SeriesStyle | None = None,
        description: str | None = None,
    ) -> None:
        self.style = style or SeriesStyle()
        self.description = description
        self._lock = threading.Lock()
        self._points: list[Point] = list(points)
        self._xs: list[float] = [p.x for p in self._points]
        self._owner: SeriesOwner | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)

    @property
    def owner(self) -> SeriesOwner | None:
        return self._owner

    def attach(self, owner: SeriesOwner) -> None:
        if self._owner is not None and self._owner is not owner:
            raise SeriesAttachError("series is already attached to another graph")
        self._owner = owner

    def detach(self, owner: SeriesOwner) -> None:
        if self._owner is owner:
            self._owner = None

    def append(self, point: Point, *, scroll_to_end: bool = False, max_points: int | None = None) -> None:
        if max_points is not None and max_points <= 0:
            raise ValueError("max_points must be > 0")
        with self._lock:
            self._points.append(point)
            self._xs.append(point.x)
            if max_points is not None and len(self._points) > max_points:
                drop = len(self._points) - max_points
                del self._points[:drop]
                del self._xs[:drop]
        self._notify(scroll_to_end=scroll_to_end)

    def reset(self, points: Iterable[Point]) -> None:
        fresh = list(points)
        with self._lock:
            self._points = fresh
            self._xs = [p.x for p in fresh]
        self._notify(scroll_to_end=False)

    def snapshot(self) -> list[Point]:
        with self._lock:
            return list(self._points)

    def first_x(self) -> float | None:
        with self._lock:
            return self._xs[0] if self._xs else None

    def last_x(self) -> float | None:
        with self._lock:
            return self._xs[-1] if self._xs else None

    def visible_points(self, start: float, size: float) -> list[Point]:
        """Return the points inside ``[start, start + size]`` plus one boundary point per side.

        ``size == 0`` means no viewport and returns every point. The left
        boundary point is kept only when no point sits exactly on ``start``.
        """
        with self._lock:
            if size == 0:
                return list(self._points)
            n = len(self._xs)
            first_inside = bisect_left(self._xs, start)
            first_after = bisect_right(self._xs, start + size)
            lo = first_inside
            if first_inside > 0 and (first_inside == n or self._xs[first_inside] != start):
                lo = first_inside - 1
            hi = min(n, first_after + 1)
            return self._points[lo:hi]

    def _notify(self, *, scroll_to_end: bool) -> None:
        owner = self._owner
        if owner is not None:
            owner._on_series_changed(self, scroll_to_end=scroll_to_end)
