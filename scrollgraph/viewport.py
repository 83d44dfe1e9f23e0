from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable

from scrollgraph.errors import GraphStateError


LOGGER = logging.getLogger(__name__)

BoundsProvider = Callable[[], tuple[float, float] | None]


@dataclass
class Viewport:
    start: float = 0.0
    size: float = 0.0
    init_start: float = 0.0
    padding_left: float = 0.0
    padding_right: float = 0.0

    @property
    def active(self) -> bool:
        return self.size != 0

    @property
    def end(self) -> float:
        return self.start + self.size


class ViewportController:
    """Owns the visible x window and keeps it inside the data bounds while it moves.

    ``bounds`` returns the global ``(min_x, max_x)`` of the attached data or
    ``None`` when there are no points.
    """

    def __init__(self, bounds: BoundsProvider, *, scrollable: bool = False) -> None:
        self._bounds = bounds
        self.scrollable = scrollable
        self.viewport = Viewport()

    def set_viewport(
        self,
        start: float,
        size: float,
        padding_left: float = 0.0,
        padding_right: float = 0.0,
    ) -> None:
        if size < 0:
            raise ValueError("viewport size must be >= 0")
        self.viewport = Viewport(
            start=float(start),
            size=float(size),
            init_start=float(start),
            padding_left=float(padding_left),
            padding_right=float(padding_right),
        )

    def clear_viewport(self) -> None:
        self.viewport = Viewport()

    def effective_min_x(self, ignore_viewport: bool = False) -> float:
        if not ignore_viewport and self.viewport.active:
            return self.viewport.start
        bounds = self._bounds()
        return math.inf if bounds is None else bounds[0]

    def effective_max_x(self, ignore_viewport: bool = False) -> float:
        if not ignore_viewport and self.viewport.active:
            return self.viewport.end
        bounds = self._bounds()
        return -math.inf if bounds is None else bounds[1]

    def pan(self, delta_px: float, graph_width_px: float) -> bool:
        vp = self.viewport
        if not vp.active or graph_width_px <= 0:
            return False
        vp.start -= delta_px * vp.size / graph_width_px

        bounds = self._bounds()
        if bounds is not None:
            upper = bounds[1] + vp.padding_right
            if vp.start + vp.size > upper:
                vp.start = upper - vp.size
        # Evaluated last so the left edge wins on datasets shorter than the window.
        lower = vp.init_start - vp.padding_left
        if vp.start < lower:
            vp.start = lower
        return True

    def scale_around(self, factor: float) -> bool:
        """Zoom around the window center, clamped to the global data range only.

        The ``init_start - padding_left`` floor and the ``padding_right`` ceiling
        bind pans; a zoom may still move the window past them.
        """
        if factor <= 0:
            raise ValueError("scale factor must be > 0")
        vp = self.viewport
        if not vp.active:
            return False
        center = vp.start + vp.size / 2
        vp.size /= factor
        vp.start = center - vp.size / 2

        bounds = self._bounds()
        if bounds is None:
            return True
        min_x, max_x = bounds
        if vp.start < min_x:
            vp.start = min_x
        overlap = vp.start + vp.size - max_x
        if overlap > 0:
            if vp.start - overlap > min_x:
                vp.start -= overlap
            else:
                LOGGER.debug("viewport reached maximal zoom-out [%s, %s]", min_x, max_x)
                vp.start = min_x
                vp.size = max_x - min_x
        return True

    def scroll_to_end(self) -> bool:
        self._require_scrollable()
        bounds = self._bounds()
        if bounds is None:
            return False
        self.viewport.start = bounds[1] - self.viewport.size
        return True

    def scroll_to_end_smooth(self) -> bool:
        self._require_scrollable()
        bounds = self._bounds()
        if bounds is None:
            return False
        vp = self.viewport
        visible_end = vp.start + vp.size - vp.padding_right
        if bounds[1] <= visible_end:
            return False
        vp.start += bounds[1] - visible_end
        return True

    def _require_scrollable(self) -> None:
        if not self.scrollable:
            raise GraphStateError("graph is not scrollable")
