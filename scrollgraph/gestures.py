from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Literal, Mapping

from scrollgraph.viewport import ViewportController


LOGGER = logging.getLogger(__name__)

GesturePhase = Literal["pan_start", "pan_move", "pan_end", "scale_update", "scale_end"]
GestureState = Literal["idle", "dragging", "scaling"]

_PHASES = {"pan_start", "pan_move", "pan_end", "scale_update", "scale_end"}


@dataclass(frozen=True)
class GestureEvent:
    """Normalized gesture sample. ``x`` is the pointer x in pixels for pan phases."""

    phase: GesturePhase
    x: float | None = None
    scale_factor: float | None = None

    def __post_init__(self) -> None:
        if self.phase in {"pan_start", "pan_move"} and self.x is None:
            raise ValueError(f"{self.phase} requires x")
        if self.phase == "scale_update" and (self.scale_factor is None or self.scale_factor <= 0):
            raise ValueError("scale_update requires a scale_factor > 0")


def parse_gesture_event(event_type: str, payload: object) -> GestureEvent | None:
    """Parse a host `gesture` input event into a typed event, or ``None`` if it is not one."""

    if event_type != "gesture" or not isinstance(payload, Mapping):
        return None
    phase = payload.get("phase")
    if phase not in _PHASES:
        return None
    x = payload.get("x")
    scale = payload.get("scale_factor")
    try:
        return GestureEvent(
            phase=phase,
            x=None if x is None else float(x),
            scale_factor=None if scale is None else float(scale),
        )
    except (TypeError, ValueError):
        LOGGER.debug("dropping malformed gesture payload: %r", payload)
        return None


class GestureMapper:
    """Turns pan and pinch gestures into viewport mutations.

    Scaling preempts dragging; a stale pointer sample never survives a scale
    gesture or the end of a drag.
    """

    def __init__(
        self,
        viewport: ViewportController,
        *,
        enabled: Callable[[], bool],
        scalable: Callable[[], bool],
        graph_width: Callable[[], float],
        on_viewport_changed: Callable[[], None],
    ) -> None:
        self._viewport = viewport
        self._enabled = enabled
        self._scalable = scalable
        self._graph_width = graph_width
        self._on_viewport_changed = on_viewport_changed
        self.state: GestureState = "idle"
        self.last_x: float | None = None

    def reset(self) -> None:
        self.state = "idle"
        self.last_x = None

    def handle(self, event: GestureEvent) -> bool:
        if not self._enabled():
            return False
        if event.phase == "scale_update":
            return self._on_scale(event.scale_factor or 1.0)
        if event.phase == "scale_end":
            if self.state != "scaling":
                return False
            self.reset()
            return True
        if self.state == "scaling":
            return False
        if event.phase == "pan_start":
            self.state = "dragging"
            self.last_x = event.x
            return True
        if event.phase == "pan_move":
            if self.state != "dragging":
                return False
            assert event.x is not None
            if self.last_x is not None:
                if self._viewport.pan(event.x - self.last_x, self._graph_width()):
                    self._on_viewport_changed()
            self.last_x = event.x
            return True
        self.reset()
        return True

    def _on_scale(self, factor: float) -> bool:
        if not self._scalable():
            return False
        self.state = "scaling"
        self.last_x = None
        if self._viewport.scale_around(factor):
            self._on_viewport_changed()
        return True
