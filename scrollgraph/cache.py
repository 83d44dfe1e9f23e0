from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Literal, Sequence


LOGGER = logging.getLogger(__name__)

InvalidationReason = Literal["data", "style", "size", "viewport", "manual"]
Axis = Literal["x", "y"]


@dataclass
class RenderCache:
    """Per-graph memo of generated labels and measured text metrics.

    Only the render thread reads or writes it. ``last_reason`` records the
    reason of the latest invalidation for hosts that log or inspect redraws.
    """

    horizontal_labels: tuple[str, ...] | None = None
    vertical_labels: tuple[str, ...] | None = None
    static_horizontal: bool = False
    static_vertical: bool = False
    fraction_digits: dict[str, int] = field(default_factory=dict)
    label_text_height: int | None = None
    horizontal_label_width: int | None = None
    vertical_label_width: int | None = None
    last_reason: InvalidationReason | None = None

    def invalidate(self, reason: InvalidationReason) -> None:
        if not self.static_horizontal:
            self.horizontal_labels = None
        if not self.static_vertical:
            self.vertical_labels = None
        self.fraction_digits.clear()
        self.vertical_label_width = None
        if reason != "viewport":
            # Probe metrics use the global x range, which panning never changes.
            self.label_text_height = None
            self.horizontal_label_width = None
        self.last_reason = reason
        LOGGER.debug("render cache invalidated (%s)", reason)

    def set_static_labels(self, axis: Axis, labels: Sequence[str] | None) -> None:
        value = None if labels is None else tuple(str(label) for label in labels)
        if axis == "x":
            self.static_horizontal = value is not None
            self.horizontal_labels = value
        else:
            self.static_vertical = value is not None
            self.vertical_labels = value
            self.vertical_label_width = None

    @property
    def metrics_ready(self) -> bool:
        return self.label_text_height is not None and self.horizontal_label_width is not None
