from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

import numpy as np


TextAlign = Literal["left", "center", "right"]


@dataclass(frozen=True)
class LineSegment:
    x0: float
    y0: float
    x1: float
    y1: float
    color: str
    width: float = 1.0
    # Vertical gradient stops spread over the frame height; overrides ``color``.
    gradient: tuple[str, ...] | None = None


@dataclass(frozen=True)
class FilledPolygon:
    points: tuple[tuple[float, float], ...]
    color: str


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    color: str


@dataclass(frozen=True)
class TextLabel:
    text: str
    x: float
    y: float
    color: str
    font_size_px: float
    align: TextAlign = "left"


@dataclass(frozen=True)
class SideImage:
    """Host image placed beside vertical label ``index``; ``(x, y)`` is its top-left corner."""

    index: int
    x: float
    y: float
    image: np.ndarray = field(compare=False, repr=False)

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])


DrawCommand = Union[LineSegment, FilledPolygon, Circle, TextLabel, SideImage]


@dataclass
class Frame:
    """Everything one draw pass hands to the drawing-primitive layer, in paint order."""

    width: int
    height: int
    grid: list[LineSegment] = field(default_factory=list)
    series: list[DrawCommand] = field(default_factory=list)
    labels: list[TextLabel] = field(default_factory=list)
    images: list[SideImage] = field(default_factory=list)

    def commands(self) -> list[DrawCommand]:
        return [*self.grid, *self.series, *self.labels, *self.images]
