from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from scrollgraph.extrema import AxisExtrema
from scrollgraph.series import Point, SeriesStyle


BORDER = 25.0
SIDE_BORDER = 10.0


@dataclass(frozen=True)
class GraphLayout:
    width: float
    height: float
    border: float
    graph_width: float
    graph_height: float
    horizontal_start: float
    label_panel_x: float
    label_panel_width: float
    # Side image panel; a zero width means the graph shows no side images.
    image_panel_x: float = 0.0
    image_panel_width: float = 0.0


@dataclass(frozen=True)
class SeriesGeometry:
    """Inputs a series renderer needs to place points in draw space."""

    layout: GraphLayout
    extrema: AxisExtrema
    style: SeriesStyle
    gradient: tuple[str, ...] | None = None

    def map(self, points: Sequence[Point]) -> tuple[np.ndarray, np.ndarray]:
        return map_points(points, self.extrema, self.layout)


def compute_layout(
    width: float,
    height: float,
    *,
    label_text_height: float,
    label_panel_width: float,
    label_panel_left_margin: float = 0.0,
    label_panel_right_margin: float = 0.0,
    labels_on_right: bool = False,
    image_panel_width: float = 0.0,
    image_panel_left_margin: float = 0.0,
    image_panel_right_margin: float = 0.0,
) -> GraphLayout:
    """Place the graph box between the label panel and the optional side image panel.

    The image panel sits on the side opposite the labels.
    """
    border = BORDER + label_text_height
    panel_extent = label_panel_width + label_panel_left_margin + label_panel_right_margin
    graph_width = width - panel_extent - 1
    horizontal_start = 0.0 if labels_on_right else panel_extent
    if labels_on_right:
        label_panel_x = width - label_panel_width - label_panel_right_margin
    else:
        label_panel_x = label_panel_left_margin

    image_panel_x = 0.0
    if image_panel_width > 0:
        image_extent = image_panel_width + image_panel_left_margin + image_panel_right_margin
        graph_width -= image_extent - 1
        if labels_on_right:
            horizontal_start += image_extent
            image_panel_x = image_panel_left_margin
        else:
            image_panel_x = width - image_panel_width - image_panel_right_margin

    return GraphLayout(
        width=float(width),
        height=float(height),
        border=float(border),
        graph_width=float(graph_width),
        graph_height=float(height - 2 * border),
        horizontal_start=float(horizontal_start),
        label_panel_x=float(label_panel_x),
        label_panel_width=float(label_panel_width),
        image_panel_x=float(image_panel_x),
        image_panel_width=float(max(0.0, image_panel_width)),
    )


def map_points(points: Sequence[Point], extrema: AxisExtrema, layout: GraphLayout) -> tuple[np.ndarray, np.ndarray]:
    """Map data-space points to draw-space pixel coordinates, keeping emission order."""
    span_x = extrema.max_x - extrema.min_x
    span_y = extrema.max_y - extrema.min_y
    if span_x == 0 or span_y == 0:
        raise ValueError("axis extrema must span a non-zero range")
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    ratio_x = (xs - extrema.min_x) / span_x
    ratio_y = (ys - extrema.min_y) / span_y
    px = layout.graph_width * ratio_x + layout.horizontal_start
    py = layout.graph_height - layout.graph_height * ratio_y + layout.border
    return px, py


def map_value_x(x: float, extrema: AxisExtrema, layout: GraphLayout) -> float:
    return layout.graph_width * ((x - extrema.min_x) / (extrema.max_x - extrema.min_x)) + layout.horizontal_start


def map_value_y(y: float, extrema: AxisExtrema, layout: GraphLayout) -> float:
    ratio = (y - extrema.min_y) / (extrema.max_y - extrema.min_y)
    return layout.graph_height - layout.graph_height * ratio + layout.border
