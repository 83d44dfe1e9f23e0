from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from scrollgraph.commands import Circle, DrawCommand, FilledPolygon, LineSegment, TextLabel
from scrollgraph.geometry import SeriesGeometry, map_value_x, map_value_y
from scrollgraph.series import Point


ONE_KILOMETER = 1000.0
ONE_MILE = 1609.34


class SeriesRenderer(Protocol):
    def render_series(self, points: Sequence[Point], geometry: SeriesGeometry) -> list[DrawCommand]:
        ...


@dataclass
class LineSeriesRenderer:
    """Connects visible points with straight segments, optionally shading the area below."""

    draw_background: bool = False
    background_color: str = "#14283CFF"

    def render_series(self, points: Sequence[Point], geometry: SeriesGeometry) -> list[DrawCommand]:
        if not points:
            return []
        px, py = geometry.map(points)
        out: list[DrawCommand] = []
        if self.draw_background and px.size >= 2:
            bottom = geometry.layout.graph_height + geometry.layout.border
            outline = [(float(x), float(y)) for x, y in zip(px.tolist(), py.tolist())]
            outline.append((float(px[-1]), bottom))
            outline.append((float(px[0]), bottom))
            out.append(FilledPolygon(points=tuple(outline), color=self.background_color))
        style = geometry.style
        for i in range(1, px.size):
            out.append(
                LineSegment(
                    x0=float(px[i - 1]),
                    y0=float(py[i - 1]),
                    x1=float(px[i]),
                    y1=float(py[i]),
                    color=style.color,
                    width=style.thickness,
                    gradient=geometry.gradient,
                )
            )
        return out


@dataclass
class DistanceMarkerDecorator:
    """Adds a numbered marker each time the x value (meters) passes a whole unit distance."""

    base: SeriesRenderer
    metric: bool = True
    show_markers: bool = True
    outer_radius: float = 20.0
    inner_radius: float = 15.0
    font_size_px: float = 20.0
    halo_color: str = "#FFFFFF64"
    marker_color: str = "#0096D6C8"
    pending_color: str = "#B2B2B2FF"
    text_color: str = "#FFFFFFFF"

    @property
    def unit(self) -> float:
        return ONE_KILOMETER if self.metric else ONE_MILE

    def render_series(self, points: Sequence[Point], geometry: SeriesGeometry) -> list[DrawCommand]:
        out = self.base.render_series(points, geometry)
        if not self.show_markers or not points:
            return out
        unit = self.unit
        extrema = geometry.extrema
        layout = geometry.layout
        mark = points[0].x + (unit - points[0].x % unit)
        for a, b in zip(points, points[1:]):
            if b.x == a.x:
                continue
            slope = (b.y - a.y) / (b.x - a.x)
            mark = a.x + (unit - a.x % unit)
            while mark <= b.x:
                x = map_value_x(mark, extrema, layout)
                y = map_value_y(slope * (mark - a.x) + a.y, extrema, layout)
                out.extend(self._marker(x, y, mark, self.marker_color))
                mark += unit
        # Distances not reached yet are parked on the bottom line.
        bottom = layout.graph_height + layout.border
        while mark <= extrema.max_x:
            out.extend(self._marker(map_value_x(mark, extrema, layout), bottom, mark, self.pending_color))
            mark += unit
        return out

    def _marker(self, x: float, y: float, distance: float, color: str) -> list[DrawCommand]:
        lap = str(int(round(distance / self.unit)))
        return [
            Circle(x=x, y=y, radius=self.outer_radius, color=self.halo_color),
            Circle(x=x, y=y, radius=self.inner_radius, color=color),
            TextLabel(
                text=lap,
                x=x,
                y=y + self.font_size_px / 2,
                color=self.text_color,
                font_size_px=self.font_size_px,
                align="center",
            ),
        ]
