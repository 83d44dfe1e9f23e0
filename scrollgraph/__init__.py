from scrollgraph.adapters import points_from_xy
from scrollgraph.cache import RenderCache
from scrollgraph.commands import Circle, FilledPolygon, Frame, LineSegment, SideImage, TextLabel
from scrollgraph.errors import GraphStateError, PlotDataError, SeriesAttachError, SeriesIndexError
from scrollgraph.extrema import AxisExtrema, normalize_y_range
from scrollgraph.geometry import GraphLayout, SeriesGeometry, compute_layout, map_points
from scrollgraph.gestures import GestureEvent, parse_gesture_event
from scrollgraph.graph import Graph
from scrollgraph.renderers import DistanceMarkerDecorator, LineSeriesRenderer
from scrollgraph.series import Point, Series, SeriesStyle
from scrollgraph.style import DEFAULT_STYLE, GraphStyle, validate_graph_style
from scrollgraph.viewport import Viewport

__all__ = [
    "AxisExtrema",
    "Circle",
    "DEFAULT_STYLE",
    "DistanceMarkerDecorator",
    "FilledPolygon",
    "Frame",
    "GestureEvent",
    "Graph",
    "GraphLayout",
    "GraphStateError",
    "GraphStyle",
    "LineSegment",
    "LineSeriesRenderer",
    "PlotDataError",
    "Point",
    "RenderCache",
    "Series",
    "SeriesAttachError",
    "SeriesGeometry",
    "SeriesIndexError",
    "SeriesStyle",
    "SideImage",
    "TextLabel",
    "Viewport",
    "compute_layout",
    "map_points",
    "normalize_y_range",
    "parse_gesture_event",
    "points_from_xy",
    "validate_graph_style",
]
