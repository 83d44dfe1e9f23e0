from __future__ import annotations

import unittest

import numpy as np

from scrollgraph.commands import Circle, FilledPolygon, LineSegment, TextLabel
from scrollgraph.extrema import AxisExtrema
from scrollgraph.geometry import SeriesGeometry, compute_layout, map_points, map_value_x, map_value_y
from scrollgraph.renderers import DistanceMarkerDecorator, LineSeriesRenderer
from scrollgraph.series import Point, SeriesStyle


class LayoutTests(unittest.TestCase):
    def test_labels_on_left_shift_graph_origin(self) -> None:
        layout = compute_layout(
            400,
            300,
            label_text_height=10,
            label_panel_width=40,
            label_panel_left_margin=5,
            label_panel_right_margin=5,
        )
        self.assertEqual(layout.border, 35.0)
        self.assertEqual(layout.graph_height, 230.0)
        self.assertEqual(layout.graph_width, 349.0)
        self.assertEqual(layout.horizontal_start, 50.0)
        self.assertEqual(layout.label_panel_x, 5.0)

    def test_labels_on_right_keep_origin_at_zero(self) -> None:
        layout = compute_layout(
            400,
            300,
            label_text_height=10,
            label_panel_width=40,
            label_panel_right_margin=5,
            labels_on_right=True,
        )
        self.assertEqual(layout.horizontal_start, 0.0)
        self.assertEqual(layout.graph_width, 354.0)
        self.assertEqual(layout.label_panel_x, 355.0)

    def test_image_panel_sits_right_of_graph_when_labels_are_left(self) -> None:
        layout = compute_layout(
            400,
            300,
            label_text_height=10,
            label_panel_width=40,
            image_panel_width=30,
            image_panel_left_margin=2,
            image_panel_right_margin=3,
        )
        self.assertEqual(layout.graph_width, 325.0)
        self.assertEqual(layout.horizontal_start, 40.0)
        self.assertEqual(layout.label_panel_x, 0.0)
        self.assertEqual(layout.image_panel_x, 367.0)
        self.assertEqual(layout.image_panel_width, 30.0)

    def test_image_panel_sits_left_of_graph_when_labels_are_right(self) -> None:
        layout = compute_layout(
            400,
            300,
            label_text_height=10,
            label_panel_width=40,
            labels_on_right=True,
            image_panel_width=30,
            image_panel_left_margin=2,
            image_panel_right_margin=3,
        )
        self.assertEqual(layout.graph_width, 325.0)
        self.assertEqual(layout.horizontal_start, 35.0)
        self.assertEqual(layout.label_panel_x, 360.0)
        self.assertEqual(layout.image_panel_x, 2.0)

    def test_no_image_panel_by_default(self) -> None:
        layout = compute_layout(400, 300, label_text_height=10, label_panel_width=40, image_panel_left_margin=9)
        self.assertEqual(layout.image_panel_width, 0.0)
        self.assertEqual(layout.graph_width, 359.0)


class MappingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.layout = compute_layout(400, 300, label_text_height=10, label_panel_width=40)
        self.extrema = AxisExtrema(min_x=0, max_x=10, min_y=0, max_y=5)

    def test_corners_map_to_graph_box(self) -> None:
        px, py = map_points([Point(0, 0), Point(10, 5)], self.extrema, self.layout)
        layout = self.layout
        self.assertAlmostEqual(px[0], layout.horizontal_start)
        self.assertAlmostEqual(py[0], layout.graph_height + layout.border)
        self.assertAlmostEqual(px[1], layout.horizontal_start + layout.graph_width)
        self.assertAlmostEqual(py[1], layout.border)

    def test_scalar_mapping_matches_vector_mapping(self) -> None:
        pts = [Point(2.5, 1.0), Point(7.0, 4.5)]
        px, py = map_points(pts, self.extrema, self.layout)
        expected_x = [map_value_x(p.x, self.extrema, self.layout) for p in pts]
        expected_y = [map_value_y(p.y, self.extrema, self.layout) for p in pts]
        np.testing.assert_allclose(px, expected_x)
        np.testing.assert_allclose(py, expected_y)

    def test_zero_span_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            map_points([Point(1, 1)], AxisExtrema(1, 1, 0, 5), self.layout)


class RendererTests(unittest.TestCase):
    def setUp(self) -> None:
        layout = compute_layout(200, 100, label_text_height=0, label_panel_width=0)
        self.geometry = SeriesGeometry(
            layout=layout,
            extrema=AxisExtrema(min_x=0, max_x=3, min_y=0, max_y=10),
            style=SeriesStyle(color="#FF0000FF", thickness=2.0),
        )
        self.points = [Point(0, 0), Point(1, 10), Point(2, 5), Point(3, 0)]

    def test_line_renderer_emits_one_segment_per_pair(self) -> None:
        commands = LineSeriesRenderer().render_series(self.points, self.geometry)
        self.assertEqual(len(commands), 3)
        self.assertTrue(all(isinstance(c, LineSegment) for c in commands))
        first = commands[0]
        self.assertEqual((first.x0, first.y0), (0.0, 75.0))
        self.assertEqual(first.y1, 25.0)
        self.assertEqual((first.color, first.width), ("#FF0000FF", 2.0))
        self.assertEqual(commands[0].x1, commands[1].x0)

    def test_background_polygon_is_painted_first(self) -> None:
        commands = LineSeriesRenderer(draw_background=True).render_series(self.points, self.geometry)
        self.assertIsInstance(commands[0], FilledPolygon)
        self.assertEqual(len(commands[0].points), len(self.points) + 2)
        self.assertEqual(commands[0].points[-1], (0.0, 75.0))

    def test_gradient_is_passed_through(self) -> None:
        geometry = SeriesGeometry(
            layout=self.geometry.layout,
            extrema=self.geometry.extrema,
            style=self.geometry.style,
            gradient=("#000000FF", "#FFFFFFFF"),
        )
        commands = LineSeriesRenderer().render_series(self.points, geometry)
        self.assertEqual(commands[0].gradient, ("#000000FF", "#FFFFFFFF"))

    def test_empty_points_render_nothing(self) -> None:
        self.assertEqual(LineSeriesRenderer().render_series([], self.geometry), [])


class DistanceMarkerTests(unittest.TestCase):
    def setUp(self) -> None:
        layout = compute_layout(400, 100, label_text_height=0, label_panel_width=0)
        self.geometry = SeriesGeometry(
            layout=layout,
            extrema=AxisExtrema(min_x=0, max_x=4000, min_y=0, max_y=10),
            style=SeriesStyle(),
        )
        self.points = [Point(0, 0), Point(1500, 6), Point(2500, 10)]

    def test_markers_on_crossings_and_pending_distances(self) -> None:
        renderer = DistanceMarkerDecorator(base=LineSeriesRenderer())
        commands = renderer.render_series(self.points, self.geometry)
        segments = [c for c in commands if isinstance(c, LineSegment)]
        texts = [c.text for c in commands if isinstance(c, TextLabel)]
        inner = [c for c in commands if isinstance(c, Circle) and c.radius == renderer.inner_radius]
        self.assertEqual(len(segments), 2)
        self.assertEqual(texts, ["1", "2", "3", "4"])
        self.assertEqual([c.color for c in inner], [renderer.marker_color] * 2 + [renderer.pending_color] * 2)
        bottom = self.geometry.layout.graph_height + self.geometry.layout.border
        self.assertEqual(inner[2].y, bottom)
        # 1000 m sits at y=4 on the first segment.
        self.assertAlmostEqual(inner[0].y, map_value_y(4.0, self.geometry.extrema, self.geometry.layout))

    def test_imperial_unit_uses_miles(self) -> None:
        renderer = DistanceMarkerDecorator(base=LineSeriesRenderer(), metric=False)
        commands = renderer.render_series(self.points, self.geometry)
        texts = [c.text for c in commands if isinstance(c, TextLabel)]
        self.assertEqual(texts, ["1", "2"])

    def test_hidden_markers_leave_base_output(self) -> None:
        base = LineSeriesRenderer()
        renderer = DistanceMarkerDecorator(base=base, show_markers=False)
        self.assertEqual(
            renderer.render_series(self.points, self.geometry),
            base.render_series(self.points, self.geometry),
        )


if __name__ == "__main__":
    unittest.main()
