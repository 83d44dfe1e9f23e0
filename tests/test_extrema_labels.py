from __future__ import annotations

import math
import unittest

from scrollgraph.cache import RenderCache
from scrollgraph.extrema import ExtremaCalculator, normalize_y_range
from scrollgraph.labels import (
    AxisLabeler,
    format_number,
    resolve_label_count,
    select_fraction_digits,
)
from scrollgraph.series import Point, Series
from scrollgraph.store import SeriesStore
from scrollgraph.style import GraphStyle
from scrollgraph.viewport import ViewportController


def _measure(text: str, font_size_px: float) -> tuple[int, int]:
    return (len(text) * 6, 10)


def _stack(*series: Series) -> tuple[SeriesStore, ViewportController, ExtremaCalculator]:
    store = SeriesStore()
    for s in series:
        store.add(s)
    viewport = ViewportController(store.global_x_bounds)
    return store, viewport, ExtremaCalculator(store, viewport)


class DegenerateRangeTests(unittest.TestCase):
    def test_zero_range_becomes_unit_range(self) -> None:
        self.assertEqual(normalize_y_range(0.0, 0.0), (0.0, 1.0))

    def test_flat_positive_range_widens_five_percent(self) -> None:
        lo, hi = normalize_y_range(5.0, 5.0)
        self.assertAlmostEqual(lo, 4.75)
        self.assertAlmostEqual(hi, 5.25)

    def test_flat_negative_range_keeps_min_below_max(self) -> None:
        lo, hi = normalize_y_range(-5.0, -5.0)
        self.assertAlmostEqual(lo, -5.25)
        self.assertAlmostEqual(hi, -4.75)

    def test_sentinels_and_regular_ranges(self) -> None:
        self.assertEqual(normalize_y_range(math.inf, -math.inf), (0.0, 1.0))
        self.assertEqual(normalize_y_range(1.0, 3.0), (1.0, 3.0))


class ExtremaCalculatorTests(unittest.TestCase):
    def test_y_extrema_follow_visible_points(self) -> None:
        series = Series([Point(0, 0), Point(1, 5), Point(2, 3), Point(3, 8), Point(4, 1)])
        _, viewport, calc = _stack(series)
        self.assertEqual((calc.min_y(), calc.max_y()), (0, 8))
        viewport.set_viewport(1, 1)
        # Window [1, 2] plus the boundary point at x=3.
        self.assertEqual((calc.min_y(), calc.max_y()), (3, 8))
        self.assertEqual((calc.min_x(), calc.max_x()), (1, 2))

    def test_manual_bounds_override_data(self) -> None:
        _, _, calc = _stack(Series([Point(0, 1), Point(1, 2)]))
        calc.set_manual_y_bounds(max_y=10, min_y=-10)
        self.assertEqual((calc.min_y(), calc.max_y()), (-10, 10))
        calc.clear_manual_y_bounds()
        self.assertEqual((calc.min_y(), calc.max_y()), (1, 2))

    def test_no_data_returns_sentinels(self) -> None:
        _, _, calc = _stack(Series())
        ext = calc.extrema()
        self.assertFalse(ext.has_data)
        self.assertEqual(ext.min_y, math.inf)
        self.assertEqual(ext.max_y, -math.inf)

    def test_extrema_across_series(self) -> None:
        _, _, calc = _stack(Series([Point(0, 1), Point(2, 4)]), Series([Point(-1, -3), Point(1, 2)]))
        ext = calc.extrema()
        self.assertTrue(ext.has_data)
        self.assertEqual((ext.min_x, ext.max_x, ext.min_y, ext.max_y), (-1, 2, -3, 4))
        self.assertEqual((ext.span_x, ext.span_y), (3, 7))


class LabelFormattingTests(unittest.TestCase):
    def test_fraction_digits_by_span(self) -> None:
        self.assertEqual(select_fraction_digits(0.05), 6)
        self.assertEqual(select_fraction_digits(0.5), 4)
        self.assertEqual(select_fraction_digits(5), 3)
        self.assertEqual(select_fraction_digits(50), 1)
        self.assertEqual(select_fraction_digits(500), 0)

    def test_format_number_groups_and_trims(self) -> None:
        self.assertEqual(format_number(1234.5, 1), "1,234.5")
        self.assertEqual(format_number(1000.0, 0), "1,000")
        self.assertEqual(format_number(2.0, 3), "2")
        self.assertEqual(format_number(0.125, 2), "0.12")
        self.assertEqual(format_number(-0.0001, 2), "0")

    def test_label_count_resolution(self) -> None:
        self.assertEqual(resolve_label_count(5, 500, 30), 4)
        self.assertEqual(resolve_label_count(1, 500, 30), 0)
        self.assertEqual(resolve_label_count(0, 100, 30), 3)
        self.assertEqual(resolve_label_count(0, 10, 30), 1)


class AxisLabelerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.series = Series([Point(0, 0), Point(50, 50), Point(100, 20)])
        _, self.viewport, calc = _stack(self.series)
        self.cache = RenderCache()
        self.labeler = AxisLabeler(calc, self.cache)
        self.style = GraphStyle(num_horizontal_labels=5, num_vertical_labels=6)

    def test_horizontal_labels_span_x_range(self) -> None:
        labels = self.labeler.horizontal_labels(500, self.style, _measure)
        self.assertEqual(labels, ("0", "25", "50", "75", "100"))

    def test_vertical_labels_run_top_down(self) -> None:
        labels = self.labeler.vertical_labels(300, self.style, _measure)
        self.assertEqual(labels, ("50", "40", "30", "20", "10", "0"))

    def test_labels_are_cached_until_invalidated(self) -> None:
        first = self.labeler.horizontal_labels(500, self.style, _measure)
        self.assertIs(self.labeler.horizontal_labels(500, self.style, _measure), first)
        self.cache.invalidate("data")
        again = self.labeler.horizontal_labels(500, self.style, _measure)
        self.assertIsNot(again, first)
        self.assertEqual(again, first)

    def test_formatter_overrides_with_ascending_index(self) -> None:
        calls: list[tuple[bool, int, int]] = []

        def formatter(value: float, is_x: bool, total: int, index: int) -> str | None:
            calls.append((is_x, total, index))
            return f"#{index}" if not is_x else None

        self.labeler.formatter = formatter
        self.assertEqual(
            self.labeler.vertical_labels(300, self.style, _measure),
            ("#5", "#4", "#3", "#2", "#1", "#0"),
        )
        self.assertEqual(self.labeler.horizontal_labels(500, self.style, _measure)[1], "25")
        self.assertIn((False, 6, 0), calls)

    def test_static_labels_survive_invalidation(self) -> None:
        self.cache.set_static_labels("x", ["a", "b"])
        self.cache.invalidate("size")
        self.assertEqual(self.labeler.horizontal_labels(500, self.style, _measure), ("a", "b"))
        self.cache.set_static_labels("x", None)
        self.assertEqual(len(self.labeler.horizontal_labels(500, self.style, _measure)), 5)

    def test_metrics_measure_probe_label(self) -> None:
        # 0.783 into [0, 100] formats as "78".
        self.assertEqual(self.labeler.measure_metrics(self.style, _measure), (10, 12))
        self.assertTrue(self.cache.metrics_ready)

    def test_metrics_are_measured_once_until_dropped(self) -> None:
        calls: list[str] = []

        def counting(text: str, font_size_px: float) -> tuple[int, int]:
            calls.append(text)
            return _measure(text, font_size_px)

        self.labeler.measure_metrics(self.style, counting)
        self.labeler.measure_metrics(self.style, counting)
        self.assertEqual(calls, ["78"])
        self.cache.invalidate("viewport")
        self.labeler.measure_metrics(self.style, counting)
        self.assertEqual(len(calls), 1)
        self.cache.invalidate("size")
        self.assertFalse(self.cache.metrics_ready)
        self.labeler.measure_metrics(self.style, counting)
        self.assertEqual(len(calls), 2)
        self.assertEqual(self.cache.last_reason, "size")

    def test_vertical_label_width_is_widest_label(self) -> None:
        self.assertEqual(self.labeler.vertical_label_width(300, self.style, _measure), 12)

    def test_auto_counts_use_available_space(self) -> None:
        labels = self.labeler.vertical_labels(95, GraphStyle(), _measure)
        # 95 px over 30 px per label leaves three intervals.
        self.assertEqual(len(labels), 4)

    def test_no_data_labels_use_unit_range(self) -> None:
        self.series.reset([])
        self.cache.invalidate("data")
        labels = self.labeler.horizontal_labels(500, GraphStyle(num_horizontal_labels=3), _measure)
        self.assertEqual(labels, ("0", "0.5", "1"))

    def test_fraction_digits_cached_per_axis(self) -> None:
        self.assertEqual(self.labeler.fraction_digits(True), 0)
        self.assertEqual(self.labeler.fraction_digits(False), 1)
        self.assertEqual(self.cache.fraction_digits, {"x": 0, "y": 1})


class RenderCacheTests(unittest.TestCase):
    def _filled(self) -> RenderCache:
        cache = RenderCache(
            horizontal_labels=("a",),
            vertical_labels=("b",),
            label_text_height=10,
            horizontal_label_width=20,
            vertical_label_width=30,
        )
        cache.fraction_digits["x"] = 2
        return cache

    def test_viewport_invalidation_keeps_probe_metrics(self) -> None:
        cache = self._filled()
        cache.invalidate("viewport")
        self.assertIsNone(cache.horizontal_labels)
        self.assertIsNone(cache.vertical_labels)
        self.assertIsNone(cache.vertical_label_width)
        self.assertEqual(cache.fraction_digits, {})
        self.assertEqual((cache.label_text_height, cache.horizontal_label_width), (10, 20))
        self.assertEqual(cache.last_reason, "viewport")

    def test_other_invalidations_drop_all_metrics(self) -> None:
        for reason in ("data", "style", "size", "manual"):
            cache = self._filled()
            cache.invalidate(reason)
            self.assertFalse(cache.metrics_ready, reason)
            self.assertIsNone(cache.vertical_label_width)

    def test_static_vertical_labels_survive(self) -> None:
        cache = self._filled()
        cache.set_static_labels("y", ["top", "bottom"])
        cache.invalidate("data")
        self.assertEqual(cache.vertical_labels, ("top", "bottom"))
        self.assertIsNone(cache.horizontal_labels)


if __name__ == "__main__":
    unittest.main()
