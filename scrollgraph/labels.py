from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
import math
from typing import Protocol

from scrollgraph.cache import RenderCache
from scrollgraph.extrema import ExtremaCalculator, finite_x_range, normalize_y_range
from scrollgraph.style import GraphStyle


# Probe position inside the x range used to measure a representative label.
LABEL_PROBE_RATIO = 0.783


class LabelFormatter(Protocol):
    def __call__(self, value: float, is_x: bool, total: int, index: int) -> str | None:
        ...


class TextMeasurer(Protocol):
    def __call__(self, text: str, font_size_px: float) -> tuple[int, int]:
        ...


def select_fraction_digits(span: float) -> int:
    if span < 0.1:
        return 6
    if span < 1:
        return 4
    if span < 20:
        return 3
    if span < 100:
        return 1
    return 0


def format_number(value: float, fraction_digits: int) -> str:
    """Group thousands and print at most ``fraction_digits`` decimals, trailing zeros trimmed."""
    if not math.isfinite(value):
        return str(value)
    d = Decimal(str(value))
    try:
        q = d.quantize(Decimal("1").scaleb(-fraction_digits), rounding=ROUND_HALF_EVEN)
    except InvalidOperation:
        q = d
    out = format(q, ",f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def resolve_label_count(configured: int, available_px: float, unit_px: float) -> int:
    """Number of label intervals; ``configured <= 0`` selects the auto count."""
    count = int(configured) - 1
    if count < 0:
        count = max(1, int(math.floor(available_px / max(1.0, unit_px))))
    return count


class AxisLabeler:
    """Generates and caches tick label arrays for both axes."""

    def __init__(self, extrema: ExtremaCalculator, cache: RenderCache) -> None:
        self._extrema = extrema
        self._cache = cache
        self.formatter: LabelFormatter | None = None

    def x_range(self) -> tuple[float, float]:
        return finite_x_range(self._extrema.min_x(), self._extrema.max_x())

    def y_range(self) -> tuple[float, float]:
        return normalize_y_range(self._extrema.min_y(), self._extrema.max_y())

    def fraction_digits(self, is_x: bool) -> int:
        key = "x" if is_x else "y"
        digits = self._cache.fraction_digits.get(key)
        if digits is None:
            if is_x:
                lo, hi = self.x_range()
            else:
                lo, hi = self._extrema.min_y(), self._extrema.max_y()
                if not (math.isfinite(lo) and math.isfinite(hi)):
                    lo, hi = normalize_y_range(lo, hi)
            digits = select_fraction_digits(hi - lo)
            self._cache.fraction_digits[key] = digits
        return digits

    def format_label(self, value: float, is_x: bool, total: int = -1, index: int = -1) -> str:
        if self.formatter is not None:
            label = self.formatter(value, is_x, total, index)
            if label is not None:
                return label
        return format_number(value, self.fraction_digits(is_x))

    def measure_metrics(self, style: GraphStyle, measure: TextMeasurer) -> tuple[int, int]:
        """Return ``(label_text_height, horizontal_label_width)``, measuring once per invalidation."""
        cache = self._cache
        if not cache.metrics_ready:
            lo, hi = finite_x_range(self._extrema.min_x(True), self._extrema.max_x(True))
            probe = self.format_label((hi - lo) * LABEL_PROBE_RATIO + lo, True)
            width, height = measure(probe, style.text_size)
            cache.label_text_height = height
            cache.horizontal_label_width = width
        return (cache.label_text_height, cache.horizontal_label_width)

    def horizontal_labels(self, graph_width: float, style: GraphStyle, measure: TextMeasurer) -> tuple[str, ...]:
        cached = self._cache.horizontal_labels
        if cached is not None:
            return cached
        _, label_width = self.measure_metrics(style, measure)
        count = resolve_label_count(style.num_horizontal_labels, graph_width, label_width * 2)
        lo, hi = self.x_range()
        step = (hi - lo) / count if count else 0.0
        labels = tuple(self.format_label(lo + step * i, True, count + 1, i) for i in range(count + 1))
        self._cache.horizontal_labels = labels
        return labels

    def vertical_labels(self, graph_height: float, style: GraphStyle, measure: TextMeasurer) -> tuple[str, ...]:
        cached = self._cache.vertical_labels
        if cached is not None:
            return cached
        label_height, _ = self.measure_metrics(style, measure)
        count = resolve_label_count(style.num_vertical_labels, graph_height, label_height * 3)
        lo, hi = self.y_range()
        step = (hi - lo) / count if count else 0.0
        labels = [""] * (count + 1)
        for i in range(count + 1):
            labels[count - i] = self.format_label(lo + step * i, False, count + 1, i)
        self._cache.vertical_labels = tuple(labels)
        return self._cache.vertical_labels

    def vertical_label_width(self, graph_height: float, style: GraphStyle, measure: TextMeasurer) -> int:
        cache = self._cache
        if cache.vertical_label_width is None:
            labels = self.vertical_labels(graph_height, style, measure)
            cache.vertical_label_width = max((measure(lbl, style.text_size)[0] for lbl in labels), default=0)
        return cache.vertical_label_width
