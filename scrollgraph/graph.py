from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Callable, Sequence

import numpy as np

from scrollgraph.cache import InvalidationReason, RenderCache
from scrollgraph.commands import Frame, LineSegment, SideImage, TextLabel
from scrollgraph.errors import GraphStateError
from scrollgraph.extrema import AxisExtrema, ExtremaCalculator, normalize_y_range
from scrollgraph.geometry import BORDER, SIDE_BORDER, GraphLayout, SeriesGeometry, compute_layout
from scrollgraph.gestures import GestureEvent, GestureMapper
from scrollgraph.labels import AxisLabeler, LabelFormatter, TextMeasurer
from scrollgraph.raster.draw_text import text_size
from scrollgraph.renderers import LineSeriesRenderer, SeriesRenderer
from scrollgraph.series import Point, Series
from scrollgraph.store import SeriesStore
from scrollgraph.style import DEFAULT_STYLE, GraphStyle
from scrollgraph.viewport import Viewport, ViewportController


LOGGER = logging.getLogger(__name__)


class Graph:
    """Scrollable, zoomable x/y graph core.

    The host feeds sizes through :meth:`draw` and gestures through
    :meth:`handle_gesture`; ``request_redraw`` is called whenever the host
    should schedule a new draw pass.
    """

    def __init__(
        self,
        title: str = "",
        *,
        style: GraphStyle | None = None,
        renderer: SeriesRenderer | None = None,
        labels_on_right: bool = False,
        text_measurer: TextMeasurer | None = None,
        request_redraw: Callable[[], None] | None = None,
    ) -> None:
        self.title = title or ""
        self.renderer: SeriesRenderer = renderer or LineSeriesRenderer()
        self.labels_on_right = labels_on_right
        self.scalable = False
        self.disable_touch = False
        self.allow_refresh = True
        self._style = style or DEFAULT_STYLE
        self._text_measurer = text_measurer
        self._request_redraw = request_redraw or (lambda: None)
        self._store = SeriesStore()
        self._viewport = ViewportController(self._store.global_x_bounds)
        self._extrema = ExtremaCalculator(self._store, self._viewport)
        self._cache = RenderCache()
        self._labeler = AxisLabeler(self._extrema, self._cache)
        self._gestures = GestureMapper(
            self._viewport,
            enabled=lambda: self.scrollable and not self.disable_touch,
            scalable=lambda: self.scalable,
            graph_width=self._graph_width,
            on_viewport_changed=self._viewport_changed,
        )
        self._last_size: tuple[float, float] | None = None
        self._last_layout: GraphLayout | None = None
        self._pending_lock = threading.Lock()
        self._pending_data = False
        self._pending_scroll = False
        self._side_images: tuple[np.ndarray | None, ...] | None = None

    # configuration

    @property
    def style(self) -> GraphStyle:
        return self._style

    @style.setter
    def style(self, style: GraphStyle) -> None:
        self._style = style
        self._cache.invalidate("style")
        self._request_redraw()

    @property
    def scrollable(self) -> bool:
        return self._viewport.scrollable

    @scrollable.setter
    def scrollable(self, scrollable: bool) -> None:
        self._viewport.scrollable = bool(scrollable)

    def set_scalable(self, scalable: bool) -> None:
        self.scalable = bool(scalable)
        if self.scalable:
            self.scrollable = True

    @property
    def label_formatter(self) -> LabelFormatter | None:
        return self._labeler.formatter

    @label_formatter.setter
    def label_formatter(self, formatter: LabelFormatter | None) -> None:
        self._labeler.formatter = formatter
        self.redraw_all()

    @property
    def render_cache(self) -> RenderCache:
        return self._cache

    @property
    def gestures(self) -> GestureMapper:
        return self._gestures

    @property
    def last_layout(self) -> GraphLayout | None:
        return self._last_layout

    # series

    @property
    def series(self) -> tuple[Series, ...]:
        return tuple(self._store)

    def add_series(self, series: Series) -> None:
        series.attach(self)
        self._store.add(series)
        self.redraw_all("data")

    def remove_series(self, series: Series | int) -> None:
        if isinstance(series, int):
            removed = self._store.pop(series)
        else:
            if not self._store.remove(series):
                LOGGER.warning("remove_series ignored: series is not attached to this graph")
                return
            removed = series
        removed.detach(self)
        self.redraw_all("data")

    def remove_all_series(self) -> None:
        for series in self._store.clear():
            series.detach(self)
        self.redraw_all("data")

    def visible_points(self, series: Series) -> list[Point]:
        vp = self._viewport.viewport
        return series.visible_points(vp.start, vp.size)

    def _on_series_changed(self, series: Series, *, scroll_to_end: bool) -> None:
        # May run on a producer thread: only flag the change for the next draw pass.
        if scroll_to_end and not self.scrollable:
            raise GraphStateError("graph is not scrollable")
        with self._pending_lock:
            self._pending_data = True
            self._pending_scroll = self._pending_scroll or scroll_to_end
        self._request_redraw()

    def apply_pending_updates(self) -> bool:
        with self._pending_lock:
            data, scroll = self._pending_data, self._pending_scroll
            self._pending_data = False
            self._pending_scroll = False
        if scroll and self.scrollable:
            self._viewport.scroll_to_end()
        if data or scroll:
            self._cache.invalidate("data")
        return data or scroll

    # viewport

    @property
    def viewport(self) -> Viewport:
        return dataclasses.replace(self._viewport.viewport)

    def set_viewport(self, start: float, size: float, padding_left: float = 0.0, padding_right: float = 0.0) -> None:
        self._viewport.set_viewport(start, size, padding_left, padding_right)
        self._viewport_changed()

    def clear_viewport(self) -> None:
        self._viewport.clear_viewport()
        self._viewport_changed()

    @property
    def viewport_start(self) -> float:
        return self._viewport.effective_min_x(False)

    def effective_min_x(self, ignore_viewport: bool = False) -> float:
        return self._viewport.effective_min_x(ignore_viewport)

    def effective_max_x(self, ignore_viewport: bool = False) -> float:
        return self._viewport.effective_max_x(ignore_viewport)

    def scroll_to_end(self) -> None:
        if self._viewport.scroll_to_end():
            self._scrolled()

    def scroll_to_end_smooth(self) -> None:
        if self._viewport.scroll_to_end_smooth():
            self._scrolled()

    def _scrolled(self) -> None:
        # Labels must follow the window even while refresh is held back.
        self._cache.invalidate("viewport")
        if self.allow_refresh:
            self._request_redraw()

    def handle_gesture(self, event: GestureEvent) -> bool:
        handled = self._gestures.handle(event)
        if handled:
            self._request_redraw()
        return handled

    def _viewport_changed(self) -> None:
        self._cache.invalidate("viewport")
        self._request_redraw()

    def _graph_width(self) -> float:
        return 0.0 if self._last_layout is None else self._last_layout.graph_width

    # axes

    def set_manual_y_bounds(self, *, max_y: float, min_y: float) -> None:
        self._extrema.set_manual_y_bounds(max_y=max_y, min_y=min_y)
        self.redraw_all()

    def clear_manual_y_bounds(self) -> None:
        self._extrema.clear_manual_y_bounds()
        self.redraw_all()

    def min_y(self) -> float:
        return self._extrema.min_y()

    def max_y(self) -> float:
        return self._extrema.max_y()

    def extrema(self) -> AxisExtrema:
        return self._extrema.extrema()

    def set_horizontal_labels(self, labels: Sequence[str] | None) -> None:
        """Pin labels left to right; ``None`` returns to generated labels."""
        self._cache.set_static_labels("x", labels)

    def set_vertical_labels(self, labels: Sequence[str] | None) -> None:
        """Pin labels top to bottom; ``None`` returns to generated labels."""
        self._cache.set_static_labels("y", labels)

    def set_side_images(self, images: Sequence[np.ndarray | None] | None) -> None:
        """Show one RGBA image beside each vertical label, on the side opposite the labels.

        Images line up with the vertical labels top-down; the list is cut or
        padded with ``None`` to the label count. ``None`` hides the panel.
        """
        if images is None:
            self._side_images = None
        else:
            fitted: list[np.ndarray | None] = []
            for image in images:
                if image is not None:
                    image = np.asarray(image)
                    if image.ndim != 3 or image.shape[2] != 4 or image.dtype != np.uint8:
                        raise ValueError("side images must be (H, W, 4) uint8 arrays")
                fitted.append(image)
            self._side_images = tuple(fitted)
        self.redraw_all()

    def _fitted_side_images(self, count: int) -> list[np.ndarray | None]:
        images = list(self._side_images or ())[:count]
        return images + [None] * (count - len(images))

    def format_label(self, value: float, is_x: bool) -> str:
        return self._labeler.format_label(value, is_x)

    def generate_horizontal_labels(self, graph_width: float) -> tuple[str, ...]:
        return self._labeler.horizontal_labels(graph_width, self._style, self._measure)

    def generate_vertical_labels(self, graph_height: float) -> tuple[str, ...]:
        return self._labeler.vertical_labels(graph_height, self._style, self._measure)

    def redraw_all(self, reason: InvalidationReason = "manual") -> None:
        if not self.allow_refresh:
            return
        self._cache.invalidate(reason)
        self._request_redraw()

    def _measure(self, text: str, font_size_px: float) -> tuple[int, int]:
        if self._text_measurer is not None:
            return self._text_measurer(text, font_size_px)
        return text_size(text, font_family=self._style.font_family, font_size_px=font_size_px)

    # draw pass

    def draw(self, width: float, height: float) -> Frame:
        self.apply_pending_updates()
        if self._last_size != (width, height):
            self._cache.invalidate("size")
            self._last_size = (width, height)

        style = self._style
        label_height, _ = self._labeler.measure_metrics(style, self._measure)
        graph_height = height - 2 * (BORDER + label_height)
        if style.vertical_labels_width:
            panel_width = float(style.vertical_labels_width)
        else:
            panel_width = self._labeler.vertical_label_width(graph_height, style, self._measure) + SIDE_BORDER
        images: list[np.ndarray | None] = []
        image_panel_width = 0.0
        if self._side_images is not None:
            vertical = self._labeler.vertical_labels(graph_height, style, self._measure)
            images = self._fitted_side_images(len(vertical))
            if style.vertical_images_width:
                image_panel_width = float(style.vertical_images_width)
            else:
                widest = max((image.shape[1] for image in images if image is not None), default=0)
                image_panel_width = float(widest + SIDE_BORDER)
        layout = compute_layout(
            width,
            height,
            label_text_height=label_height,
            label_panel_width=panel_width,
            label_panel_left_margin=style.vertical_labels_left_margin,
            label_panel_right_margin=style.vertical_labels_right_margin,
            labels_on_right=self.labels_on_right,
            image_panel_width=image_panel_width,
            image_panel_left_margin=style.vertical_images_left_margin,
            image_panel_right_margin=style.vertical_images_right_margin,
        )
        self._last_layout = layout

        frame = Frame(width=int(width), height=int(height))
        self._draw_axes(frame, layout)
        self._draw_side_images(frame, layout, images)
        self._draw_series(frame, layout)
        return frame

    def _draw_side_images(self, frame: Frame, layout: GraphLayout, images: list[np.ndarray | None]) -> None:
        last = len(images) - 1
        for i, image in enumerate(images):
            if image is None:
                continue
            if i == last and not self._style.show_bottom_line_and_labels:
                continue
            # Image bottoms rest on the matching label row.
            y = layout.graph_height / max(1, last) * i + layout.border
            frame.images.append(SideImage(index=i, x=layout.image_panel_x, y=y - image.shape[0], image=image))

    def _draw_axes(self, frame: Frame, layout: GraphLayout) -> None:
        style = self._style
        vertical = self._labeler.vertical_labels(layout.graph_height, style, self._measure)
        horizontal = self._labeler.horizontal_labels(layout.graph_width, style, self._measure)
        left = layout.horizontal_start
        right = layout.horizontal_start + layout.graph_width

        last = len(vertical) - 1
        for i, text in enumerate(vertical):
            y = layout.graph_height / max(1, last) * i + layout.border
            if i == last and not style.show_bottom_line_and_labels:
                continue
            frame.grid.append(LineSegment(left, y, right, y, color=style.grid_color))
            frame.labels.append(
                TextLabel(text, layout.label_panel_x, y, color=style.vertical_labels_color, font_size_px=style.text_size)
            )

        last = len(horizontal) - 1
        for i, text in enumerate(horizontal):
            x = layout.graph_width / max(1, last) * i + left
            if style.show_vertical_grid_lines:
                frame.grid.append(
                    LineSegment(x, layout.height - layout.border, x, layout.border, color=style.grid_color)
                )
            if style.show_bottom_line_and_labels:
                align = "left" if i == 0 else ("right" if i == last else "center")
                frame.labels.append(
                    TextLabel(
                        text,
                        x,
                        layout.height - 4,
                        color=style.horizontal_labels_color,
                        font_size_px=style.text_size,
                        align=align,
                    )
                )

        if self.title:
            frame.labels.append(
                TextLabel(
                    self.title,
                    layout.graph_width / 2 + left,
                    layout.border - 4,
                    color=style.title_color,
                    font_size_px=style.text_size,
                    align="center",
                )
            )

    def _draw_series(self, frame: Frame, layout: GraphLayout) -> None:
        raw = self._extrema.extrema()
        if not raw.has_data:
            LOGGER.debug("no data in view; skipping series geometry")
            return
        if raw.max_x == raw.min_x:
            LOGGER.debug("x range is a single value (%s); skipping series geometry", raw.min_x)
            return
        min_y, max_y = normalize_y_range(raw.min_y, raw.max_y)
        extrema = AxisExtrema(min_x=raw.min_x, max_x=raw.max_x, min_y=min_y, max_y=max_y)
        vp = self._viewport.viewport
        for series in self._store:
            points = series.visible_points(vp.start, vp.size)
            geometry = SeriesGeometry(
                layout=layout,
                extrema=extrema,
                style=series.style,
                gradient=self._style.line_gradient_colors,
            )
            frame.series.extend(self.renderer.render_series(points, geometry))
