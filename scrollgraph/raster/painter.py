from __future__ import annotations

import numpy as np

from scrollgraph.commands import Circle, DrawCommand, FilledPolygon, Frame, LineSegment, SideImage, TextLabel
from scrollgraph.raster.canvas import blit_rgba, new_canvas
from scrollgraph.raster.draw_lines import draw_line
from scrollgraph.raster.draw_text import DEFAULT_FONT_FAMILY, draw_text, text_size
from scrollgraph.raster.fill import fill_circle, fill_polygon
from scrollgraph.style import RGBA, parse_hex_color


def paint_frame(
    frame: Frame,
    *,
    background: str = "#000000FF",
    font_family: str = DEFAULT_FONT_FAMILY,
) -> np.ndarray:
    """Rasterize a frame into an ``(H, W, 4)`` uint8 RGBA array."""
    canvas = new_canvas(int(frame.width), int(frame.height), color=parse_hex_color(background))
    for command in frame.commands():
        paint_command(canvas, command, font_family=font_family)
    return canvas


def paint_command(canvas: np.ndarray, command: DrawCommand, *, font_family: str = DEFAULT_FONT_FAMILY) -> None:
    if isinstance(command, LineSegment):
        color = parse_hex_color(command.color)
        if command.gradient:
            mid_y = (command.y0 + command.y1) / 2
            color = gradient_color(command.gradient, mid_y / max(1, canvas.shape[0]))
        draw_line(
            canvas,
            int(round(command.x0)),
            int(round(command.y0)),
            int(round(command.x1)),
            int(round(command.y1)),
            color=color,
            width=max(1, int(round(command.width))),
        )
    elif isinstance(command, FilledPolygon):
        fill_polygon(canvas, command.points, parse_hex_color(command.color))
    elif isinstance(command, Circle):
        fill_circle(canvas, command.x, command.y, command.radius, parse_hex_color(command.color))
    elif isinstance(command, TextLabel):
        w, h = text_size(command.text, font_family=font_family, font_size_px=command.font_size_px)
        x = command.x
        if command.align == "center":
            x -= w / 2
        elif command.align == "right":
            x -= w
        # Label y is the text baseline.
        draw_text(
            canvas,
            int(round(x)),
            int(round(command.y - h)),
            command.text,
            parse_hex_color(command.color),
            font_family=font_family,
            font_size_px=command.font_size_px,
        )
    elif isinstance(command, SideImage):
        blit_rgba(canvas, int(round(command.x)), int(round(command.y)), command.image)
    else:
        raise TypeError(f"unsupported draw command: {type(command)!r}")


def gradient_color(stops: tuple[str, ...], t: float) -> RGBA:
    colors = [parse_hex_color(c) for c in stops]
    if len(colors) == 1:
        return colors[0]
    t = min(1.0, max(0.0, t))
    pos = t * (len(colors) - 1)
    i = min(len(colors) - 2, int(pos))
    frac = pos - i
    a, b = colors[i], colors[i + 1]
    return tuple(int(round(a[k] + (b[k] - a[k]) * frac)) for k in range(4))  # type: ignore[return-value]
