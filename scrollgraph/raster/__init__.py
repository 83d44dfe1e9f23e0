from .canvas import blend_mask, blit_rgba, new_canvas
from .draw_lines import draw_line
from .draw_text import draw_text, text_size
from .fill import fill_circle, fill_polygon
from .painter import gradient_color, paint_command, paint_frame

__all__ = [
    "blend_mask",
    "blit_rgba",
    "draw_line",
    "draw_text",
    "fill_circle",
    "fill_polygon",
    "gradient_color",
    "new_canvas",
    "paint_command",
    "paint_frame",
    "text_size",
]
