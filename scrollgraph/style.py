from __future__ import annotations

from dataclasses import asdict, dataclass, replace
import re
from typing import Any, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

RGBA = tuple[int, int, int, int]

_COLOR_TOKENS = ("vertical_labels_color", "horizontal_labels_color", "grid_color", "title_color")
_NON_NEGATIVE_INT_TOKENS = (
    "vertical_labels_width",
    "vertical_labels_left_margin",
    "vertical_labels_right_margin",
    "vertical_images_width",
    "vertical_images_left_margin",
    "vertical_images_right_margin",
    "num_vertical_labels",
    "num_horizontal_labels",
)


@dataclass(frozen=True)
class GraphStyle:
    """Graph-wide look. Label counts and the label and image panel widths use ``0`` for auto."""

    vertical_labels_color: str = "#FFFFFFFF"
    horizontal_labels_color: str = "#FFFFFFFF"
    grid_color: str = "#444444FF"
    title_color: str = "#FFFFFFFF"
    font_family: str = "DejaVu Sans"
    text_size: float = 30.0
    vertical_labels_width: int = 0
    vertical_labels_left_margin: int = 0
    vertical_labels_right_margin: int = 0
    vertical_images_width: int = 0
    vertical_images_left_margin: int = 0
    vertical_images_right_margin: int = 0
    num_vertical_labels: int = 0
    num_horizontal_labels: int = 0
    line_gradient_colors: tuple[str, ...] | None = None
    show_bottom_line_and_labels: bool = True
    show_vertical_grid_lines: bool = True


DEFAULT_STYLE = GraphStyle()


def parse_hex_color(value: str) -> RGBA:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"`{value}` must be a hex color (#RRGGBB or #RRGGBBAA)")
    raw = value[1:]
    r = int(raw[0:2], 16)
    g = int(raw[2:4], 16)
    b = int(raw[4:6], 16)
    a = int(raw[6:8], 16) if len(raw) == 8 else 255
    return (r, g, b, a)


def validate_graph_style(overrides: Mapping[str, Any] | None = None, *, base: GraphStyle = DEFAULT_STYLE) -> GraphStyle:
    """Validate and merge style overrides on top of ``base``."""

    raw: dict[str, Any] = asdict(base)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    gradient = raw["line_gradient_colors"]
    if gradient is not None:
        if isinstance(gradient, str) or len(gradient) < 2:
            raise ValueError("Token `line_gradient_colors` must hold at least two colors")
        for color in gradient:
            if not isinstance(color, str) or not _HEX_COLOR.match(color):
                raise ValueError("Token `line_gradient_colors` must hold hex colors")
        raw["line_gradient_colors"] = tuple(gradient)

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    if not isinstance(raw["text_size"], (int, float)) or float(raw["text_size"]) <= 0:
        raise ValueError("Token `text_size` must be a positive number")
    raw["text_size"] = float(raw["text_size"])

    for key in _NON_NEGATIVE_INT_TOKENS:
        if not isinstance(raw[key], int) or isinstance(raw[key], bool) or raw[key] < 0:
            raise ValueError(f"Token `{key}` must be a non-negative integer")

    for key in ("show_bottom_line_and_labels", "show_vertical_grid_lines"):
        raw[key] = bool(raw[key])

    return replace(base, **raw)
