from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from scrollgraph.raster.canvas import blend_mask
from scrollgraph.style import RGBA


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    if len(points) < 3:
        return
    h, w = dst.shape[:2]
    image = Image.new("L", (w, h), 0)
    ImageDraw.Draw(image).polygon([(float(x), float(y)) for x, y in points], fill=255)
    blend_mask(dst, 0, 0, np.asarray(image, dtype=np.uint8), color)


def fill_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    if radius <= 0:
        return
    size = int(np.ceil(radius * 2)) + 1
    image = Image.new("L", (size, size), 0)
    ImageDraw.Draw(image).ellipse((0, 0, size - 1, size - 1), fill=255)
    x0 = int(round(cx - size / 2))
    y0 = int(round(cy - size / 2))
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), color)
