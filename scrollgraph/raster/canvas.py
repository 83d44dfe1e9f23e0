from __future__ import annotations

import numpy as np

from scrollgraph.style import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = color[3] / 255.0
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * (1.0 - a)).astype(np.uint8)
    dst[y, x, 3] = 255


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Composite ``color`` through an 8-bit coverage mask whose top-left corner lands at ``(x, y)``."""
    clip = _clip(dst, x, y, mask.shape[1], mask.shape[0])
    if clip is None:
        return
    x0, y0, x1, y1 = clip

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    _composite(dst[y0:y1, x0:x1], src_rgb, src_alpha)


def blit_rgba(dst: np.ndarray, x: int, y: int, src: np.ndarray) -> None:
    """Alpha-composite an ``(H, W, 4)`` uint8 image whose top-left corner lands at ``(x, y)``."""
    if src.ndim != 3 or src.shape[2] != 4:
        raise ValueError("image must be an (H, W, 4) RGBA array")
    clip = _clip(dst, x, y, src.shape[1], src.shape[0])
    if clip is None:
        return
    x0, y0, x1, y1 = clip

    part = src[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32)
    _composite(dst[y0:y1, x0:x1], part[:, :, :3], part[:, :, 3] / 255.0)


def _clip(dst: np.ndarray, x: int, y: int, w: int, h: int) -> tuple[int, int, int, int] | None:
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return None
    return (x0, y0, x1, y1)


def _composite(patch: np.ndarray, src_rgb: np.ndarray, src_alpha: np.ndarray) -> None:
    if not np.any(src_alpha > 0):
        return
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)

    patch[:, :, :3] = np.clip(out_rgb_num / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)
