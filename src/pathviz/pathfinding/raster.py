"""
raster.py

CPU rasterization primitives for RGBA pixel buffers.

Buffers are ``numpy.ndarray`` objects of shape (height, width, 4), dtype
uint8, row-major. Every primitive clips silently at the buffer edges and
returns the number of pixels it wrote so callers and tests can reason about
coverage without re-scanning the buffer.

Public functions:
- `new_buffer(width, height)` -> transparent buffer
- `fill_polygon(buffer, points, color)` -> scanline even-odd fill
- `line_pixels(x0, y0, x1, y1)` / `draw_line(buffer, ...)` -> Bresenham
- `hsv_to_rgb(h, s, v, a)` / `plane_color(index, plane_count)` -> RGBA

"""
import math
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from pathviz.pathfinding.config import HUE_STEP, PLANE_SATURATION, PLANE_VALUE
from pathviz.pathfinding.utils import as_points

RGBA = Tuple[int, int, int, int]


def new_buffer(width: int, height: int) -> np.ndarray:
    """Allocate a fully transparent RGBA buffer."""
    return np.zeros((int(height), int(width), 4), dtype=np.uint8)


def fill_polygon(buffer: np.ndarray, points: Sequence[Tuple[float, float]], color: RGBA) -> int:
    """Fill a simple polygon given in pixel coordinates.

    Each row is sampled at its centre line ``y = row + 0.5``. Edges are the
    consecutive vertex pairs plus the closing edge; an edge contributes an
    intersection when ``min(y0, y1) <= y < max(y0, y1)``, which drops
    horizontal edges and counts a shared vertex once. Spans between sorted
    intersection pairs are filled (even-odd rule), covering every pixel
    whose centre lies inside the span.
    """
    pts = as_points(points)
    if pts.shape[0] < 3 or not np.isfinite(pts).all():
        return 0

    height, width = buffer.shape[:2]
    x0 = pts[:, 0]
    y0 = pts[:, 1]
    x1 = np.roll(x0, -1)
    y1 = np.roll(y0, -1)

    keep = y0 != y1
    x0, y0, x1, y1 = x0[keep], y0[keep], x1[keep], y1[keep]
    if x0.size == 0:
        return 0
    lo = np.minimum(y0, y1)
    hi = np.maximum(y0, y1)
    inv_slope = (x1 - x0) / (y1 - y0)

    row_start = max(0, math.ceil(float(lo.min()) - 0.5))
    row_stop = min(height, math.ceil(float(hi.max()) - 0.5))
    rgba = np.asarray(color, dtype=np.uint8)

    written = 0
    for row in range(row_start, row_stop):
        yc = row + 0.5
        active = (lo <= yc) & (yc < hi)
        if not np.any(active):
            continue
        xs = np.sort(x0[active] + (yc - y0[active]) * inv_slope[active])
        for a, b in zip(xs[0::2], xs[1::2]):
            start = max(0, math.ceil(a - 0.5))
            stop = min(width, math.ceil(b - 0.5))
            if start < stop:
                buffer[row, start:stop] = rgba
                written += stop - start
    return written


def line_pixels(x0: int, y0: int, x1: int, y1: int) -> Iterator[Tuple[int, int]]:
    """Yield the integer pixels of a segment, both endpoints included."""
    x0, y0, x1, y1 = int(x0), int(y0), int(x1), int(y1)
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def draw_line(buffer: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> int:
    """Stroke a single-pixel Bresenham line, clipping at the buffer edges."""
    height, width = buffer.shape[:2]
    rgba = np.asarray(color, dtype=np.uint8)
    written = 0
    for x, y in line_pixels(x0, y0, x1, y1):
        if 0 <= x < width and 0 <= y < height:
            buffer[y, x] = rgba
            written += 1
    return written


def hsv_to_rgb(h: float, s: float, v: float, a: int = 255) -> RGBA:
    """Convert HSV (h in degrees, s and v in [0, 1]) to an 8-bit RGBA tuple."""
    h = float(h) % 360.0
    c = v * s
    hp = h / 60.0
    x = c * (1.0 - abs(hp % 2.0 - 1.0))
    m = v - c
    sector = int(hp)
    if sector == 0:
        r, g, b = c, x, 0.0
    elif sector == 1:
        r, g, b = x, c, 0.0
    elif sector == 2:
        r, g, b = 0.0, c, x
    elif sector == 3:
        r, g, b = 0.0, x, c
    elif sector == 4:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x
    return (int(round((r + m) * 255)), int(round((g + m) * 255)),
            int(round((b + m) * 255)), int(a))


def plane_color(index: int, plane_count: Optional[int] = None) -> RGBA:
    """Deterministic, distinguishable fill colour for a plane index.

    With ``plane_count`` the hue wheel is split evenly between planes;
    without it consecutive planes are `HUE_STEP` degrees apart.
    """
    if plane_count:
        hue = (index % plane_count) / float(plane_count) * 360.0
    else:
        hue = (index * HUE_STEP) % 360.0
    return hsv_to_rgb(hue, PLANE_SATURATION, PLANE_VALUE)
