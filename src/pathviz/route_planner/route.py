"""
route.py

Pure route geometry queries. Every function takes the route and the
`CoordinateFrame` explicitly, so the same code serves the interactive
session, overlay rendering and tests.

Display conventions: ``image_origin`` is the screen position of the top-left
corner of the displayed map and ``image_size`` its displayed (possibly
zoomed) size. The frame's native canvas is stretched onto that rectangle.

Public functions:
- `image_click_to_world(pixel, image_origin, image_size, frame)`
- `waypoints_to_display(waypoints, image_origin, image_size, frame)`
- `hit_test(waypoints, pixel, image_origin, image_size, frame, max_pixel_distance)`
- `resample_for_coverage(waypoints, spacing)`
- `coverage_ring(center, radius, segments)`
- `fit_display_size(available, image, zoom)`

"""
import logging
import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from pathviz.pathfinding.geometry import CoordinateFrame
from pathviz.route_planner.config import CIRCLE_SEGMENTS, DISPLAY_MARGIN, MIN_DISPLAY_SCALE

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class Waypoint(NamedTuple):
    x: float
    y: float


def _valid_size(image_size) -> bool:
    return image_size[0] > 0 and image_size[1] > 0


def image_click_to_world(pixel: Point, image_origin: Point, image_size: Point,
                         frame: Optional[CoordinateFrame]) -> Optional[Waypoint]:
    """World position under a pointer, or None when it misses the displayed map."""
    if frame is None or not _valid_size(image_size):
        return None
    rel_x = (pixel[0] - image_origin[0]) / image_size[0]
    rel_y = (pixel[1] - image_origin[1]) / image_size[1]
    if not (0.0 <= rel_x <= 1.0 and 0.0 <= rel_y <= 1.0):
        return None
    x, y = frame.display_to_world(pixel[0] - image_origin[0], pixel[1] - image_origin[1], image_size)
    return Waypoint(x, y)


def waypoints_to_display(waypoints: Sequence[Point], image_origin: Point, image_size: Point,
                         frame: CoordinateFrame) -> np.ndarray:
    """Screen positions of ``waypoints`` as an (N, 2) array."""
    if len(waypoints) == 0:
        return np.empty((0, 2), dtype=float)
    pts = np.asarray(waypoints, dtype=float)
    px, py = frame.world_to_display(pts[:, 0], pts[:, 1], image_size)
    return np.column_stack([px + image_origin[0], py + image_origin[1]])


def hit_test(waypoints: Sequence[Point], pixel: Point, image_origin: Point, image_size: Point,
             frame: Optional[CoordinateFrame], max_pixel_distance: float) -> Optional[int]:
    """Index of the waypoint nearest to ``pixel`` within ``max_pixel_distance``.

    The running best starts at the squared threshold and is replaced on
    ``<=``, so the closest waypoint wins and, at equal distance, the later
    index wins. A negative threshold matches nothing.
    """
    if frame is None or len(waypoints) == 0 or not _valid_size(image_size):
        return None
    if max_pixel_distance < 0:
        return None
    screen = waypoints_to_display(waypoints, image_origin, image_size, frame)
    dist_sq = (screen[:, 0] - pixel[0]) ** 2 + (screen[:, 1] - pixel[1]) ** 2

    best_index = None
    best_sq = float(max_pixel_distance) ** 2
    for i, d in enumerate(dist_sq):
        if d <= best_sq:
            best_sq = float(d)
            best_index = i
    return best_index


def resample_for_coverage(waypoints: Sequence[Point], spacing: float) -> List[Waypoint]:
    """Interior points every ``spacing`` world units along each route leg.

    Endpoints are never emitted; legs no longer than ``spacing`` add nothing.
    """
    if spacing <= 0:
        logger.warning('coverage spacing must be positive, got %r', spacing)
        return []
    samples: List[Waypoint] = []
    for (ax, ay), (bx, by) in zip(waypoints[:-1], waypoints[1:]):
        dx = bx - ax
        dy = by - ay
        length = math.hypot(dx, dy)
        if length <= spacing:
            continue
        ux = dx / length
        uy = dy / length
        steps = int(length // spacing)
        for k in range(1, steps + 1):
            t = k * spacing
            if t >= length:
                break
            samples.append(Waypoint(ax + ux * t, ay + uy * t))
    return samples


def coverage_ring(center: Point, radius: float, segments: int = CIRCLE_SEGMENTS) -> List[Waypoint]:
    """Closed polyline approximating a circle; the first point is repeated last."""
    segments = max(3, int(segments))
    cx, cy = center
    angles = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    ring = [Waypoint(cx + radius * math.cos(a), cy + radius * math.sin(a)) for a in angles]
    ring[-1] = ring[0]
    return ring


def fit_display_size(available: Point, image: Point, zoom: float = 1.0) -> Tuple[float, float]:
    """Displayed map size for a panel of size ``available``.

    The map is fitted inside the panel minus `DISPLAY_MARGIN`, never shrunk
    below `MIN_DISPLAY_SCALE`, then multiplied by ``zoom``.
    """
    img_w, img_h = float(image[0]), float(image[1])
    if img_w <= 0 or img_h <= 0:
        return 0.0, 0.0
    scale = min((available[0] - DISPLAY_MARGIN[0]) / img_w,
                (available[1] - DISPLAY_MARGIN[1]) / img_h)
    scale = max(MIN_DISPLAY_SCALE, scale) * zoom
    return img_w * scale, img_h * scale
