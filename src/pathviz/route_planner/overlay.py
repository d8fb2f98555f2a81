"""Route overlay rendering with Pillow.

The overlay is rebuilt from scratch on every call from the session's current
route and toggles: route legs, coverage rings around each waypoint and each
resampled coverage point, waypoint markers and 1-based labels. Positions go
through the session's `CoordinateFrame` at the displayed image size, the same
mapping used by hit testing.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from pathviz.route_planner.config import (
    COVERAGE_COLOR,
    COVERAGE_LINE_WIDTH,
    COVERAGE_SPACING,
    LABEL_COLOR,
    LABEL_OFFSET,
    MARKER_COLOR,
    MARKER_RADIUS,
    ROUTE_LINE_COLOR,
    ROUTE_LINE_WIDTH,
    SELECTED_MARKER_COLOR,
    SELECTED_MARKER_RADIUS,
    SPELLCASTING_RADIUS,
)
from pathviz.route_planner.route import coverage_ring, waypoints_to_display
from pathviz.route_planner.session import RouteSession

logger = logging.getLogger(__name__)


def draw_route_overlay(layer: Image.Image, session: RouteSession,
                       radius: float = SPELLCASTING_RADIUS,
                       spacing: float = COVERAGE_SPACING) -> int:
    """Draw the route of ``session`` onto ``layer`` (treated as the displayed map).

    Returns the number of coverage rings drawn.
    """
    frame = session.frame
    if frame is None or not session.waypoints:
        return 0
    size = layer.size
    origin = (0.0, 0.0)
    draw = ImageDraw.Draw(layer, 'RGBA')
    screen = waypoints_to_display(session.waypoints, origin, size, frame)

    rings = 0
    if session.show_coverage:
        centres = list(session.waypoints) + session.resample_for_coverage(spacing)
        for centre in centres:
            ring = waypoints_to_display(coverage_ring(centre, radius), origin, size, frame)
            draw.line([tuple(p) for p in ring], fill=COVERAGE_COLOR, width=COVERAGE_LINE_WIDTH)
            rings += 1

    if session.show_lines and len(screen) > 1:
        draw.line([tuple(p) for p in screen], fill=ROUTE_LINE_COLOR, width=ROUTE_LINE_WIDTH)

    for i, (cx, cy) in enumerate(screen):
        selected = i == session.selected
        r = SELECTED_MARKER_RADIUS if selected else MARKER_RADIUS
        colour = SELECTED_MARKER_COLOR if selected else MARKER_COLOR
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=colour)
        draw.text((cx + LABEL_OFFSET[0], cy + LABEL_OFFSET[1]), str(i + 1), fill=LABEL_COLOR)
    return rings


def render_route_map(route_map: Optional[np.ndarray], session: RouteSession,
                     display_size: Optional[Tuple[int, int]] = None) -> Optional[Image.Image]:
    """Composite the route overlay over an RGBA route map.

    ``route_map`` is the mask-cut backdrop from
    `PathfindingVisualizer.route_map_rgba`; it is resized to ``display_size``
    when given. Returns None when there is nothing to draw on.
    """
    if route_map is None or np.asarray(route_map).size == 0:
        return None
    base = Image.fromarray(np.ascontiguousarray(route_map, dtype=np.uint8))
    if display_size is not None:
        w, h = int(round(display_size[0])), int(round(display_size[1]))
        if w <= 0 or h <= 0:
            return None
        if (w, h) != base.size:
            base = base.resize((w, h), Image.NEAREST)
    layer = Image.new('RGBA', base.size, (0, 0, 0, 0))
    rings = draw_route_overlay(layer, session)
    logger.debug('rendered overlay: %d waypoints, %d coverage rings', len(session.waypoints), rings)
    return Image.alpha_composite(base, layer)
