"""Route planning session state.

A `RouteSession` owns one route (ordered waypoints in world coordinates),
the selection/drag state and the display toggles of a planner panel. It
borrows the `CoordinateFrame` published by a `PathfindingVisualizer`; all
pointer handling goes through the pure functions in `route.py` with that
frame so clicks, hit tests and overlays agree pixel for pixel.

Several sessions may coexist; nothing here is module-global.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from pathviz.pathfinding.geometry import CoordinateFrame, PathfindingChunk
from pathviz.pathfinding.visualizer import PathfindingVisualizer
from pathviz.route_planner import route
from pathviz.route_planner.config import (
    COVERAGE_SPACING,
    HIT_RADIUS_PX,
    ROUTE_MAP_IMAGE_SIZE,
    ZOOM_MAX,
    ZOOM_MIN,
    ZOOM_STEP,
)
from pathviz.route_planner.route import Waypoint

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class RouteSession:
    """Waypoints, selection and view toggles of one planning session."""

    def __init__(self, frame: Optional[CoordinateFrame] = None, waypoints: Optional[Sequence[Point]] = None):
        self.frame = frame
        self.waypoints: List[Waypoint] = [Waypoint(float(x), float(y)) for x, y in (waypoints or [])]
        self.selected: Optional[int] = None
        self.click_to_add = True
        self.show_lines = True
        self.show_coverage = True
        self.zoom = 1.0
        self.last_click: Optional[Waypoint] = None
        self.map_index: Optional[int] = None
        self._drag_index: Optional[int] = None
        self._overlay_state = None

    # ------------------------------------------------------------------
    # frame / route map
    # ------------------------------------------------------------------
    def bind_frame(self, frame: Optional[CoordinateFrame]) -> None:
        self.frame = frame

    def refresh_route_map(self, visualizer: PathfindingVisualizer, chunk: Optional[PathfindingChunk],
                          map_index: int, image_size: int = ROUTE_MAP_IMAGE_SIZE) -> bool:
        """Regenerate the walkability mask when the map changed or the mask is stale.

        Binds the session to the visualizer's mask frame and returns whether
        a mask is ready.
        """
        if self.map_index != map_index or not visualizer.mask_ready:
            if chunk is not None and chunk.valid:
                if visualizer.generate_mask(chunk, image_size):
                    self.map_index = map_index
            else:
                logger.debug('map %s has no valid pathfinding chunk', map_index)
        if visualizer.mask_ready:
            self.bind_frame(visualizer.mask_frame)
        return visualizer.mask_ready

    # ------------------------------------------------------------------
    # geometry queries on the owned route
    # ------------------------------------------------------------------
    def image_click_to_world(self, pixel: Point, image_origin: Point, image_size: Point) -> Optional[Waypoint]:
        return route.image_click_to_world(pixel, image_origin, image_size, self.frame)

    def hit_test(self, pixel: Point, image_origin: Point, image_size: Point,
                 max_pixel_distance: float = HIT_RADIUS_PX) -> Optional[int]:
        return route.hit_test(self.waypoints, pixel, image_origin, image_size, self.frame, max_pixel_distance)

    def resample_for_coverage(self, spacing: float = COVERAGE_SPACING) -> List[Waypoint]:
        return route.resample_for_coverage(self.waypoints, spacing)

    # ------------------------------------------------------------------
    # pointer interaction
    # ------------------------------------------------------------------
    @property
    def dragging(self) -> bool:
        return self._drag_index is not None

    def press(self, pixel: Point, image_origin: Point, image_size: Point) -> Optional[int]:
        """Left-button press: grab a waypoint under the pointer or add a new one.

        Returns the selected index afterwards (None when nothing changed).
        """
        hit = self.hit_test(pixel, image_origin, image_size)
        if hit is not None:
            self.selected = hit
            self._drag_index = hit
            return hit

        wp = self.image_click_to_world(pixel, image_origin, image_size)
        if wp is None:
            return None
        self.last_click = wp
        if self.click_to_add:
            self.waypoints.append(wp)
            self.selected = len(self.waypoints) - 1
            logger.debug('added waypoint %d at (%.2f, %.2f)', self.selected, wp.x, wp.y)
        return self.selected

    def drag(self, pixel: Point, image_origin: Point, image_size: Point) -> bool:
        """Move the grabbed waypoint; pointer positions off the map are ignored."""
        if self._drag_index is None or self._drag_index >= len(self.waypoints):
            return False
        wp = self.image_click_to_world(pixel, image_origin, image_size)
        if wp is None:
            return False
        self.waypoints[self._drag_index] = wp
        self.last_click = wp
        return True

    def release(self) -> None:
        self._drag_index = None

    # ------------------------------------------------------------------
    # editing
    # ------------------------------------------------------------------
    def select(self, index: Optional[int]) -> bool:
        if index is None or 0 <= index < len(self.waypoints):
            self.selected = index
            return True
        return False

    def _clamp_selection(self) -> None:
        if self.selected is not None and self.selected >= len(self.waypoints):
            self.selected = len(self.waypoints) - 1 if self.waypoints else None

    def undo_last(self) -> Optional[Waypoint]:
        if not self.waypoints:
            return None
        removed = self.waypoints.pop()
        self._clamp_selection()
        return removed

    def delete_selected(self) -> Optional[Waypoint]:
        if self.selected is None or not (0 <= self.selected < len(self.waypoints)):
            return None
        removed = self.waypoints.pop(self.selected)
        self._clamp_selection()
        self.release()
        return removed

    def clear(self) -> None:
        self.waypoints = []
        self.selected = None
        self.release()

    def load_waypoints(self, waypoints: Sequence[Point]) -> None:
        """Replace the route, e.g. after a CSV import. Indices are positional."""
        self.waypoints = [Waypoint(float(x), float(y)) for x, y in waypoints]
        self.selected = 0 if self.waypoints else None
        self.release()

    # ------------------------------------------------------------------
    # view
    # ------------------------------------------------------------------
    def zoom_by(self, wheel_delta: float) -> float:
        self.zoom = min(ZOOM_MAX, max(ZOOM_MIN, self.zoom + wheel_delta * ZOOM_STEP))
        return self.zoom

    def reset_zoom(self) -> None:
        self.zoom = 1.0

    def display_size(self, available: Point) -> Tuple[float, float]:
        """Displayed map size inside a panel of size ``available`` at the current zoom."""
        if self.frame is None:
            return 0.0, 0.0
        return route.fit_display_size(available, (self.frame.width, self.frame.height), self.zoom)

    def overlay_changed(self) -> bool:
        """True once per change of route, toggles or map since the last call."""
        state = (self.map_index, self.show_lines, self.show_coverage, tuple(self.waypoints))
        if state == self._overlay_state:
            return False
        self._overlay_state = state
        return True
