"""
viewer.py

Thin pygame front end for a `RouteSession`. All route logic lives in the
session and `route.py`; this module only translates pygame events into
session calls and blits the Pillow-composited route map.

Controls:
- left click: select/drag a waypoint under the pointer, otherwise add one
- mouse wheel: zoom, ``0`` resets zoom
- Delete: remove the selected waypoint, Backspace: undo last
- ``c`` clear, ``l`` toggle route lines, ``v`` toggle coverage rings,
  ``a`` toggle click-to-add, ``s`` export CSV (when an export path is set)

Run ``pathviz-route CHUNK.json [--route in.csv] [--export out.csv]``.
"""
import argparse
import logging
import sys
from typing import Optional, Sequence, Tuple

import pygame

from pathviz.pathfinding.geometry import PathfindingChunk
from pathviz.pathfinding.io import load_chunk_json
from pathviz.pathfinding.utils import safe_log_exception
from pathviz.pathfinding.visualizer import PathfindingVisualizer
from pathviz.route_planner.config import ROUTE_MAP_IMAGE_SIZE
from pathviz.route_planner.io import read_waypoints_csv, write_waypoints_csv
from pathviz.route_planner.overlay import render_route_map
from pathviz.route_planner.session import RouteSession

logger = logging.getLogger(__name__)

MAP_ORIGIN = (10, 10)           # top-left corner of the map inside the window (px)
BACKGROUND = (30, 30, 30)


class RoutePlannerViewer:
    """pygame window that edits a route over a pathfinding chunk."""

    def __init__(self, chunk: Optional[PathfindingChunk], window_size: Tuple[int, int] = (1100, 1000),
                 session: Optional[RouteSession] = None, visualizer: Optional[PathfindingVisualizer] = None,
                 map_index: int = 0, image_size: int = ROUTE_MAP_IMAGE_SIZE, export_path=None):
        self.chunk = chunk
        self.window_size = (int(window_size[0]), int(window_size[1]))
        self.session = session if session is not None else RouteSession()
        self.visualizer = visualizer if visualizer is not None else PathfindingVisualizer()
        self.map_index = map_index
        self.image_size = image_size
        self.export_path = export_path
        self.running = True
        self._route_map = None
        self._cached = None
        self._cache_key = None

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------
    def refresh(self) -> bool:
        """Bring mask, debug image and route map up to date for the current map."""
        ready = self.session.refresh_route_map(self.visualizer, self.chunk, self.map_index, self.image_size)
        if not ready:
            self._route_map = None
            return False
        if not self.visualizer.image_ready or self.visualizer.image_frame != self.visualizer.mask_frame:
            self.visualizer.generate_image(self.chunk, self.image_size)
        self._route_map = self.visualizer.route_map_rgba()
        self._cache_key = None
        return self._route_map is not None

    def map_rect(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """(origin, size) of the displayed map in window coordinates."""
        return MAP_ORIGIN, self.session.display_size(self.window_size)

    # ------------------------------------------------------------------
    # events
    # ------------------------------------------------------------------
    def handle_event(self, event) -> bool:
        """Apply one pygame event to the session. Returns False once the viewer should close."""
        origin, size = self.map_rect()
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.session.press(event.pos, origin, size)
        elif event.type == pygame.MOUSEMOTION and self.session.dragging:
            self.session.drag(event.pos, origin, size)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.session.release()
        elif event.type == pygame.MOUSEWHEEL:
            self.session.zoom_by(event.y)
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
        return self.running

    def _handle_key(self, key) -> None:
        s = self.session
        if key == pygame.K_DELETE:
            s.delete_selected()
        elif key == pygame.K_BACKSPACE:
            s.undo_last()
        elif key == pygame.K_c:
            s.clear()
        elif key == pygame.K_l:
            s.show_lines = not s.show_lines
        elif key == pygame.K_v:
            s.show_coverage = not s.show_coverage
        elif key == pygame.K_a:
            s.click_to_add = not s.click_to_add
        elif key == pygame.K_0:
            s.reset_zoom()
        elif key == pygame.K_s:
            self.export_route()
        elif key == pygame.K_ESCAPE:
            self.running = False

    def export_route(self) -> bool:
        if self.export_path is None or not self.session.waypoints:
            return False
        try:
            write_waypoints_csv(self.export_path, self.session.waypoints)
        except OSError as e:
            safe_log_exception('route export failed', e, path=self.export_path)
            return False
        return True

    # ------------------------------------------------------------------
    # drawing
    # ------------------------------------------------------------------
    def compose(self):
        """Pillow image of route map + overlay at the current display size, cached."""
        if self._route_map is None:
            return None
        _, size = self.map_rect()
        key = (int(round(size[0])), int(round(size[1])), self.session.selected)
        if self.session.overlay_changed() or key != self._cache_key or self._cached is None:
            self._cached = render_route_map(self._route_map, self.session, key[:2])
            self._cache_key = key
        return self._cached

    def draw(self, surface) -> None:
        surface.fill(BACKGROUND)
        img = self.compose()
        if img is None:
            return
        surf = pygame.image.frombuffer(img.tobytes(), img.size, 'RGBA')
        surface.blit(surf, MAP_ORIGIN)

    def run(self, max_frames: Optional[int] = None) -> None:
        pygame.init()
        try:
            screen = pygame.display.set_mode(self.window_size)
            pygame.display.set_caption('Route Planner')
            clock = pygame.time.Clock()
            if not self.refresh():
                logger.warning('no pathfinding data loaded; load a chunk with valid planes to plan routes')
            frames = 0
            while self.running and (max_frames is None or frames < max_frames):
                for event in pygame.event.get():
                    self.handle_event(event)
                self.draw(screen)
                pygame.display.flip()
                clock.tick(60)
                frames += 1
        finally:
            pygame.quit()


def _configure_logging(verbose: bool) -> None:
    log = logging.getLogger('pathviz')
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))
        log.addHandler(h)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description='Plan routes over a pathfinding chunk.')
    p.add_argument('chunk', help='JSON file with already-parsed pathfinding planes')
    p.add_argument('--route', help='CSV of waypoints to import (index,x,y)')
    p.add_argument('--export', help='CSV path written with the s key and on exit')
    p.add_argument('--size', type=int, default=ROUTE_MAP_IMAGE_SIZE, help='route map edge in pixels')
    p.add_argument('--window', type=int, nargs=2, default=(1100, 1000), metavar=('W', 'H'))
    p.add_argument('-v', '--verbose', action='store_true')
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        chunk = load_chunk_json(args.chunk)
    except (OSError, ValueError) as e:
        safe_log_exception('could not load pathfinding chunk', e, path=args.chunk)
        return 1

    session = RouteSession()
    if args.route:
        try:
            session.load_waypoints(read_waypoints_csv(args.route))
        except OSError as e:
            safe_log_exception('could not import route', e, path=args.route)

    viewer = RoutePlannerViewer(chunk, window_size=tuple(args.window), session=session,
                                image_size=args.size, export_path=args.export)
    viewer.run()
    viewer.export_route()
    return 0


if __name__ == '__main__':
    sys.exit(main())
