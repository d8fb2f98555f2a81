import json

import pytest

pygame = pytest.importorskip('pygame')

from pathviz.pathfinding.geometry import PathfindingChunk, Plane, Trapezoid
from pathviz.route_planner.io import read_waypoints_csv
from pathviz.route_planner.viewer import RoutePlannerViewer, build_parser, main


def square_chunk():
    return PathfindingChunk([Plane([Trapezoid([(0, 0), (100, 0), (100, 100), (0, 100)])])])


@pytest.fixture
def viewer():
    pygame.init()
    v = RoutePlannerViewer(square_chunk(), window_size=(300, 300), image_size=64)
    assert v.refresh()
    yield v
    pygame.quit()


def click(pos, kind=None, button=1):
    return pygame.event.Event(kind or pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_map_rect_fits_window(viewer):
    origin, size = viewer.map_rect()
    assert origin == (10, 10)
    # (300 - 120) / 64 limits the scale
    assert size == pytest.approx((180.0, 180.0))


def test_click_adds_waypoint_and_keys_edit(viewer):
    assert viewer.handle_event(click((100, 100)))
    wp = viewer.session.waypoints[0]
    assert wp.x == pytest.approx(50.0)
    assert wp.y == pytest.approx(50.0)

    viewer.handle_event(click((40, 40)))
    assert len(viewer.session.waypoints) == 2
    viewer.handle_event(key(pygame.K_BACKSPACE))
    assert len(viewer.session.waypoints) == 1

    viewer.handle_event(key(pygame.K_l))
    assert not viewer.session.show_lines
    viewer.handle_event(key(pygame.K_c))
    assert viewer.session.waypoints == []


def test_drag_moves_selected_waypoint(viewer):
    viewer.handle_event(click((100, 100)))
    viewer.handle_event(click((100, 100)))
    assert viewer.session.dragging
    viewer.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(55, 100), rel=(-45, 0), buttons=(1, 0, 0)))
    viewer.handle_event(click((55, 100), pygame.MOUSEBUTTONUP))
    assert not viewer.session.dragging
    assert len(viewer.session.waypoints) == 1
    assert viewer.session.waypoints[0].x == pytest.approx(25.0)


def test_wheel_zoom_and_reset(viewer):
    viewer.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1))
    assert viewer.session.zoom == pytest.approx(1.1)
    viewer.handle_event(key(pygame.K_0))
    assert viewer.session.zoom == 1.0


def test_quit_and_escape_stop_viewer(viewer):
    assert not viewer.handle_event(pygame.event.Event(pygame.QUIT))
    viewer.running = True
    assert not viewer.handle_event(key(pygame.K_ESCAPE))


def test_draw_blits_route_map(viewer):
    viewer.handle_event(click((100, 100)))
    surface = pygame.Surface((300, 300), pygame.SRCALPHA)
    viewer.draw(surface)
    # walkable map pixel away from the overlay is opaque, background stays outside
    assert surface.get_at((180, 180)).a == 255
    assert tuple(surface.get_at((250, 250)))[:3] == (30, 30, 30)
    assert viewer.compose() is viewer.compose()


def test_draw_without_geometry_leaves_background():
    pygame.init()
    try:
        v = RoutePlannerViewer(PathfindingChunk(valid=False), window_size=(200, 200), image_size=32)
        assert not v.refresh()
        surface = pygame.Surface((200, 200))
        v.draw(surface)
        assert tuple(surface.get_at((50, 50)))[:3] == (30, 30, 30)
    finally:
        pygame.quit()


def test_export_route(viewer, tmp_path):
    assert not viewer.export_route()
    viewer.export_path = tmp_path / 'out.csv'
    assert not viewer.export_route()
    viewer.handle_event(click((100, 100)))
    viewer.handle_event(key(pygame.K_s))
    assert len(read_waypoints_csv(viewer.export_path)) == 1


def test_build_parser_defaults():
    args = build_parser().parse_args(['chunk.json', '--export', 'out.csv'])
    assert args.chunk == 'chunk.json'
    assert args.export == 'out.csv'
    assert args.size == 1024
    assert tuple(args.window) == (1100, 1000)


def test_main_reports_missing_chunk(tmp_path):
    assert main([str(tmp_path / 'missing.json')]) == 1


def test_main_runs_briefly(tmp_path, monkeypatch):
    chunk_path = tmp_path / 'chunk.json'
    chunk_path.write_text(json.dumps({'planes': [{'walkable': True,
                                                  'trapezoids': [[[0, 0], [10, 0], [10, 10], [0, 10]]]}]}))
    route_path = tmp_path / 'route.csv'
    route_path.write_text('index,x,y\n0,1.0,2.0\n1,5.0,5.0\n')
    out = tmp_path / 'out.csv'

    original_run = RoutePlannerViewer.run
    monkeypatch.setattr(RoutePlannerViewer, 'run', lambda self: original_run(self, max_frames=2))
    assert main([str(chunk_path), '--route', str(route_path), '--export', str(out),
                 '--size', '32', '--window', '200', '200']) == 0
    assert len(read_waypoints_csv(out)) == 2
