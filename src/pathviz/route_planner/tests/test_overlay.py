import numpy as np
from PIL import Image

from pathviz.pathfinding.geometry import Bounds, CoordinateFrame
from pathviz.route_planner.overlay import draw_route_overlay, render_route_map
from pathviz.route_planner.session import RouteSession

GREY = (50, 50, 50, 255)


def make_session(**kw):
    frame = CoordinateFrame.from_bounds(Bounds(0.0, 0.0, 100.0, 100.0), 100)
    s = RouteSession(frame=frame, waypoints=[(10.0, 80.0), (90.0, 80.0)])
    for k, v in kw.items():
        setattr(s, k, v)
    return s


def grey_map(size=100):
    return np.tile(np.array(GREY, dtype=np.uint8), (size, size, 1))


def test_render_draws_markers_where_hit_test_looks():
    s = make_session(show_coverage=False)
    img = render_route_map(grey_map(), s)
    assert img.size == (100, 100)
    r, g, b, a = img.getpixel((10, 20))
    assert (r, g, b, a) != GREY
    assert b > 150 and r < 40
    # far from the route the map is untouched
    assert img.getpixel((50, 80)) == GREY


def test_route_line_toggle():
    with_lines = render_route_map(grey_map(), make_session(show_coverage=False))
    without = render_route_map(grey_map(), make_session(show_coverage=False, show_lines=False))
    assert with_lines.getpixel((50, 20)) != GREY
    assert without.getpixel((50, 20)) == GREY


def test_selected_marker_uses_highlight_colour():
    img = render_route_map(grey_map(), make_session(show_coverage=False, show_lines=False, selected=1))
    r, g, b, _ = img.getpixel((90, 20))
    assert r > 150 and b < 100


def test_coverage_rings_include_resampled_points():
    s = make_session(show_lines=False)
    layer = Image.new('RGBA', (100, 100), (0, 0, 0, 0))
    rings = draw_route_overlay(layer, s, radius=5.0, spacing=20.0)
    # two waypoints plus samples at 20, 40, 60 along the 80-unit leg
    assert rings == 5


def test_render_scales_to_display_size():
    img = render_route_map(grey_map(), make_session(show_coverage=False), display_size=(200, 200))
    assert img.size == (200, 200)
    r, g, b, _ = img.getpixel((20, 40))
    assert b > 150 and r < 40


def test_render_without_map_or_route():
    assert render_route_map(None, make_session()) is None
    empty = RouteSession(frame=make_session().frame)
    img = render_route_map(grey_map(), empty)
    assert img.getpixel((10, 20)) == GREY
