import math

import pytest

from pathviz.pathfinding.geometry import Bounds, CoordinateFrame
from pathviz.route_planner.route import (
    Waypoint,
    coverage_ring,
    fit_display_size,
    hit_test,
    image_click_to_world,
    resample_for_coverage,
    waypoints_to_display,
)


@pytest.fixture
def frame():
    # 1 world unit == 1 native pixel, world y = 1024 - pixel y
    return CoordinateFrame.from_bounds(Bounds(0.0, 0.0, 1024.0, 1024.0), 1024)


ORIGIN = (0.0, 0.0)
NATIVE = (1024.0, 1024.0)


def test_click_inside_maps_to_world(frame):
    wp = image_click_to_world((356.0, 178.0), (100.0, 50.0), (512.0, 512.0), frame)
    assert wp == Waypoint(512.0, 768.0)


def test_click_on_far_corner_is_accepted(frame):
    wp = image_click_to_world((612.0, 562.0), (100.0, 50.0), (512.0, 512.0), frame)
    assert wp == Waypoint(1024.0, 0.0)


@pytest.mark.parametrize('pixel', [(99.0, 60.0), (300.0, 49.0), (613.0, 60.0), (300.0, 563.0)])
def test_click_outside_is_rejected(frame, pixel):
    assert image_click_to_world(pixel, (100.0, 50.0), (512.0, 512.0), frame) is None


def test_click_without_frame_or_size(frame):
    assert image_click_to_world((1.0, 1.0), ORIGIN, (0.0, 10.0), frame) is None
    assert image_click_to_world((1.0, 1.0), ORIGIN, NATIVE, None) is None


def test_click_roundtrips_through_display(frame):
    wp = image_click_to_world((333.0, 444.0), (10.0, 20.0), (700.0, 700.0), frame)
    screen = waypoints_to_display([wp], (10.0, 20.0), (700.0, 700.0), frame)
    assert screen[0][0] == pytest.approx(333.0)
    assert screen[0][1] == pytest.approx(444.0)


def test_hit_test_picks_closest_within_threshold(frame):
    click = (500.0, 500.0)
    # pixel distances 3, 50 and 200 from the click
    route = [Waypoint(503.0, 524.0), Waypoint(500.0, 474.0), Waypoint(700.0, 524.0)]
    assert hit_test(route, click, ORIGIN, NATIVE, frame, 10.0) == 0
    assert hit_test(route, click, ORIGIN, NATIVE, frame, 2.0) is None
    assert hit_test(route, click, ORIGIN, NATIVE, frame, 60.0) == 0


def test_hit_test_prefers_closer_later_waypoint(frame):
    route = [Waypoint(508.0, 524.0), Waypoint(502.0, 524.0)]
    assert hit_test(route, (500.0, 500.0), ORIGIN, NATIVE, frame, 10.0) == 1


def test_hit_test_equal_distance_later_index_wins(frame):
    route = [Waypoint(504.0, 524.0), Waypoint(496.0, 524.0), Waypoint(800.0, 10.0)]
    assert hit_test(route, (500.0, 500.0), ORIGIN, NATIVE, frame, 10.0) == 1


def test_hit_test_threshold_is_inclusive(frame):
    route = [Waypoint(510.0, 524.0)]
    assert hit_test(route, (500.0, 500.0), ORIGIN, NATIVE, frame, 10.0) == 0


def test_hit_test_uses_display_pixels(frame):
    # at half size a 16 world-unit offset is 8 display pixels
    route = [Waypoint(516.0, 524.0)]
    assert hit_test(route, (250.0, 250.0), ORIGIN, (512.0, 512.0), frame, 10.0) == 0
    assert hit_test(route, (500.0, 500.0), ORIGIN, NATIVE, frame, 10.0) is None


def test_hit_test_empty_route(frame):
    assert hit_test([], (0.0, 0.0), ORIGIN, NATIVE, frame, 10.0) is None


def test_hit_test_negative_threshold_matches_nothing(frame):
    route = [Waypoint(503.0, 524.0)]
    assert hit_test(route, (500.0, 500.0), ORIGIN, NATIVE, frame, -5.0) is None
    assert hit_test(route, (503.0, 500.0), ORIGIN, NATIVE, frame, 0.0) == 0


def test_resample_long_leg():
    samples = resample_for_coverage([Waypoint(0.0, 0.0), Waypoint(350.0, 0.0)], 100.0)
    assert samples == [Waypoint(100.0, 0.0), Waypoint(200.0, 0.0), Waypoint(300.0, 0.0)]


def test_resample_short_leg():
    assert resample_for_coverage([Waypoint(0.0, 0.0), Waypoint(50.0, 0.0)], 100.0) == []


def test_resample_exact_multiple_excludes_endpoint():
    samples = resample_for_coverage([(0.0, 0.0), (0.0, 300.0)], 100.0)
    assert samples == [Waypoint(0.0, 100.0), Waypoint(0.0, 200.0)]


def test_resample_diagonal_and_multiple_legs():
    route = [(0.0, 0.0), (300.0, 400.0), (300.0, 450.0)]
    samples = resample_for_coverage(route, 200.0)
    assert len(samples) == 2
    assert samples[0].x == pytest.approx(120.0)
    assert samples[0].y == pytest.approx(160.0)
    assert samples[1].x == pytest.approx(240.0)
    assert samples[1].y == pytest.approx(320.0)


def test_resample_degenerate_inputs():
    assert resample_for_coverage([], 100.0) == []
    assert resample_for_coverage([(1.0, 2.0)], 100.0) == []
    assert resample_for_coverage([(0.0, 0.0), (500.0, 0.0)], 0.0) == []


def test_coverage_ring_is_closed_circle():
    ring = coverage_ring((10.0, -5.0), 100.0, segments=48)
    assert len(ring) == 49
    assert ring[0] == ring[-1]
    assert ring[0] == Waypoint(110.0, -5.0)
    for x, y in ring:
        assert math.hypot(x - 10.0, y + 5.0) == pytest.approx(100.0)


def test_fit_display_size():
    # (1100 - 20) / 1024 vs (1000 - 120) / 1024 -> vertical limit
    w, h = fit_display_size((1100.0, 1000.0), (1024.0, 1024.0))
    assert w == pytest.approx(880.0) and h == pytest.approx(880.0)
    w, h = fit_display_size((1100.0, 1000.0), (1024.0, 1024.0), zoom=2.0)
    assert w == pytest.approx(1760.0)
    # tiny panels never shrink the map below the minimum scale
    w, _ = fit_display_size((10.0, 10.0), (1000.0, 1000.0))
    assert w == pytest.approx(100.0)
    assert fit_display_size((500.0, 500.0), (0.0, 0.0)) == (0.0, 0.0)
