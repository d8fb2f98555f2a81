# pathviz/route_planner/__init__.py

from pathviz.route_planner.route import (
    Waypoint,
    coverage_ring,
    fit_display_size,
    hit_test,
    image_click_to_world,
    resample_for_coverage,
)
from pathviz.route_planner.session import RouteSession


__all__ = [
    "Waypoint",
    "RouteSession",
    "coverage_ring",
    "fit_display_size",
    "hit_test",
    "image_click_to_world",
    "resample_for_coverage",
]
