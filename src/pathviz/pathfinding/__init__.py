# pathviz/pathfinding/__init__.py

from pathviz.pathfinding.geometry import (
    Bounds,
    CoordinateFrame,
    PathfindingChunk,
    Plane,
    Trapezoid,
    compute_bounds,
)
from pathviz.pathfinding.raster import draw_line, fill_polygon, hsv_to_rgb, line_pixels, plane_color
from pathviz.pathfinding.visualizer import PathfindingVisualizer


__all__ = [
    # Geometry
    "Bounds",
    "CoordinateFrame",
    "PathfindingChunk",
    "Plane",
    "Trapezoid",
    "compute_bounds",
    # Rasterization
    "draw_line",
    "fill_polygon",
    "hsv_to_rgb",
    "line_pixels",
    "plane_color",
    # Image / mask generation
    "PathfindingVisualizer",
]
