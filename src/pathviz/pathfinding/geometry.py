"""
geometry.py

Navigation geometry containers and the world <-> pixel coordinate frame
shared by rasterization, overlay drawing and hit testing.

Public names:
- `Trapezoid`, `Plane`, `PathfindingChunk` : already-parsed geometry
- `Bounds`, `compute_bounds(planes)` : world bounding box of all vertices
- `CoordinateFrame` : uniform scale + offset mapping, Y flipped so that
  pixel row 0 is the maximum-Y edge of the world box

"""
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence, Tuple
import numpy as np

from pathviz.pathfinding.config import DEFAULT_BOUNDS, MIN_SPAN
from pathviz.pathfinding.utils import as_points


@dataclass(frozen=True)
class Trapezoid:
    """Convex navigation cell. Despite the name it may have any vertex count >= 3."""
    vertices: Tuple[Tuple[float, float], ...]
    plane_index: int = 0

    def __post_init__(self):
        # normalise lists of lists into hashable tuples of float pairs
        verts = tuple((float(x), float(y)) for x, y in self.vertices)
        object.__setattr__(self, 'vertices', verts)

    def as_array(self) -> np.ndarray:
        return as_points(self.vertices)


@dataclass
class Plane:
    """Group of trapezoids sharing walkability semantics."""
    trapezoids: List[Trapezoid] = field(default_factory=list)
    walkable: bool = True


@dataclass
class PathfindingChunk:
    """Ordered planes of a map's pathfinding chunk plus its validity flag."""
    planes: List[Plane] = field(default_factory=list)
    valid: bool = True

    @property
    def plane_count(self) -> int:
        return len(self.planes)

    @property
    def trapezoid_count(self) -> int:
        return sum(len(p.trapezoids) for p in self.planes)

    @property
    def is_empty(self) -> bool:
        return (not self.valid) or self.trapezoid_count == 0


class Bounds(NamedTuple):
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def compute_bounds(planes: Optional[Sequence[Plane]]) -> Bounds:
    """Bounding box of every finite vertex in ``planes``.

    Returns `DEFAULT_BOUNDS` when there are no usable vertices so NaN or
    infinite extents never reach the coordinate frame.
    """
    chunks = []
    for plane in planes or ():
        for trap in plane.trapezoids:
            pts = trap.as_array()
            if pts.size:
                chunks.append(pts)
    if not chunks:
        return Bounds(*DEFAULT_BOUNDS)

    pts = np.concatenate(chunks, axis=0)
    pts = pts[np.all(np.isfinite(pts), axis=1)]
    if pts.shape[0] == 0:
        return Bounds(*DEFAULT_BOUNDS)

    mn = pts.min(axis=0)
    mx = pts.max(axis=0)
    return Bounds(float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1]))


@dataclass(frozen=True)
class CoordinateFrame:
    """World bounding box plus the derived world -> pixel scale.

    ``scale_x`` and ``scale_y`` are always equal: the box is letterboxed into
    a ``width`` x ``height`` canvas anchored at (min_x, max_y).
    """
    min_x: float
    min_y: float
    max_x: float
    max_y: float
    scale_x: float
    scale_y: float
    width: int
    height: int

    @classmethod
    def from_bounds(cls, bounds: Bounds, image_size: int) -> 'CoordinateFrame':
        image_size = int(image_size)
        if image_size <= 0:
            raise ValueError(f'image_size must be positive, got {image_size}')
        span_x = max(bounds.max_x - bounds.min_x, MIN_SPAN)
        span_y = max(bounds.max_y - bounds.min_y, MIN_SPAN)
        scale = image_size / max(span_x, span_y)
        return cls(float(bounds.min_x), float(bounds.min_y),
                   float(bounds.max_x), float(bounds.max_y),
                   scale, scale, image_size, image_size)

    @property
    def bounds(self) -> Bounds:
        return Bounds(self.min_x, self.min_y, self.max_x, self.max_y)

    def world_to_pixel(self, x, y):
        """Map world coordinates to (fractional) native pixel coordinates.

        Accepts scalars or array-likes; returns the same kind.
        """
        px = (np.asarray(x, dtype=float) - self.min_x) * self.scale_x
        py = (self.max_y - np.asarray(y, dtype=float)) * self.scale_y
        if px.shape == ():
            return float(px), float(py)
        return px, py

    def pixel_to_world(self, px, py):
        """Exact inverse of `world_to_pixel`."""
        x = np.asarray(px, dtype=float) / self.scale_x + self.min_x
        y = self.max_y - np.asarray(py, dtype=float) / self.scale_y
        if x.shape == ():
            return float(x), float(y)
        return x, y

    def display_factors(self, display_size) -> Tuple[float, float]:
        """Ratio of a displayed (possibly zoomed) image size to the native canvas."""
        dw, dh = display_size
        return float(dw) / self.width, float(dh) / self.height

    def world_to_display(self, x, y, display_size):
        fx, fy = self.display_factors(display_size)
        px, py = self.world_to_pixel(x, y)
        return px * fx, py * fy

    def display_to_world(self, px, py, display_size):
        fx, fy = self.display_factors(display_size)
        return self.pixel_to_world(np.asarray(px, dtype=float) / fx,
                                   np.asarray(py, dtype=float) / fy)
