"""
visualizer.py

`PathfindingVisualizer` turns a `PathfindingChunk` into two independent
RGBA buffers that share one coordinate frame:

- the debug image: every trapezoid filled with its plane colour and stroked
  with `OUTLINE_COLOR`
- the walkability mask: trapezoids of walkable planes filled with the opaque
  `MASK_COLOR`, everything else transparent

Regeneration always replaces a buffer and its frame wholesale. Invalid or
empty input leaves the corresponding buffer empty and its ready flag False;
nothing here raises for bad geometry. Keeping the image and mask aligned
(same chunk, same size) is the caller's responsibility; `frames_aligned`
only reports on it.
"""
import logging
from typing import Optional

import numpy as np
from PIL import Image

from pathviz.pathfinding.config import DEFAULT_IMAGE_SIZE, MASK_COLOR, OUTLINE_COLOR
from pathviz.pathfinding.geometry import CoordinateFrame, PathfindingChunk, Trapezoid, compute_bounds
from pathviz.pathfinding.raster import draw_line, fill_polygon, new_buffer, plane_color

logger = logging.getLogger(__name__)


def _empty_buffer() -> np.ndarray:
    return np.zeros((0, 0, 4), dtype=np.uint8)


def _read_only(buffer: np.ndarray) -> np.ndarray:
    view = buffer.view()
    view.flags.writeable = False
    return view


class PathfindingVisualizer:
    """Owns the debug image, the walkability mask and their published frame."""

    def __init__(self):
        self.clear()

    def clear(self) -> None:
        """Drop both buffers and every published value."""
        self._image = _empty_buffer()
        self._mask = _empty_buffer()
        self._image_frame: Optional[CoordinateFrame] = None
        self._mask_frame: Optional[CoordinateFrame] = None
        self._frame: Optional[CoordinateFrame] = None
        self.image_ready = False
        self.mask_ready = False
        self.trapezoid_count = 0
        self.plane_count = 0

    # ------------------------------------------------------------------
    # generation
    # ------------------------------------------------------------------
    def _prepare(self, chunk: Optional[PathfindingChunk], image_size: int) -> Optional[CoordinateFrame]:
        if chunk is None or not chunk.valid:
            logger.warning('pathfinding chunk missing or invalid; nothing to rasterize')
            return None
        if chunk.trapezoid_count == 0:
            logger.warning('pathfinding chunk has no trapezoids; nothing to rasterize')
            return None
        if int(image_size) <= 0:
            logger.warning('image size %r is not positive; nothing to rasterize', image_size)
            return None
        return CoordinateFrame.from_bounds(compute_bounds(chunk.planes), image_size)

    @staticmethod
    def _pixel_points(trap: Trapezoid, frame: CoordinateFrame) -> np.ndarray:
        pts = trap.as_array()
        if pts.shape[0] == 0:
            return pts
        if not np.isfinite(pts).all():
            # treated like a degenerate trapezoid by the generate loops
            return np.empty((0, 2), dtype=float)
        px, py = frame.world_to_pixel(pts[:, 0], pts[:, 1])
        return np.column_stack([px, py])

    def generate_image(self, chunk: Optional[PathfindingChunk], image_size: int = DEFAULT_IMAGE_SIZE) -> bool:
        """Rasterize every trapezoid with per-plane colours and outlines."""
        self._image = _empty_buffer()
        self._image_frame = None
        self.image_ready = False
        self.trapezoid_count = 0
        self.plane_count = 0

        frame = self._prepare(chunk, image_size)
        if frame is None:
            return False

        buffer = new_buffer(frame.width, frame.height)
        plane_total = chunk.plane_count
        filled = 0
        for plane_pos, plane in enumerate(chunk.planes):
            fill = plane_color(plane_pos, plane_total)
            for trap in plane.trapezoids:
                pts = self._pixel_points(trap, frame)
                if pts.shape[0] < 3:
                    logger.debug('skipping degenerate or non-finite trapezoid in plane %d', plane_pos)
                    continue
                filled += fill_polygon(buffer, pts, fill)
                ipts = np.floor(pts).astype(int)
                for (ax, ay), (bx, by) in zip(ipts, np.roll(ipts, -1, axis=0)):
                    draw_line(buffer, ax, ay, bx, by, OUTLINE_COLOR)

        self._image = buffer
        self._image_frame = frame
        self._frame = frame
        self.trapezoid_count = chunk.trapezoid_count
        self.plane_count = plane_total
        self.image_ready = True
        logger.info('generated %dx%d pathfinding image: %d planes, %d trapezoids, %d px filled',
                    frame.width, frame.height, plane_total, self.trapezoid_count, filled)
        return True

    def generate_mask(self, chunk: Optional[PathfindingChunk], image_size: int = DEFAULT_IMAGE_SIZE) -> bool:
        """Rasterize walkable planes into an opaque-alpha stencil."""
        self._mask = _empty_buffer()
        self._mask_frame = None
        self.mask_ready = False

        frame = self._prepare(chunk, image_size)
        if frame is None:
            return False

        buffer = new_buffer(frame.width, frame.height)
        filled = 0
        for plane in chunk.planes:
            if not plane.walkable:
                continue
            for trap in plane.trapezoids:
                pts = self._pixel_points(trap, frame)
                if pts.shape[0] >= 3:
                    filled += fill_polygon(buffer, pts, MASK_COLOR)

        self._mask = buffer
        self._mask_frame = frame
        self._frame = frame
        self.mask_ready = True
        logger.info('generated %dx%d walkability mask, %d px walkable',
                    frame.width, frame.height, filled)
        return True

    # ------------------------------------------------------------------
    # published state
    # ------------------------------------------------------------------
    @property
    def frame(self) -> Optional[CoordinateFrame]:
        """Frame published by the most recent successful generation."""
        return self._frame

    @property
    def image_frame(self) -> Optional[CoordinateFrame]:
        return self._image_frame

    @property
    def mask_frame(self) -> Optional[CoordinateFrame]:
        return self._mask_frame

    @property
    def image_data(self) -> np.ndarray:
        return _read_only(self._image)

    @property
    def mask_data(self) -> np.ndarray:
        return _read_only(self._mask)

    @property
    def width(self) -> int:
        return int(self._image.shape[1])

    @property
    def height(self) -> int:
        return int(self._image.shape[0])

    @property
    def mask_width(self) -> int:
        return int(self._mask.shape[1])

    @property
    def mask_height(self) -> int:
        return int(self._mask.shape[0])

    @property
    def min_x(self) -> float:
        return self._frame.min_x if self._frame else 0.0

    @property
    def min_y(self) -> float:
        return self._frame.min_y if self._frame else 0.0

    @property
    def max_x(self) -> float:
        return self._frame.max_x if self._frame else 0.0

    @property
    def max_y(self) -> float:
        return self._frame.max_y if self._frame else 0.0

    @property
    def scale_x(self) -> float:
        return self._frame.scale_x if self._frame else 1.0

    @property
    def scale_y(self) -> float:
        return self._frame.scale_y if self._frame else 1.0

    def frames_aligned(self) -> bool:
        """True when both buffers exist with equal dimensions and frames."""
        if not (self.image_ready and self.mask_ready):
            return False
        return self._image.shape == self._mask.shape and self._image_frame == self._mask_frame

    # ------------------------------------------------------------------
    # presentation helpers
    # ------------------------------------------------------------------
    def apply_mask_alpha(self, rgba: np.ndarray) -> Optional[np.ndarray]:
        """Return a copy of ``rgba`` whose alpha channel is the mask's.

        ``rgba`` is a same-sized backdrop such as a top-down capture of the
        map. Returns None when the mask is not ready or sizes disagree.
        """
        if not self.mask_ready:
            return None
        backdrop = np.asarray(rgba)
        if backdrop.shape != self._mask.shape:
            logger.warning('backdrop shape %s does not match mask shape %s',
                           backdrop.shape, self._mask.shape)
            return None
        out = backdrop.astype(np.uint8, copy=True)
        out[..., 3] = self._mask[..., 3]
        return out

    def route_map_rgba(self, backdrop: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
        """Backdrop (or the debug image) cut out by the walkability mask."""
        if backdrop is None:
            if not self.image_ready:
                return None
            backdrop = self._image
        return self.apply_mask_alpha(backdrop)

    def image_to_pil(self) -> Optional[Image.Image]:
        if not self.image_ready:
            return None
        return Image.fromarray(self._image)

    def mask_to_pil(self) -> Optional[Image.Image]:
        if not self.mask_ready:
            return None
        return Image.fromarray(self._mask)
