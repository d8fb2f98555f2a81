# -*- coding: utf-8 -*-

"""
pathfinding/config.py

Central constants for the pathfinding visualizer. Keeping the image size,
degenerate-geometry guards and palette in one place ensures the debug image,
the walkability mask and anything that maps pixels back to world space use
the same numbers.

Contents:
---------
1. RASTER SIZE:
   - Default square image edge used by `PathfindingVisualizer`.

2. DEGENERATE GEOMETRY GUARDS:
   - Fallback bounding box used when a chunk carries no vertices.
   - Minimum span substituted for a zero-width or zero-height box.

3. PALETTE:
   - HSV parameters for per-plane debug colours.
   - Outline, mask and background RGBA values.

Usage:
------
    from pathviz.pathfinding.config import DEFAULT_IMAGE_SIZE, MASK_COLOR
"""
# ───────────────────────────────────────────────────────────────────────────────
# 1) RASTER SIZE
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_IMAGE_SIZE = 1024       # square edge of generated buffers (px)

# ───────────────────────────────────────────────────────────────────────────────
# 2) DEGENERATE GEOMETRY GUARDS (world units)
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_BOUNDS = (0.0, 0.0, 1.0, 1.0)   # (min_x, min_y, max_x, max_y) for empty input
MIN_SPAN = 1.0                  # smallest usable box edge

# ───────────────────────────────────────────────────────────────────────────────
# 3) PALETTE (RGBA, 0-255)
# ───────────────────────────────────────────────────────────────────────────────
PLANE_SATURATION = 0.65         # HSV saturation for plane fills
PLANE_VALUE = 0.90              # HSV value for plane fills
HUE_STEP = 137.508              # degrees between planes when count is unknown

OUTLINE_COLOR = (20, 20, 20, 255)
MASK_COLOR = (0, 0, 0, 255)     # walkable pixels: opaque, colour unused
TRANSPARENT = (0, 0, 0, 0)
