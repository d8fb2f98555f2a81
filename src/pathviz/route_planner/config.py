# -*- coding: utf-8 -*-

"""
route_planner/config.py

Constants for the interactive route planner: interaction thresholds, zoom
limits, coverage geometry and overlay palette. Everything that maps a
pointer to a waypoint or a waypoint to an overlay reads from here so the
viewer and headless callers behave identically.

Contents:
---------
1. ROUTE MAP:
   - Raster size of the walkability mask behind the planner.

2. COVERAGE:
   - Spellcasting radius drawn around waypoints and resampled points
     (world units), and the segment count of its ring polyline.

3. INTERACTION:
   - Hit radius for selecting/dragging waypoints, zoom range and step,
     display-fit margins.

4. OVERLAY PALETTE (RGBA, 0-255) and marker sizes.
"""

# ───────────────────────────────────────────────────────────────────────────────
# 1) ROUTE MAP
# ───────────────────────────────────────────────────────────────────────────────
ROUTE_MAP_IMAGE_SIZE = 1024     # mask edge used by the planner (px)

# ───────────────────────────────────────────────────────────────────────────────
# 2) COVERAGE (world units)
# ───────────────────────────────────────────────────────────────────────────────
SPELLCASTING_RADIUS = 1085.0    # radius of the coverage ring
COVERAGE_SPACING = SPELLCASTING_RADIUS  # distance between resampled ring centres
CIRCLE_SEGMENTS = 48            # segments per coverage ring

# ───────────────────────────────────────────────────────────────────────────────
# 3) INTERACTION
# ───────────────────────────────────────────────────────────────────────────────
HIT_RADIUS_PX = 10.0            # pick distance for existing waypoints (display px)
ZOOM_MIN = 0.25
ZOOM_MAX = 4.0
ZOOM_STEP = 0.1                 # zoom change per wheel notch
MIN_DISPLAY_SCALE = 0.1         # floor for the fit-to-window scale
DISPLAY_MARGIN = (20.0, 120.0)  # horizontal / vertical space reserved around the map (px)

# ───────────────────────────────────────────────────────────────────────────────
# 4) OVERLAY PALETTE
# ───────────────────────────────────────────────────────────────────────────────
COVERAGE_COLOR = (255, 180, 0, 120)
ROUTE_LINE_COLOR = (0, 220, 255, 180)
MARKER_COLOR = (0, 200, 255, 200)
SELECTED_MARKER_COLOR = (255, 120, 0, 230)
LABEL_COLOR = (255, 255, 255, 220)
ROUTE_LINE_WIDTH = 2            # px
COVERAGE_LINE_WIDTH = 2         # px
MARKER_RADIUS = 5.0             # px
SELECTED_MARKER_RADIUS = 7.0    # px
LABEL_OFFSET = (6.0, -10.0)     # label position relative to the marker centre (px)
