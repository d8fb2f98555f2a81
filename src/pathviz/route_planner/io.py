"""Waypoint CSV import/export.

Files carry a header ``index,x,y`` with one row per waypoint. The index
column is positional only: it is written as 0..N-1 and ignored on load,
where rows are reindexed in file order. Rows whose x or y cannot be parsed
are skipped.
"""

from typing import List, Sequence, Tuple
import logging

import numpy as np
import pandas as pd

from pathviz.route_planner.route import Waypoint

logger = logging.getLogger(__name__)

CSV_COLUMNS = ['index', 'x', 'y']


def waypoints_to_frame(waypoints: Sequence[Tuple[float, float]]) -> pd.DataFrame:
    pts = np.asarray(waypoints, dtype=float).reshape(-1, 2)
    return pd.DataFrame({'index': np.arange(len(pts)), 'x': pts[:, 0], 'y': pts[:, 1]},
                        columns=CSV_COLUMNS)


def write_waypoints_csv(path, waypoints: Sequence[Tuple[float, float]]) -> int:
    """Write ``waypoints`` to ``path``; returns the number of rows written."""
    df = waypoints_to_frame(waypoints)
    df.to_csv(path, index=False)
    logger.info('exported %d waypoints to %s', len(df), path)
    return len(df)


def read_waypoints_csv(path) -> List[Waypoint]:
    """Load waypoints from ``path``. File errors propagate to the caller."""
    try:
        df = pd.read_csv(path, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        logger.warning('%s is empty', path)
        return []
    if df.shape[1] < 3:
        logger.warning('%s: expected index,x,y columns, found %s', path, list(df.columns))
        return []
    # second and third columns are x and y whatever the header says
    xs = pd.to_numeric(df.iloc[:, 1], errors='coerce')
    ys = pd.to_numeric(df.iloc[:, 2], errors='coerce')
    ok = xs.notna() & ys.notna()
    dropped = int((~ok).sum())
    if dropped:
        logger.debug('%s: skipped %d malformed rows', path, dropped)
    return [Waypoint(float(x), float(y)) for x, y in zip(xs[ok], ys[ok])]


def default_export_name(map_index) -> str:
    return f'route_waypoints_{map_index}.csv'
