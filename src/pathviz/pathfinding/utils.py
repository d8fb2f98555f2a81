"""
utils.py

Small helpers shared by the pathfinding and route-planner packages.

The public helpers:
- `safe_log_exception(msg, exc, **ctx)` : logs exceptions robustly
- `as_points(points)` : coerce a vertex sequence to an (N, 2) float array

"""

from typing import Any
import sys
import logging
import numpy as np

logger = logging.getLogger(__name__)


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
	"""Log an exception robustly.

	Attempts to call `logger.exception`. If logging fails for any reason,
	falls back to writing a compact message to `sys.stderr`.
	"""
	try:
		if ctx:
			ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
			logger.exception('%s | %s | %s', msg, exc, ctx_s)
		else:
			logger.exception('%s | %s', msg, exc)
	except Exception:
		try:
			sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')
		except Exception:
			pass


def as_points(points: Any) -> np.ndarray:
	"""Return ``points`` as an ``(N, 2)`` float64 array.

	Empty or malformed input yields an empty ``(0, 2)`` array rather than
	raising; callers treat that as "no geometry".
	"""
	if points is None:
		return np.empty((0, 2), dtype=float)
	try:
		pts = np.asarray(points, dtype=float)
	except (ValueError, TypeError):
		logger.debug('as_points: could not coerce %r', type(points))
		return np.empty((0, 2), dtype=float)
	if pts.size == 0 or pts.ndim != 2 or pts.shape[1] != 2:
		return np.empty((0, 2), dtype=float)
	return pts
