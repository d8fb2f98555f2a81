"""Loading already-parsed pathfinding geometry.

The map file's binary chunk parser lives elsewhere; this module only turns
its plain-data output into `PathfindingChunk` objects. The accepted layout
is::

    {
      "valid": true,
      "planes": [
        {"walkable": true,
         "trapezoids": [[[x, y], [x, y], [x, y], [x, y]], ...]},
        ...
      ]
    }

A trapezoid may also be given as ``{"vertices": [[x, y], ...]}``.
"""

from typing import Any, Dict, Mapping
import json
import logging

from pathviz.pathfinding.geometry import PathfindingChunk, Plane, Trapezoid

logger = logging.getLogger(__name__)


def chunk_from_dict(data: Mapping[str, Any]) -> PathfindingChunk:
    """Build a chunk from plain data. Missing or malformed input gives an invalid chunk."""
    if not isinstance(data, Mapping):
        logger.warning('chunk data is %s, expected a mapping', type(data).__name__)
        return PathfindingChunk(planes=[], valid=False)

    raw_planes = data.get('planes') or []
    if not isinstance(raw_planes, (list, tuple)):
        logger.warning('chunk planes is %s, expected a list', type(raw_planes).__name__)
        return PathfindingChunk(planes=[], valid=False)

    planes = []
    for plane_idx, raw_plane in enumerate(raw_planes):
        if not isinstance(raw_plane, Mapping):
            logger.debug('skipping malformed plane %d: %r', plane_idx, raw_plane)
            continue
        raw_traps = raw_plane.get('trapezoids') or []
        if not isinstance(raw_traps, (list, tuple)):
            logger.debug('plane %d: trapezoids is %s, expected a list', plane_idx, type(raw_traps).__name__)
            raw_traps = []
        traps = []
        for raw_trap in raw_traps:
            verts = raw_trap.get('vertices') if isinstance(raw_trap, Mapping) else raw_trap
            try:
                traps.append(Trapezoid(vertices=verts, plane_index=len(planes)))
            except (TypeError, ValueError):
                logger.debug('plane %d: skipping malformed trapezoid %r', plane_idx, raw_trap)
        planes.append(Plane(trapezoids=traps, walkable=bool(raw_plane.get('walkable', True))))

    return PathfindingChunk(planes=planes, valid=bool(data.get('valid', True)))


def chunk_to_dict(chunk: PathfindingChunk) -> Dict[str, Any]:
    return {
        'valid': bool(chunk.valid),
        'planes': [
            {'walkable': bool(p.walkable),
             'trapezoids': [[list(v) for v in t.vertices] for t in p.trapezoids]}
            for p in chunk.planes
        ],
    }


def load_chunk_json(path) -> PathfindingChunk:
    """Read a chunk JSON document. File errors propagate to the caller."""
    with open(path, 'r', encoding='utf-8') as fh:
        data = json.load(fh)
    chunk = chunk_from_dict(data)
    logger.info('loaded %s: %d planes, %d trapezoids', path, chunk.plane_count, chunk.trapezoid_count)
    return chunk


def save_chunk_json(chunk: PathfindingChunk, path) -> None:
    with open(path, 'w', encoding='utf-8') as fh:
        json.dump(chunk_to_dict(chunk), fh)
