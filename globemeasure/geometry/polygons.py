"""
Screen-space polygon helpers for the surface area decomposition.

Rings are plain sequences of ScreenPoint; shapely does the heavy lifting.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np
from shapely.geometry import MultiPoint, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import voronoi_diagram

from globemeasure.geometry.contract import AREA_EPSILON
from globemeasure.models import ScreenPoint

Bounds = Tuple[float, float, float, float]


def bounds_of(points: Sequence[ScreenPoint]) -> Bounds:
    """Axis-aligned bounding box as (min_x, min_y, max_x, max_y)."""
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def ring_polygon(points: Sequence[ScreenPoint]) -> BaseGeometry:
    """
    Build a polygon from an open ring; the closing vertex is appended by shapely.

    Self-intersecting rings are repaired with buffer(0), which may return a
    MultiPolygon. Fewer than three points give an empty polygon.
    """
    if len(points) < 3:
        return Polygon()
    candidate = Polygon([(p.x, p.y) for p in points])
    if not candidate.is_valid:
        candidate = candidate.buffer(0)
    return candidate


def random_points(count: int, bounds: Bounds, rng: np.random.Generator) -> np.ndarray:
    """``count`` uniformly distributed points inside ``bounds`` as an (n, 2) array."""
    min_x, min_y, max_x, max_y = bounds
    return rng.uniform(low=(min_x, min_y), high=(max_x, max_y), size=(count, 2))


def voronoi_cells(seeds: np.ndarray, bounds: Bounds) -> List[Polygon]:
    """
    Voronoi tessellation of ``bounds`` around ``seeds``.

    Cells are clipped to the box so that together they tile it exactly. A single
    seed, or a diagram GEOS cannot build, yields the box itself as the only cell.
    """
    frame = box(*bounds)
    if frame.area <= AREA_EPSILON:
        return []
    if len(seeds) < 2:
        return [frame]

    diagram = voronoi_diagram(MultiPoint([tuple(s) for s in seeds]), envelope=frame)
    cells: List[Polygon] = []
    for cell in getattr(diagram, "geoms", []):
        clipped = cell.intersection(frame)
        cells.extend(_polygon_parts(clipped))
    return cells or [frame]


def intersect_parts(target: BaseGeometry, cell: BaseGeometry) -> List[List[ScreenPoint]]:
    """
    Intersect ``target`` with ``cell`` and return the exterior ring of every
    polygonal part (closed, first vertex repeated). Empty when they do not
    overlap.
    """
    if target.is_empty or cell.is_empty:
        return []
    overlap = target.intersection(cell)
    return [
        [ScreenPoint(float(x), float(y)) for x, y in part.exterior.coords]
        for part in _polygon_parts(overlap)
    ]


def _polygon_parts(geometry: BaseGeometry) -> Iterable[Polygon]:
    if geometry.is_empty:
        return []
    parts = geometry.geoms if hasattr(geometry, "geoms") else [geometry]
    return [p for p in parts if isinstance(p, Polygon) and p.area > AREA_EPSILON]


__all__ = ["Bounds", "bounds_of", "ring_polygon", "random_points", "voronoi_cells", "intersect_parts"]
