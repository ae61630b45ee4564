"""Tests for the screen-space decomposition helpers."""

import numpy as np
import pytest
from shapely.geometry import box

from globemeasure.geometry.polygons import (
    bounds_of,
    intersect_parts,
    random_points,
    ring_polygon,
    voronoi_cells,
)
from globemeasure.models import ScreenPoint


def test_bounds_of_points():
    points = [ScreenPoint(3, 9), ScreenPoint(-1, 4), ScreenPoint(7, 2)]
    assert bounds_of(points) == (-1, 2, 7, 9)


def test_random_points_stay_inside_bounds(rng):
    points = random_points(200, (10.0, 20.0, 30.0, 25.0), rng)
    assert points.shape == (200, 2)
    assert np.all((points[:, 0] >= 10.0) & (points[:, 0] <= 30.0))
    assert np.all((points[:, 1] >= 20.0) & (points[:, 1] <= 25.0))


def test_voronoi_cells_tile_the_box(rng):
    bounds = (0.0, 0.0, 100.0, 50.0)
    seeds = random_points(12, bounds, rng)
    cells = voronoi_cells(seeds, bounds)
    assert len(cells) == 12
    assert sum(cell.area for cell in cells) == pytest.approx(5000.0)
    frame = box(*bounds)
    assert all(frame.buffer(1e-9).contains(cell) for cell in cells)


def test_single_seed_returns_box():
    cells = voronoi_cells(np.array([[5.0, 5.0]]), (0.0, 0.0, 10.0, 10.0))
    assert len(cells) == 1
    assert cells[0].area == pytest.approx(100.0)


def test_degenerate_box_has_no_cells(rng):
    assert voronoi_cells(random_points(3, (0.0, 0.0, 10.0, 0.0), rng), (0.0, 0.0, 10.0, 0.0)) == []


def test_ring_polygon_needs_three_points():
    assert ring_polygon([ScreenPoint(0, 0), ScreenPoint(1, 1)]).is_empty


def test_ring_polygon_repairs_self_intersection():
    bow_tie = [ScreenPoint(0, 0), ScreenPoint(10, 10), ScreenPoint(10, 0), ScreenPoint(0, 10)]
    polygon = ring_polygon(bow_tie)
    assert polygon.is_valid


def test_intersect_parts_returns_closed_rings():
    target = ring_polygon([ScreenPoint(0, 0), ScreenPoint(10, 0), ScreenPoint(10, 10), ScreenPoint(0, 10)])
    rings = intersect_parts(target, box(5, 5, 20, 20))
    assert len(rings) == 1
    ring = rings[0]
    assert ring[0] == ring[-1]
    assert {(p.x, p.y) for p in ring} == {(5, 5), (10, 5), (10, 10), (5, 10)}


def test_intersect_parts_disjoint_is_empty():
    target = ring_polygon([ScreenPoint(0, 0), ScreenPoint(1, 0), ScreenPoint(1, 1)])
    assert intersect_parts(target, box(5, 5, 6, 6)) == []


def test_intersect_parts_splits_multi_part_overlap():
    # U shape cut by a horizontal band gives two pieces
    u_shape = ring_polygon([
        ScreenPoint(0, 0), ScreenPoint(30, 0), ScreenPoint(30, 30), ScreenPoint(20, 30),
        ScreenPoint(20, 10), ScreenPoint(10, 10), ScreenPoint(10, 30), ScreenPoint(0, 30),
    ])
    assert len(intersect_parts(u_shape, box(-1, 15, 31, 25))) == 2
