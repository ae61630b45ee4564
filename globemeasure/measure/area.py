"""
Area engines.

The planar engine measures the ellipsoidal area of the geodetic ring. The
surface engine has no closed form over arbitrary terrain, so it decomposes the
screen-space polygon with a random Voronoi tessellation, drapes every piece on
the terrain and integrates it in a local tangent plane.

The surface result depends on the random seeds: identical input gives
identical output only when the generator is seeded.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np
from loguru import logger
from shapely.geometry import Polygon

from globemeasure.exceptions import UnitConversionError
from globemeasure.geodesy import CoordinateAdapter
from globemeasure.geometry.contract import (
    AREA_EPSILON,
    DEFAULT_AREA_SPLIT_NUM,
    MIN_AREA_VERTICES,
    rounded,
)
from globemeasure.geometry.polygons import (
    bounds_of,
    intersect_parts,
    random_points,
    ring_polygon,
    voronoi_cells,
)
from globemeasure.measure.base import MeasureEngine, MeasureKind, MeasureMode
from globemeasure.models import GeodeticPoint, MeasurementResult, Point3, ScreenPoint
from globemeasure.scene import Scene
from globemeasure.units import AREA_FACTORS, Unit, convert_area


class AreaEngine(MeasureEngine):
    kind = MeasureKind.AREA

    def __init__(
        self,
        *,
        units: Unit | str = Unit.KILOMETERS,
        adapter: CoordinateAdapter | None = None,
    ) -> None:
        super().__init__(units=units, adapter=adapter)
        if self.units not in AREA_FACTORS:
            raise UnitConversionError(
                f"{self.units.value} is not a valid area unit",
                {"unit": self.units.value, "kind": "area"},
            )

    def _result(self, area: float, cells: Sequence[float] = (), failed_picks: int = 0) -> MeasurementResult:
        primary = rounded(area)
        return MeasurementResult(
            primary=primary,
            converted=rounded(convert_area(primary, Unit.METERS, self.units)),
            unit=self.units,
            cells=tuple(cells),
            failed_picks=failed_picks,
        )


class PlanarAreaEngine(AreaEngine):
    """Ellipsoidal area of the ring through the vertices, winding-independent."""

    mode = MeasureMode.PLANAR

    def measure(self, vertices: Sequence[Point3]) -> MeasurementResult:
        points = list(vertices)
        if len(points) < MIN_AREA_VERTICES:
            return MeasurementResult.empty(self.units)

        lonlats = [
            (geodetic.longitude, geodetic.latitude)
            for geodetic in map(self.adapter.to_geodetic, points)
        ]
        lonlats.append(lonlats[0])
        ring = Polygon(lonlats)
        area, _ = self.adapter.geod.geometry_area_perimeter(ring)
        area = abs(float(area)) if math.isfinite(area) else 0.0

        logger.debug("planar area over {} vertices: {} m2", len(points), area)
        return self._result(area)


class SurfaceAreaEngine(AreaEngine):
    """
    Terrain-draped area by random spatial decomposition.

    Args:
        scene: Scene used for projection and terrain picking.
        split_num: Number of Voronoi seeds; more seeds cost more picks.
        rng: Random generator for the seeds. Takes precedence over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is not given.
    """

    mode = MeasureMode.SURFACE

    def __init__(
        self,
        scene: Scene,
        *,
        split_num: int = DEFAULT_AREA_SPLIT_NUM,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        units: Unit | str = Unit.KILOMETERS,
        adapter: CoordinateAdapter | None = None,
    ) -> None:
        super().__init__(units=units, adapter=adapter)
        if split_num < 1:
            raise ValueError("split_num must be at least 1")
        self.scene = scene
        self.split_num = int(split_num)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def measure(self, vertices: Sequence[Point3]) -> MeasurementResult:
        points = list(vertices)
        if len(points) < MIN_AREA_VERTICES:
            return MeasurementResult.empty(self.units)

        projected = [self.scene.project_to_screen(point) for point in points]
        screen = [point for point in projected if point is not None]
        failed = len(projected) - len(screen)
        if len(screen) < MIN_AREA_VERTICES:
            logger.debug("Only {} vertices on screen, surface area is 0", len(screen))
            return MeasurementResult.empty(self.units, failed_picks=failed)

        target = ring_polygon(screen)
        if target.is_empty or target.area <= AREA_EPSILON:
            return self._result(0.0, failed_picks=failed)

        bounds = bounds_of(screen)
        seeds = random_points(self.split_num, bounds, self.rng)
        cell_areas: List[float] = []
        for cell in voronoi_cells(seeds, bounds):
            cell_area = 0.0
            for ring in intersect_parts(target, cell):
                area, misses = self.ring_area(ring)
                cell_area += area
                failed += misses
            cell_areas.append(cell_area)

        total = sum(cell_areas)
        logger.debug(
            "surface area over {} cells: {} m2 ({} failed picks)",
            len(cell_areas), total, failed,
        )
        return self._result(total, cells=cell_areas, failed_picks=failed)

    def ring_area(self, ring: Sequence[ScreenPoint]) -> Tuple[float, int]:
        """Pick a screen ring onto the terrain and integrate it; returns (m2, failed picks)."""
        points = list(ring)
        if len(points) > 1 and points[0] == points[-1]:
            points.pop()
        picked = [self.scene.pick_surface_point(point) for point in points]
        world = [point for point in picked if point is not None]
        misses = len(picked) - len(world)
        if len(world) < MIN_AREA_VERTICES:
            return 0.0, misses
        return self.local_plane_area([self.adapter.to_geodetic(point) for point in world]), misses

    def local_plane_area(self, ring: Sequence[GeodeticPoint]) -> float:
        """
        Polar integration in the local tangent plane.

        Edges are laid out from (0, 0) by initial bearing and 3D surface distance,
        then the shoelace formula is applied to the resulting plane polygon. The
        ring is open; the closing edge comes from the shoelace wrap-around term.
        """
        x = [0.0]
        y = [0.0]
        for start, end in zip(ring, ring[1:]):
            bearing, distance = self.adapter.inverse(start, end)
            step = math.hypot(distance, end.height - start.height)
            theta = math.radians(bearing)
            x.append(x[-1] + math.cos(theta) * step)
            y.append(y[-1] + math.sin(theta) * step)

        twice_area = x[-1] * y[0] - x[0] * y[-1]
        for i in range(len(x) - 1):
            twice_area += x[i] * y[i + 1] - x[i + 1] * y[i]
        return abs(twice_area) / 2.0


__all__ = ["AreaEngine", "PlanarAreaEngine", "SurfaceAreaEngine"]
