"""Scene query protocol and a headless reference scene."""

from __future__ import annotations

import math
from typing import Callable, Optional, Protocol

from globemeasure.exceptions import GeometryError
from globemeasure.geodesy import CoordinateAdapter
from globemeasure.geometry.contract import ELLIPSOID_A, ELLIPSOID_F
from globemeasure.models import GeodeticPoint, Point3, ScreenPoint

HeightField = Callable[[float, float], float]  # (east m, north m) -> height m
OcclusionMask = Callable[[float, float], bool]  # (screen x, screen y) -> pick fails


class Scene(Protocol):
    def cartesian_to_geodetic(self, point: Point3) -> GeodeticPoint:
        ...

    def pick_surface_point(self, screen: ScreenPoint) -> Optional[Point3]:  # None when no surface is hit
        ...

    def project_to_screen(self, point: Point3) -> Optional[ScreenPoint]:  # None when off screen
        ...


class NadirTerrainScene:
    """
    Orthographic top-down camera over a height field.

    Screen x grows east and screen y grows south; the viewport center looks at
    ``origin``. Ground positions use a local equirectangular mapping built from
    the meridional and prime-vertical radii of curvature at the origin latitude,
    so pick and projection are exact inverses of each other.

    Args:
        origin: Geodetic point under the viewport center.
        meters_per_pixel: Ground sampling distance.
        width, height: Viewport size in pixels; picks and projections outside fail.
        terrain: Height above ``origin.height`` at (east, north) meters. Flat if None.
        occluded: Screen locations where picking fails (e.g. sky, missing tiles).
        adapter: Coordinate adapter, shared with the engines when provided.
    """

    def __init__(
        self,
        origin: GeodeticPoint,
        *,
        meters_per_pixel: float = 1.0,
        width: float = 1920.0,
        height: float = 1080.0,
        terrain: HeightField | None = None,
        occluded: OcclusionMask | None = None,
        adapter: CoordinateAdapter | None = None,
    ) -> None:
        if meters_per_pixel <= 0 or width <= 0 or height <= 0:
            raise GeometryError(
                "Scene resolution and viewport size must be positive",
                {"meters_per_pixel": str(meters_per_pixel), "width": str(width), "height": str(height)},
            )
        self.origin = origin
        self.meters_per_pixel = float(meters_per_pixel)
        self.width = float(width)
        self.height = float(height)
        self.terrain = terrain
        self.occluded = occluded
        self.adapter = adapter or CoordinateAdapter()

        phi = math.radians(origin.latitude)
        e2 = ELLIPSOID_F * (2.0 - ELLIPSOID_F)
        w = math.sqrt(1.0 - e2 * math.sin(phi) ** 2)
        self._meridian_radius = ELLIPSOID_A * (1.0 - e2) / w ** 3
        self._parallel_radius = ELLIPSOID_A / w * math.cos(phi)

    def cartesian_to_geodetic(self, point: Point3) -> GeodeticPoint:
        return self.adapter.to_geodetic(point)

    def _in_view(self, x: float, y: float) -> bool:
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height

    def screen_to_local(self, screen: ScreenPoint) -> tuple[float, float]:
        east = (screen.x - self.width / 2.0) * self.meters_per_pixel
        north = (self.height / 2.0 - screen.y) * self.meters_per_pixel
        return east, north

    def local_to_screen(self, east: float, north: float) -> ScreenPoint:
        return ScreenPoint(
            east / self.meters_per_pixel + self.width / 2.0,
            self.height / 2.0 - north / self.meters_per_pixel,
        )

    def ground_point(self, east: float, north: float) -> Point3:
        """Terrain point at local (east, north) meters from the origin."""
        relief = self.terrain(east, north) if self.terrain is not None else 0.0
        geodetic = GeodeticPoint(
            self.origin.longitude + math.degrees(east / self._parallel_radius),
            self.origin.latitude + math.degrees(north / self._meridian_radius),
            self.origin.height + relief,
        )
        return self.adapter.from_geodetic(geodetic)

    def pick_surface_point(self, screen: ScreenPoint) -> Optional[Point3]:
        if not self._in_view(screen.x, screen.y):
            return None
        if self.occluded is not None and self.occluded(screen.x, screen.y):
            return None
        return self.ground_point(*self.screen_to_local(screen))

    def project_to_screen(self, point: Point3) -> Optional[ScreenPoint]:
        geodetic = self.adapter.to_geodetic(point)
        east = math.radians(geodetic.longitude - self.origin.longitude) * self._parallel_radius
        north = math.radians(geodetic.latitude - self.origin.latitude) * self._meridian_radius
        screen = self.local_to_screen(east, north)
        if not self._in_view(screen.x, screen.y):
            return None
        return screen


__all__ = ["Scene", "NadirTerrainScene", "HeightField", "OcclusionMask"]
