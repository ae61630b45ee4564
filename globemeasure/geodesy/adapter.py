"""
Coordinate Adapter

Conversion between the global cartesian frame (ECEF) and geodetic coordinates
on the reference ellipsoid, plus geodesic distance and bearing helpers.
"""

from __future__ import annotations

import math

from loguru import logger
from pyproj import Geod, Transformer

from globemeasure.geometry.contract import (
    ECEF_CRS,
    ELLIPSOID_A,
    ELLIPSOID_NAME,
    GEODETIC_CRS,
    MAX_GEODESIC_DISTANCE,
)
from globemeasure.models import GeodeticPoint, Point3


class CoordinateAdapter:
    """WGS84 conversions and geodesics backed by pyproj."""

    def __init__(self) -> None:
        self.geod = Geod(ellps=ELLIPSOID_NAME)
        self._to_geodetic = Transformer.from_crs(ECEF_CRS, GEODETIC_CRS, always_xy=True)
        self._to_cartesian = Transformer.from_crs(GEODETIC_CRS, ECEF_CRS, always_xy=True)

    def to_geodetic(self, point: Point3) -> GeodeticPoint:
        """
        Convert an ECEF point to longitude/latitude/height.

        Points where PROJ yields non-finite values (the geocenter) fall back to a
        spherical decomposition so the function stays total.
        """
        lon, lat, height = self._to_geodetic.transform(point.x, point.y, point.z)
        if math.isfinite(lon) and math.isfinite(lat) and math.isfinite(height):
            return GeodeticPoint(float(lon), float(lat), float(height))

        logger.debug("Non-finite geodetic conversion for {}, using spherical fallback", point)
        horizontal = math.hypot(point.x, point.y)
        return GeodeticPoint(
            math.degrees(math.atan2(point.y, point.x)),
            math.degrees(math.atan2(point.z, horizontal)),
            math.sqrt(horizontal * horizontal + point.z * point.z) - ELLIPSOID_A,
        )

    # Scene protocol spelling
    cartesian_to_geodetic = to_geodetic

    def from_geodetic(self, point: GeodeticPoint) -> Point3:
        x, y, z = self._to_cartesian.transform(point.longitude, point.latitude, point.height)
        return Point3(float(x), float(y), float(z))

    def inverse(self, start: GeodeticPoint, end: GeodeticPoint) -> tuple[float, float]:
        """
        Solve the inverse geodesic problem.

        Returns:
            (initial bearing in degrees clockwise from north in [0, 360),
             surface distance in meters)
        """
        if start.longitude == end.longitude and start.latitude == end.latitude:
            return 0.0, 0.0

        azimuth, _, distance = self.geod.inv(
            start.longitude, start.latitude, end.longitude, end.latitude
        )
        if not math.isfinite(distance):
            logger.warning(
                "Geodesic solver returned {} between {} and {}, clamping to antipodal maximum",
                distance, start, end,
            )
            distance = MAX_GEODESIC_DISTANCE
        if not math.isfinite(azimuth):
            azimuth = 0.0
        return float(azimuth) % 360.0, abs(float(distance))

    def geodesic_surface_distance(self, start: GeodeticPoint, end: GeodeticPoint) -> float:
        """Shortest path length along the ellipsoid surface, meters."""
        return self.inverse(start, end)[1]

    def initial_bearing(self, start: GeodeticPoint, end: GeodeticPoint) -> float:
        """Forward azimuth at ``start`` in degrees clockwise from north."""
        return self.inverse(start, end)[0]

    def surface_distance_3d(self, start: GeodeticPoint, end: GeodeticPoint) -> float:
        """Geodesic distance combined with the height difference."""
        return math.hypot(self.geodesic_surface_distance(start, end), end.height - start.height)

    def surface_distance_between(self, start: Point3, end: Point3) -> float:
        return self.surface_distance_3d(self.to_geodetic(start), self.to_geodetic(end))


__all__ = ["CoordinateAdapter"]
