from __future__ import annotations

"""
Measurement Contract

Single source of truth for ellipsoid parameters, sampling defaults and numeric
tolerances used by the engines. All modules should import from here instead of
hardcoding.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

# Lengths in meters, areas in square meters, angles in degrees unless noted

# Reference ellipsoid (WGS84)
ELLIPSOID_NAME = "WGS84"
ELLIPSOID_A = 6378137.0  # m, semi-major axis
ELLIPSOID_F = 1.0 / 298.257223563  # flattening
ECEF_CRS = "EPSG:4978"  # geocentric cartesian
GEODETIC_CRS = "EPSG:4979"  # lon, lat, ellipsoidal height

# Longest possible geodesic: half the meridian ellipse perimeter
MAX_GEODESIC_DISTANCE = 20003931.4586  # m

# Mean earth radius used by the display unit table
EARTH_RADIUS = 6371008.8  # m

# Sampling defaults
DEFAULT_DISTANCE_SPLIT_NUM = 100  # screen sub-intervals per segment
DEFAULT_AREA_SPLIT_NUM = 10  # voronoi seeds per polygon

# Area needs a ring
MIN_AREA_VERTICES = 3

# Rounding of published values
RESULT_DECIMALS = 2
_QUANTUM = Decimal(1).scaleb(-RESULT_DECIMALS)

# Below this a screen polygon or a cell is considered degenerate
AREA_EPSILON = 1e-9  # px²


def rounded(value: float) -> float:
    """Round a published value to the contract precision, ties away from zero."""
    if not math.isfinite(value):
        return float(value)
    return float(Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP))
