"""Ellipsoid conversions and geodesics."""

from globemeasure.geodesy.adapter import CoordinateAdapter

__all__ = ["CoordinateAdapter"]
