"""Planar geometry helpers (shapely/numpy) and measurement constants."""
