"""Distance and area engines."""

from globemeasure.measure.area import AreaEngine, PlanarAreaEngine, SurfaceAreaEngine
from globemeasure.measure.base import MeasureEngine, MeasureKind, MeasureMode
from globemeasure.measure.distance import DistanceEngine, PlanarDistanceEngine, SurfaceDistanceEngine
from globemeasure.measure.factory import create_engine

__all__ = [
    "MeasureEngine",
    "MeasureKind",
    "MeasureMode",
    "DistanceEngine",
    "PlanarDistanceEngine",
    "SurfaceDistanceEngine",
    "AreaEngine",
    "PlanarAreaEngine",
    "SurfaceAreaEngine",
    "create_engine",
]
