"""Terrain-aware distance and area measurement on the WGS84 globe."""

from globemeasure.exceptions import (
    ConfigurationError,
    GeometryError,
    GlobeMeasureError,
    LifecycleError,
    UnitConversionError,
)
from globemeasure.geodesy import CoordinateAdapter
from globemeasure.locale import MeasureLocale
from globemeasure.logging_config import setup_logging, setup_logging_from_settings
from globemeasure.measure import (
    MeasureKind,
    MeasureMode,
    PlanarAreaEngine,
    PlanarDistanceEngine,
    SurfaceAreaEngine,
    SurfaceDistanceEngine,
    create_engine,
)
from globemeasure.models import (
    GeodeticPoint,
    Label,
    MeasurementResult,
    Point3,
    ScreenPoint,
    SegmentMeasurement,
    SessionState,
)
from globemeasure.scene import NadirTerrainScene, Scene
from globemeasure.session import LabelCollection, MeasurementSession
from globemeasure.units import Unit, convert_area, convert_length

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "GeometryError",
    "GlobeMeasureError",
    "LifecycleError",
    "UnitConversionError",
    "CoordinateAdapter",
    "MeasureLocale",
    "setup_logging",
    "setup_logging_from_settings",
    "MeasureKind",
    "MeasureMode",
    "PlanarAreaEngine",
    "PlanarDistanceEngine",
    "SurfaceAreaEngine",
    "SurfaceDistanceEngine",
    "create_engine",
    "GeodeticPoint",
    "Label",
    "MeasurementResult",
    "Point3",
    "ScreenPoint",
    "SegmentMeasurement",
    "SessionState",
    "NadirTerrainScene",
    "Scene",
    "LabelCollection",
    "MeasurementSession",
    "Unit",
    "convert_area",
    "convert_length",
]
