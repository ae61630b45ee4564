"""
Measurement data model

Immutable value types shared by the adapter, the engines and the session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from globemeasure.units import Unit


@dataclass(frozen=True)
class Point3:
    """Point in the global cartesian frame (ECEF, meters)."""

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class ScreenPoint:
    """Point in screen/projection space (pixels)."""

    x: float
    y: float


@dataclass(frozen=True)
class GeodeticPoint:
    """Longitude/latitude in degrees, height above the ellipsoid in meters."""

    longitude: float
    latitude: float
    height: float = 0.0


class SessionState(str, Enum):
    """Lifecycle of a measurement session."""
    INIT = "INIT"
    WORKING = "WORKING"
    DESTROY = "DESTROY"


@dataclass(frozen=True)
class SegmentMeasurement:
    """
    Distance breakdown for one vertex after the start marker.

    Lengths are meters unless prefixed with ``converted_``, which are in the
    result unit. All published lengths are already rounded to two decimals.
    """

    index: int
    length: float
    converted_length: float
    axis_delta: tuple[float, float, float]
    converted_axis_delta: tuple[float, float, float]
    height_delta: float
    cumulative: float
    converted_cumulative: float
    converted_axis_total: tuple[float, float, float]
    failed_picks: int = 0


@dataclass(frozen=True)
class MeasurementResult:
    """Snapshot produced by an engine for one vertex sequence."""

    primary: float
    converted: float
    unit: Unit
    segments: tuple[SegmentMeasurement, ...] = ()
    cells: tuple[float, ...] = ()
    failed_picks: int = 0

    @property
    def partial(self) -> bool:
        """True when terrain picking failed somewhere and the value is a lower bound."""
        return self.failed_picks > 0

    @classmethod
    def empty(cls, unit: Unit, failed_picks: int = 0) -> "MeasurementResult":
        return cls(primary=0.0, converted=0.0, unit=unit, failed_picks=failed_picks)


@dataclass(frozen=True)
class Label:
    """Text anchored at a 3D position, handed to the renderer."""

    position: Point3
    text: str


@dataclass
class VertexSequence:
    """Ordered vertices of the line or ring being measured."""

    points: list[Point3] = field(default_factory=list)

    def append(self, point: Point3) -> None:
        self.points.append(point)

    def replace(self, points: list[Point3]) -> None:
        self.points = list(points)

    def clear(self) -> None:
        self.points.clear()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)


__all__ = [
    "Point3",
    "ScreenPoint",
    "GeodeticPoint",
    "SessionState",
    "SegmentMeasurement",
    "MeasurementResult",
    "Label",
    "VertexSequence",
]
