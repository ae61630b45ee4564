"""
Measurement engine base.

An engine is a pure function of the vertex sequence: ``measure`` recomputes the
whole result every time and keeps no incremental state between calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence

from globemeasure.geodesy import CoordinateAdapter
from globemeasure.models import MeasurementResult, Point3
from globemeasure.units import Unit


class MeasureKind(str, Enum):
    """Quantity being measured."""
    DISTANCE = "distance"
    AREA = "area"


class MeasureMode(str, Enum):
    """How the quantity relates to the terrain."""
    PLANAR = "planar"  # straight 3D chords / ellipsoid polygon
    SURFACE = "surface"  # draped over the picked terrain


class MeasureEngine(ABC):
    """Base class for measurement engines."""

    kind: MeasureKind
    mode: MeasureMode

    def __init__(
        self,
        *,
        units: Unit | str = Unit.KILOMETERS,
        adapter: CoordinateAdapter | None = None,
    ) -> None:
        self.units = Unit(units)
        self.adapter = adapter or CoordinateAdapter()

    @abstractmethod
    def measure(self, vertices: Sequence[Point3]) -> MeasurementResult:
        """
        Measure a vertex sequence.

        Args:
            vertices: Ordered points in the global frame. Too few points give the
                empty result rather than an error.

        Returns:
            Result snapshot in meters/square meters plus the converted value.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(units={self.units.value})"
