"""
Distance engines.

Both engines share the running-total bookkeeping: every segment length is
rounded to centimeters before it is added, the cumulative value is rounded
again after each addition, and per-axis deltas are converted and rounded one by
one before they are summed. Published totals are therefore sums of rounded
increments.
"""

from __future__ import annotations

import math
from abc import abstractmethod
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from globemeasure.geodesy import CoordinateAdapter
from globemeasure.geometry.contract import DEFAULT_DISTANCE_SPLIT_NUM, rounded
from globemeasure.measure.base import MeasureEngine, MeasureKind, MeasureMode
from globemeasure.models import GeodeticPoint, MeasurementResult, Point3, ScreenPoint, SegmentMeasurement
from globemeasure.scene import Scene
from globemeasure.units import Unit, convert_length

Axes = Tuple[float, float, float]


class DistanceEngine(MeasureEngine):
    """Polyline length with per-segment breakdown."""

    kind = MeasureKind.DISTANCE

    @abstractmethod
    def segment_length(self, start: Point3, end: Point3) -> Tuple[float, int]:
        """Return (length in meters, number of failed terrain picks)."""
        pass

    @staticmethod
    def axis_delta(start: Point3, end: Point3) -> Axes:
        """Signed per-axis difference, previous minus current vertex."""
        return (start.x - end.x, start.y - end.y, start.z - end.z)

    def height_delta(self, start: Point3, end: Point3) -> float:
        """Absolute difference of ellipsoidal heights."""
        return abs(self.adapter.to_geodetic(start).height - self.adapter.to_geodetic(end).height)

    def _convert(self, meters: float) -> float:
        return rounded(convert_length(meters, Unit.METERS, self.units))

    def _convert_signed(self, meters: float) -> float:
        converted = self._convert(abs(meters))
        return -converted if meters < 0 else converted

    def measure(self, vertices: Sequence[Point3]) -> MeasurementResult:
        points = list(vertices)
        if len(points) < 2:
            return MeasurementResult.empty(self.units)

        distance = 0.0
        axis_total: List[float] = [0.0, 0.0, 0.0]
        segments: List[SegmentMeasurement] = []
        failed = 0

        for index in range(1, len(points)):
            start, end = points[index - 1], points[index]
            raw_length, misses = self.segment_length(start, end)
            failed += misses

            length = rounded(raw_length)
            delta = self.axis_delta(start, end)
            converted_delta = tuple(self._convert_signed(value) for value in delta)
            distance = rounded(distance + length)
            axis_total = [total + value for total, value in zip(axis_total, converted_delta)]

            segments.append(
                SegmentMeasurement(
                    index=index,
                    length=length,
                    converted_length=self._convert(length),
                    axis_delta=delta,
                    converted_axis_delta=converted_delta,
                    height_delta=self.height_delta(start, end),
                    cumulative=distance,
                    converted_cumulative=self._convert(distance),
                    converted_axis_total=tuple(axis_total),
                    failed_picks=misses,
                )
            )

        logger.debug(
            "{} distance over {} vertices: {} m ({} failed picks)",
            self.mode.value, len(points), distance, failed,
        )
        return MeasurementResult(
            primary=distance,
            converted=self._convert(distance),
            unit=self.units,
            segments=tuple(segments),
            failed_picks=failed,
        )


class PlanarDistanceEngine(DistanceEngine):
    """Straight-line 3D distance in the global frame."""

    mode = MeasureMode.PLANAR

    def segment_length(self, start: Point3, end: Point3) -> Tuple[float, int]:
        return math.dist(start.as_tuple(), end.as_tuple()), 0


class SurfaceDistanceEngine(DistanceEngine):
    """
    Terrain-following distance.

    Each segment is projected to screen space, cut into ``split_num`` equal
    sub-intervals and every sample is re-picked on the terrain. A sub-interval
    counts only when both of its ends were picked, so pick failures make the
    result a lower bound and are reported through ``failed_picks``.
    """

    mode = MeasureMode.SURFACE

    def __init__(
        self,
        scene: Scene,
        *,
        split_num: int = DEFAULT_DISTANCE_SPLIT_NUM,
        units: Unit | str = Unit.KILOMETERS,
        adapter: CoordinateAdapter | None = None,
    ) -> None:
        super().__init__(units=units, adapter=adapter)
        if split_num < 1:
            raise ValueError("split_num must be at least 1")
        self.scene = scene
        self.split_num = int(split_num)

    def segment_length(self, start: Point3, end: Point3) -> Tuple[float, int]:
        screen_start = self.scene.project_to_screen(start)
        screen_end = self.scene.project_to_screen(end)
        if screen_start is None or screen_end is None:
            misses = (screen_start is None) + (screen_end is None)
            logger.debug("Segment endpoint off screen, segment contributes 0")
            return 0.0, misses
        return self.screen_segment_length(screen_start, screen_end)

    def sample_points(self, start: ScreenPoint, end: ScreenPoint) -> List[ScreenPoint]:
        """``split_num + 1`` evenly spaced samples, both ends included exactly."""
        n = self.split_num
        samples = [start]
        for k in range(1, n):
            t = k / n
            samples.append(ScreenPoint(start.x + (end.x - start.x) * t, start.y + (end.y - start.y) * t))
        samples.append(end)
        return samples

    def screen_segment_length(self, start: ScreenPoint, end: ScreenPoint) -> Tuple[float, int]:
        picked: List[Optional[GeodeticPoint]] = []
        for sample in self.sample_points(start, end):
            point = self.scene.pick_surface_point(sample)
            picked.append(self.adapter.to_geodetic(point) if point is not None else None)

        length = 0.0
        for first, second in zip(picked, picked[1:]):
            if first is not None and second is not None:
                length += self.adapter.surface_distance_3d(first, second)

        misses = sum(1 for point in picked if point is None)
        if misses:
            logger.debug("{} of {} samples missed the terrain", misses, len(picked))
        return length, misses


__all__ = ["DistanceEngine", "PlanarDistanceEngine", "SurfaceDistanceEngine"]
