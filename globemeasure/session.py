"""
Measurement Session

Owns one vertex sequence and one engine, drives the INIT/WORKING/DESTROY
lifecycle and turns every engine result into label text for the renderer.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Protocol, Sequence

import numpy as np
from loguru import logger

from globemeasure.exceptions import LifecycleError
from globemeasure.geometry.contract import MIN_AREA_VERTICES, rounded
from globemeasure.locale import MeasureLocale
from globemeasure.logging_config import setup_logging_from_settings
from globemeasure.measure import MeasureEngine, MeasureKind, MeasureMode, create_engine
from globemeasure.models import Label, MeasurementResult, Point3, SessionState, VertexSequence
from globemeasure.scene import Scene
from globemeasure.settings import Settings, get_settings


class LabelRenderer(Protocol):
    def clear(self) -> None:
        ...

    def add(self, label: Label) -> None:
        ...


class LabelCollection:
    """In-memory renderer; keeps whatever the session last displayed."""

    def __init__(self) -> None:
        self._labels: List[Label] = []

    def clear(self) -> None:
        self._labels.clear()

    def add(self, label: Label) -> None:
        self._labels.append(label)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Label]:
        return iter(self._labels)

    def texts(self) -> list[str]:
        return [label.text for label in self._labels]


class MeasurementSession:
    """
    Live measurement around an append-only vertex sequence.

    Every vertex change recomputes the whole result through the engine and
    rebuilds the labels. After ``destroy()`` every operation raises
    ``LifecycleError`` and leaves the session untouched.
    """

    def __init__(
        self,
        engine: MeasureEngine,
        *,
        locale: MeasureLocale | None = None,
        renderer: LabelRenderer | None = None,
    ) -> None:
        self.engine = engine
        self.locale = locale or MeasureLocale()
        self.renderer: LabelRenderer = renderer if renderer is not None else LabelCollection()
        self._vertices = VertexSequence()
        self._result = MeasurementResult.empty(engine.units)
        self._labels: tuple[Label, ...] = ()
        self._state = SessionState.INIT

    @classmethod
    def distance(
        cls,
        mode: MeasureMode | str = MeasureMode.PLANAR,
        *,
        scene: Scene | None = None,
        settings: Settings | None = None,
        renderer: LabelRenderer | None = None,
        **engine_options,
    ) -> "MeasurementSession":
        return cls._create(MeasureKind.DISTANCE, mode, scene, settings, renderer, engine_options)

    @classmethod
    def area(
        cls,
        mode: MeasureMode | str = MeasureMode.PLANAR,
        *,
        scene: Scene | None = None,
        settings: Settings | None = None,
        renderer: LabelRenderer | None = None,
        rng: np.random.Generator | None = None,
        **engine_options,
    ) -> "MeasurementSession":
        engine_options["rng"] = rng
        return cls._create(MeasureKind.AREA, mode, scene, settings, renderer, engine_options)

    @classmethod
    def _create(cls, kind, mode, scene, settings, renderer, engine_options) -> "MeasurementSession":
        settings = settings or get_settings()
        setup_logging_from_settings(settings.logging)
        engine = create_engine(kind, mode, scene=scene, settings=settings, **engine_options)
        locale = MeasureLocale(
            start=settings.locale.start,
            total=settings.locale.total,
            area=settings.locale.area,
        )
        return cls(engine, locale=locale, renderer=renderer)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def destroyed(self) -> bool:
        return self._state is SessionState.DESTROY

    @property
    def vertices(self) -> tuple[Point3, ...]:
        return tuple(self._vertices)

    @property
    def result(self) -> MeasurementResult:
        return self._result

    @property
    def labels(self) -> tuple[Label, ...]:
        return self._labels

    def _ensure_alive(self, operation: str) -> None:
        if self.destroyed:
            raise LifecycleError(
                f"Cannot {operation}: measurement session is destroyed",
                {"operation": operation, "state": self._state.value},
            )

    def _ensure_working(self, operation: str) -> None:
        self._ensure_alive(operation)
        if self._state is not SessionState.WORKING:
            raise LifecycleError(
                f"Cannot {operation}: measurement session is not started",
                {"operation": operation, "state": self._state.value},
            )

    def start(self) -> None:
        """Begin measuring; no-op unless the session is in INIT."""
        self._ensure_alive("start")
        if self._state is not SessionState.INIT:
            return
        self._state = SessionState.WORKING
        logger.debug("Started {} session with {}", self.engine.kind.value, self.engine)

    def update(self, vertices: Iterable[Point3]) -> MeasurementResult:
        """Replace the vertex sequence with the collector's current points."""
        self._ensure_working("update")
        self._vertices.replace(list(vertices))
        return self._refresh()

    def add_vertex(self, point: Point3) -> MeasurementResult:
        self._ensure_working("add vertex")
        self._vertices.append(point)
        return self._refresh()

    def end(self) -> None:
        """Clear the measurement and labels and return to INIT."""
        self._ensure_alive("end")
        self._reset()

    def destroy(self) -> None:
        self._ensure_alive("destroy")
        self._reset()
        self._state = SessionState.DESTROY
        logger.debug("Destroyed {} session", self.engine.kind.value)

    def _reset(self) -> None:
        self._vertices.clear()
        self._result = MeasurementResult.empty(self.engine.units)
        self._labels = ()
        self.renderer.clear()
        self._state = SessionState.INIT

    def _refresh(self) -> MeasurementResult:
        points = self.vertices
        result = self.engine.measure(points)
        if result.partial:
            logger.warning(
                "{} {} is a lower bound: {} terrain picks failed",
                self.engine.mode.value, self.engine.kind.value, result.failed_picks,
            )

        if self.engine.kind is MeasureKind.DISTANCE:
            labels = self._distance_labels(points, result)
        else:
            labels = self._area_labels(points, result)

        self._result = result
        self._labels = labels
        self.renderer.clear()
        for label in labels:
            self.renderer.add(label)
        return result

    def _distance_labels(self, points: Sequence[Point3], result: MeasurementResult) -> tuple[Label, ...]:
        if not points:
            return ()
        fmt = self.locale.format_length
        unit = result.unit
        last = len(points) - 1
        labels = [Label(points[0], self.locale.start)]
        for segment in result.segments:
            prefix = f"{self.locale.total}: " if segment.index == last else "D: "
            text = (
                prefix
                + fmt(segment.cumulative, segment.converted_cumulative, unit)
                + f"\n(Z: {fmt(rounded(segment.height_delta), segment.converted_axis_total[2], unit)})"
            )
            if segment.index > 1:
                text += f"\n(+{fmt(segment.length, segment.converted_length, unit)})"
            labels.append(Label(points[segment.index], text))
        return tuple(labels)

    def _area_labels(self, points: Sequence[Point3], result: MeasurementResult) -> tuple[Label, ...]:
        if len(points) < MIN_AREA_VERTICES:
            return ()
        count = len(points)
        center = Point3(
            sum(p.x for p in points) / count,
            sum(p.y for p in points) / count,
            sum(p.z for p in points) / count,
        )
        text = f"{self.locale.area}: " + self.locale.format_area(result.primary, result.converted, result.unit)
        return (Label(center, text),)


__all__ = ["MeasurementSession", "LabelRenderer", "LabelCollection"]
