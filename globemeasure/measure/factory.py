"""Engine selection from (kind, mode)."""

from __future__ import annotations

import numpy as np

from globemeasure.exceptions import ConfigurationError
from globemeasure.geodesy import CoordinateAdapter
from globemeasure.measure.area import PlanarAreaEngine, SurfaceAreaEngine
from globemeasure.measure.base import MeasureEngine, MeasureKind, MeasureMode
from globemeasure.measure.distance import PlanarDistanceEngine, SurfaceDistanceEngine
from globemeasure.scene import Scene
from globemeasure.settings import Settings, get_settings
from globemeasure.units import Unit


def create_engine(
    kind: MeasureKind | str,
    mode: MeasureMode | str = MeasureMode.PLANAR,
    *,
    scene: Scene | None = None,
    units: Unit | str | None = None,
    split_num: int | None = None,
    rng: np.random.Generator | None = None,
    adapter: CoordinateAdapter | None = None,
    settings: Settings | None = None,
) -> MeasureEngine:
    """
    Build the engine for a measurement kind and mode.

    Unset arguments fall back to ``settings`` (or the process-wide settings).

    Raises:
        ConfigurationError: If a surface engine is requested without a scene.
    """
    kind = MeasureKind(kind)
    mode = MeasureMode(mode)
    settings = settings or get_settings()
    units = Unit(units) if units is not None else settings.units
    adapter = adapter or CoordinateAdapter()

    if mode is MeasureMode.SURFACE and scene is None:
        raise ConfigurationError(
            f"surface {kind.value} measurement needs a scene",
            {"kind": kind.value, "mode": mode.value},
        )

    if kind is MeasureKind.DISTANCE:
        if mode is MeasureMode.PLANAR:
            return PlanarDistanceEngine(units=units, adapter=adapter)
        return SurfaceDistanceEngine(
            scene,
            split_num=split_num if split_num is not None else settings.distance.split_num,
            units=units,
            adapter=adapter,
        )

    if mode is MeasureMode.PLANAR:
        return PlanarAreaEngine(units=units, adapter=adapter)
    return SurfaceAreaEngine(
        scene,
        split_num=split_num if split_num is not None else settings.area.split_num,
        rng=rng,
        seed=settings.area.random_seed,
        units=units,
        adapter=adapter,
    )


__all__ = ["create_engine"]
