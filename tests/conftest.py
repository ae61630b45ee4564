from __future__ import annotations

import numpy as np
import pytest

from globemeasure.geodesy import CoordinateAdapter
from globemeasure.models import GeodeticPoint
from globemeasure.scene import NadirTerrainScene
from globemeasure.settings import CONFIG_ENV, Settings, get_settings

from tests.utils_geo import VIEW_SIZE


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def adapter() -> CoordinateAdapter:
    return CoordinateAdapter()


@pytest.fixture
def settings() -> Settings:
    return Settings()


def _scene(adapter: CoordinateAdapter, **kwargs) -> NadirTerrainScene:
    return NadirTerrainScene(
        GeodeticPoint(0.0, 0.0, 0.0),
        meters_per_pixel=1.0,
        width=VIEW_SIZE,
        height=VIEW_SIZE,
        adapter=adapter,
        **kwargs,
    )


@pytest.fixture
def flat_scene(adapter) -> NadirTerrainScene:
    return _scene(adapter)


@pytest.fixture
def sloped_scene(adapter) -> NadirTerrainScene:
    """Plane rising half a meter per meter towards the east."""
    return _scene(adapter, terrain=lambda east, north: 0.5 * east)


@pytest.fixture
def make_scene(adapter):
    def factory(**kwargs) -> NadirTerrainScene:
        return _scene(adapter, **kwargs)
    return factory


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


