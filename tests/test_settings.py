import pytest
import yaml

from globemeasure.exceptions import ConfigurationError
from globemeasure.measure import SurfaceDistanceEngine, create_engine
from globemeasure.settings import CONFIG_ENV, Settings, get_settings
from globemeasure.units import Unit


def _write(path, payload):
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    return path


def test_defaults():
    settings = Settings.load()
    assert settings.units is Unit.KILOMETERS
    assert settings.distance.split_num == 100
    assert settings.area.split_num == 10
    assert settings.area.random_seed is None
    assert settings.locale.start == "start"
    assert settings.logging.level == "INFO"


def test_load_yaml(tmp_path):
    path = _write(tmp_path / "measure.yaml", {
        "units": "miles",
        "distance": {"split_num": 50},
        "area": {"split_num": 20, "random_seed": 42},
        "logging": {"level": "debug"},
    })
    settings = Settings.load(path)
    assert settings.units is Unit.MILES
    assert settings.distance.split_num == 50
    assert settings.area.random_seed == 42
    assert settings.logging.level == "DEBUG"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert Settings.load(path) == Settings()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError) as excinfo:
        Settings.load(tmp_path / "nope.yaml")
    assert excinfo.value.details["path"].endswith("nope.yaml")


@pytest.mark.parametrize("payload", [
    {"distance": {"split_num": 0}},
    {"area": {"split_num": -3}},
    {"units": "acres"},
    {"units": "furlongs"},
    {"logging": {"level": "LOUD"}},
])
def test_invalid_content(tmp_path, payload):
    with pytest.raises(ConfigurationError):
        Settings.load(_write(tmp_path / "bad.yaml", payload))


def test_malformed_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("units: [kilometers\n", encoding="utf-8")
    with pytest.raises(ConfigurationError) as excinfo:
        Settings.load(path)
    assert excinfo.value.details["path"] == str(path)


def test_environment_variable(tmp_path, monkeypatch):
    path = _write(tmp_path / "env.yaml", {"units": "feet"})
    monkeypatch.setenv(CONFIG_ENV, str(path))
    get_settings.cache_clear()
    assert get_settings().units is Unit.FEET


def test_factory_uses_settings(flat_scene):
    settings = Settings(units="meters", distance={"split_num": 7})
    engine = create_engine("distance", "surface", scene=flat_scene, settings=settings)
    assert isinstance(engine, SurfaceDistanceEngine)
    assert engine.split_num == 7
    assert engine.units is Unit.METERS


def test_factory_arguments_override_settings(flat_scene):
    engine = create_engine("area", "surface", scene=flat_scene, split_num=3, units="miles")
    assert engine.split_num == 3
    assert engine.units is Unit.MILES


@pytest.mark.parametrize("kind", ["distance", "area"])
def test_factory_keeps_explicit_zero_split(flat_scene, kind):
    with pytest.raises(ValueError):
        create_engine(kind, "surface", scene=flat_scene, split_num=0)
