import json
import sys

import pytest
from loguru import logger

from globemeasure import logging_config
from globemeasure.logging_config import get_logger, setup_logging, setup_logging_from_settings
from globemeasure.session import MeasurementSession
from globemeasure.settings import LoggingSettings, Settings


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)
    logging_config._applied = None


def test_json_log_file(tmp_path):
    log_file = tmp_path / "logs" / "measure.log"
    setup_logging(level="DEBUG", json_format=True, log_file=log_file)
    get_logger("tests").info("measured {} m with {braces}", 12.5, braces="{}")
    logger.remove()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["level"] == "INFO"
    assert record["message"] == "measured 12.5 m with {}"
    assert record["name"] == "tests"


def test_level_filters_file(tmp_path):
    log_file = tmp_path / "measure.log"
    setup_logging_from_settings(LoggingSettings(level="warning", log_file=log_file))
    logger.debug("hidden")
    logger.warning("shown")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "shown" in content
    assert "hidden" not in content


def test_same_settings_are_applied_once(tmp_path):
    settings = LoggingSettings(log_file=tmp_path / "measure.log")
    assert setup_logging_from_settings(settings)
    assert not setup_logging_from_settings(LoggingSettings(log_file=tmp_path / "measure.log"))
    assert setup_logging_from_settings(settings, force=True)


def test_session_applies_logging_settings(tmp_path):
    log_file = tmp_path / "session.log"
    settings = Settings(logging=LoggingSettings(level="DEBUG", json_format=True, log_file=log_file))
    session = MeasurementSession.distance(settings=settings)
    session.start()
    logger.remove()

    messages = [json.loads(line)["message"] for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert any(message.startswith("Started distance session") for message in messages)
