from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from globemeasure.exceptions import ConfigurationError
from globemeasure.geometry.contract import DEFAULT_AREA_SPLIT_NUM, DEFAULT_DISTANCE_SPLIT_NUM
from globemeasure.units import LENGTH_FACTORS, Unit

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

CONFIG_ENV = "GLOBEMEASURE_CONFIG"


class DistanceSettings(BaseModel):
    split_num: int = Field(DEFAULT_DISTANCE_SPLIT_NUM, ge=1, le=10000)


class AreaSettings(BaseModel):
    split_num: int = Field(DEFAULT_AREA_SPLIT_NUM, ge=1, le=1000)
    # None draws fresh seeds every run
    random_seed: int | None = None


class LocaleSettings(BaseModel):
    start: str = "start"
    total: str = "Total"
    area: str = "Area"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    log_file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level


class Settings(BaseModel):
    units: Unit = Unit.KILOMETERS
    distance: DistanceSettings = Field(default_factory=DistanceSettings)
    area: AreaSettings = Field(default_factory=AreaSettings)
    locale: LocaleSettings = Field(default_factory=LocaleSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("units")
    @classmethod
    def _length_unit(cls, value: Unit) -> Unit:
        if value not in LENGTH_FACTORS:
            raise ValueError(f"{value.value} is not a length unit")
        return value

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                the GLOBEMEASURE_CONFIG environment variable; without either the
                defaults are returned.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file does not exist or is invalid.
        """
        if path is None:
            env_path = os.getenv(CONFIG_ENV)
            if not env_path:
                return cls()
            path = Path(env_path)
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", {"path": str(config_path)}
            )
        try:
            with config_path.open("r", encoding="utf-8") as fp:
                payload = yaml.safe_load(fp) or {}
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}", {"path": str(config_path)}) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "DistanceSettings",
    "AreaSettings",
    "LocaleSettings",
    "LoggingSettings",
    "get_settings",
]
