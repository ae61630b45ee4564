"""Structured logging configuration for globemeasure."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from globemeasure.settings import LoggingSettings


class JSONFormatter:
    """JSON formatter for structured logging."""

    def __call__(self, record: dict[str, Any]) -> str:
        """Format log record as one JSON line; braces are escaped for loguru."""
        log_data = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "module": record.get("module", ""),
            "function": record.get("function", ""),
            "line": record.get("line", 0),
        }

        if record.get("exception"):
            exc_type, exc_value, _ = record["exception"]
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "value": str(exc_value) if exc_value else None,
            }

        if record.get("extra"):
            log_data.update({key: str(value) for key, value in record["extra"].items()})

        line = json.dumps(log_data, ensure_ascii=False)
        return line.replace("{", "{{").replace("}", "}}") + "\n"


TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Whether to emit JSON lines instead of colored text.
        log_file: Optional path to log file. If None, logs only to stderr.
    """
    # Remove default handler
    logger.remove()

    formatter = JSONFormatter() if json_format else TEXT_FORMAT

    logger.add(
        sys.stderr,
        format=formatter,
        level=level,
        colorize=not json_format,
    )

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=formatter,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
        )


_applied: LoggingSettings | None = None


def setup_logging_from_settings(settings: LoggingSettings, *, force: bool = False) -> bool:
    """Apply the logging section of the settings.

    Sinks are only rebuilt when the section differs from the one applied last,
    so every session built from the same settings shares one configuration.

    Returns:
        True if the sinks were (re)configured.
    """
    global _applied
    if not force and settings == _applied:
        return False
    setup_logging(level=settings.level, json_format=settings.json_format, log_file=settings.log_file)
    _applied = settings.model_copy()
    return True


def get_logger(name: str | None = None) -> Any:
    """Get a logger instance.

    Args:
        name: Optional logger name. If None, returns the default logger.

    Returns:
        Logger instance.
    """
    if name:
        return logger.bind(name=name)
    return logger
