"""Custom exception hierarchy for globemeasure."""

from __future__ import annotations


class GlobeMeasureError(Exception):
    """Base exception for all globemeasure-specific errors."""
    
    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(GlobeMeasureError):
    """Raised when configuration is invalid or missing."""
    pass


class UnitConversionError(GlobeMeasureError):
    """Raised when a value cannot be converted between the requested units."""
    pass


class GeometryError(GlobeMeasureError):
    """Raised when geometry operations fail."""
    pass


class LifecycleError(GlobeMeasureError):
    """Raised when a measurement session is used outside its valid state."""
    pass
