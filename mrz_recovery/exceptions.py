"""
Exceptions raised inside the MRZ engine.

The decoder never lets these escape for malformed OCR input: extraction
errors are caught and reported as a degraded result. Only configuration
problems reach the caller.
"""

from typing import Any, Optional


class MRZError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(MRZError):
    """Invalid settings, e.g. an unreadable correction table override."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details=details)


class ExtractionError(MRZError):
    """Slicing the TD3 fields out of two normalized lines failed."""

    def __init__(self, message: str, line1: str = "", line2: str = ""):
        super().__init__(message, details={"line1": line1, "line2": line2})
