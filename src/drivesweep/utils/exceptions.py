"""
Exception hierarchy for drivesweep.

The detection core itself never raises: an empty result is a valid outcome.
These exceptions cover the outer surface (snapshot loading, configuration
and report export).
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union


class DriveSweepError(Exception):
    """Base exception for all drivesweep errors.

    Provides common functionality for error details and timestamps.
    """

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class SnapshotError(DriveSweepError):
    """A file-metadata snapshot could not be read.

    Raised when the snapshot file is missing, in an unsupported format,
    or structurally malformed (e.g. not a list of records).
    """

    def __init__(
        self,
        message: str = "Snapshot could not be loaded",
        path: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs
        if path is not None:
            details["path"] = str(path)
        super().__init__(message, details)
        self.path = path


class ValidationError(DriveSweepError):
    """A file record failed validation.

    Raised in strict loading mode when a record is missing a required
    field such as ``id`` or ``name``.
    """

    def __init__(
        self, message: str = "Validation failed", field: Optional[str] = None, **kwargs: Any
    ) -> None:
        """Initialize the validation error.

        Args:
            message: Human-readable error message
            field: Optional name of the field that failed validation
            **kwargs: Additional details
        """
        details = kwargs
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class ConfigurationError(DriveSweepError):
    """Configuration error.

    Raised when the application configuration is invalid or incomplete.
    """

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key


class ExportError(DriveSweepError):
    """Export operation failed."""

    def __init__(
        self, message: str = "Export failed", format: Optional[str] = None, **kwargs: Any
    ) -> None:
        details = kwargs
        if format:
            details["format"] = format
        super().__init__(message, details)
        self.format = format
