"""
Utility modules for drivesweep.

This package contains:
- Exception hierarchy
- Logging configuration
- Byte formatting
"""

from .exceptions import (
    ConfigurationError,
    DriveSweepError,
    ExportError,
    SnapshotError,
    ValidationError,
)
from .formatting import format_bytes
from .logging import (
    ColoredFormatter,
    PerformanceLogger,
    setup_logging,
    verbosity_to_level,
)

__all__ = [
    # Exceptions
    "DriveSweepError",
    "SnapshotError",
    "ValidationError",
    "ConfigurationError",
    "ExportError",
    # Formatting
    "format_bytes",
    # Logging
    "setup_logging",
    "verbosity_to_level",
    "PerformanceLogger",
    "ColoredFormatter",
]
