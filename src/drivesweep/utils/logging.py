"""
Logging configuration for drivesweep.

This module provides utilities for setting up logging with consistent
formatting and levels, plus a timing context manager for detection runs.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Any, Optional, Union

# Default log format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - " "[%(filename)s:%(lineno)d] - %(message)s"
)


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output.

    Adds color codes to log levels for better visibility in terminals.
    """

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        result = super().format(record)

        # Reset levelname for other handlers
        record.levelname = levelname

        return result


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    colored: bool = True,
    stream: Any = None,
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file, written in addition to the console
        format_string: Custom format string (uses DEFAULT_FORMAT if None)
        colored: Use colored output for console logging
        stream: Console stream (defaults to stderr)

    Returns:
        Configured root logger

    Example:
        >>> logger = setup_logging(level="DEBUG", log_file=Path("sweep.log"))
        >>> logger.info("Detection started")
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)

    if format_string is None:
        format_string = DEFAULT_FORMAT

    stream = stream or sys.stderr
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(numeric_level)

    console_formatter: Union[ColoredFormatter, logging.Formatter]
    if colored and hasattr(stream, "isatty") and stream.isatty():
        console_formatter = ColoredFormatter(format_string, datefmt="%H:%M:%S")
    else:
        console_formatter = logging.Formatter(format_string, datefmt="%H:%M:%S")

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        root_logger.addHandler(file_handler)

    return root_logger


def verbosity_to_level(verbose: int = 0, quiet: bool = False) -> str:
    """Map CLI verbosity flags to a level name (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if quiet:
        return "ERROR"
    if verbose == 0:
        return "WARNING"
    if verbose == 1:
        return "INFO"
    return "DEBUG"


class PerformanceLogger:
    """Context manager for logging operation performance.

    Example:
        >>> with PerformanceLogger("Duplicate detection"):
        ...     groups = detector.detect_duplicates()
        # Output: "Duplicate detection completed in 0.12s"
    """

    def __init__(
        self, operation: str, logger: Optional[logging.Logger] = None, level: str = "INFO"
    ):
        """Initialize the performance logger.

        Args:
            operation: Description of the operation
            logger: Logger instance (uses root logger if None)
            level: Log level for the message
        """
        self.operation = operation
        self.logger = logger or logging.getLogger()
        self.level = getattr(logging, level.upper(), logging.INFO)
        self.start_time: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = time.perf_counter()
        self.logger.log(self.level, f"{self.operation} started")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.start_time is None:
            return
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} completed in {self.elapsed:.2f}s")
        else:
            self.logger.log(
                logging.ERROR, f"{self.operation} failed after {self.elapsed:.2f}s: {exc_val}"
            )
