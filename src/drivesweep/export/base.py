"""
Base exporter classes for drivesweep.

This module provides the base infrastructure for writing detection
reports to files.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from drivesweep.core.models import DetectionReport


class BaseExporter(ABC):
    """Base class for all report exporters.

    Exporters convert a DetectionReport to a specific output format and
    write it to a file in ``output_dir``.
    """

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize the exporter.

        Args:
            output_dir: Directory to write output files. If None, uses current directory.
        """
        self.output_dir = Path(output_dir) if output_dir else Path("")
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def export_report(self, report: DetectionReport, output_file: str, **kwargs) -> Path:
        """Export a detection report.

        Args:
            report: Report to export
            output_file: Name of the output file (without path)
            **kwargs: Format-specific options

        Returns:
            Path to the created file
        """
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Get the file extension for this exporter (e.g., 'json', 'csv')."""
        pass

    def _get_output_path(self, filename: str) -> Path:
        """Get the full output path, adding the extension if missing."""
        if not filename.endswith(f".{self.file_extension}"):
            filename = f"{filename}.{self.file_extension}"
        return self.output_dir / filename
