"""
JSON exporter for drivesweep.

Writes the whole report (groups, recommendations, statistics) as a single
JSON document.
"""

import json
from pathlib import Path
from typing import Any, Dict

from drivesweep.core.models import DetectionReport
from drivesweep.export.base import BaseExporter
from drivesweep.utils.exceptions import ExportError


class JSONExporter(BaseExporter):
    """Exporter for JSON format.

    Example:
        >>> exporter = JSONExporter(output_dir="results")
        >>> exporter.export_report(report, "report")
        PosixPath('results/report.json')
    """

    @property
    def file_extension(self) -> str:
        return "json"

    def export_report(
        self, report: DetectionReport, output_file: str, indent: int = 2, **kwargs
    ) -> Path:
        """Export a report to a JSON file.

        Args:
            report: Report to export
            output_file: Name of output file (will add .json if needed)
            indent: Indentation for pretty-printing
            **kwargs: Additional json.dump options

        Returns:
            Path to created JSON file

        Raises:
            ExportError: If writing to file fails
        """
        output_path = self._get_output_path(output_file)

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(self.report_to_dict(report), f, indent=indent, ensure_ascii=False, **kwargs)
        except (OSError, TypeError, ValueError) as e:
            raise ExportError(f"Failed to write JSON file: {e}", format="json") from e

        return output_path

    @staticmethod
    def report_to_dict(report: DetectionReport) -> Dict[str, Any]:
        """Convert a report to JSON-safe primitives."""
        data = report.model_dump(mode="json")
        data["total_wasted_bytes"] = report.total_wasted_bytes
        return data
