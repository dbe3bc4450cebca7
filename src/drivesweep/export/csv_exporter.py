"""
CSV exporter for drivesweep.

This module flattens duplicate groups to one row per member file,
suitable for review in spreadsheet applications.
"""

import csv
from pathlib import Path
from typing import Any, Dict, List

from drivesweep.core.models import DetectionReport, DuplicateGroup
from drivesweep.export.base import BaseExporter
from drivesweep.utils.exceptions import ExportError

FIELDNAMES = [
    "group_index",
    "kind",
    "confidence",
    "suggested_action",
    "can_auto_resolve",
    "group_wasted_bytes",
    "position",
    "keep",
    "file_id",
    "name",
    "size",
    "checksum",
    "mime_type",
    "modified_time",
    "web_view_link",
    "reason",
]


class CSVExporter(BaseExporter):
    """Exporter for CSV format.

    Each member of each group becomes a row; ``keep`` marks the file the
    group proposes to keep (position 0).

    Example:
        >>> exporter = CSVExporter(output_dir="results")
        >>> exporter.export_report(report, "groups")
        PosixPath('results/groups.csv')
    """

    @property
    def file_extension(self) -> str:
        return "csv"

    def export_report(self, report: DetectionReport, output_file: str, **kwargs) -> Path:
        """Export a report's groups to a CSV file.

        Raises:
            ExportError: If writing to file fails
        """
        output_path = self._get_output_path(output_file)

        try:
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=FIELDNAMES, **kwargs)
                writer.writeheader()
                for index, group in enumerate(report.groups):
                    writer.writerows(self._group_to_rows(index, group))
        except (OSError, csv.Error) as e:
            raise ExportError(f"Failed to write CSV file: {e}", format="csv") from e

        return output_path

    def _group_to_rows(self, index: int, group: DuplicateGroup) -> List[Dict[str, Any]]:
        rows = []
        for position, record in enumerate(group.members):
            rows.append(
                {
                    "group_index": index,
                    "kind": group.kind.value,
                    "confidence": group.confidence,
                    "suggested_action": group.suggested_action.value,
                    "can_auto_resolve": group.can_auto_resolve,
                    "group_wasted_bytes": group.wasted_bytes,
                    "position": position,
                    "keep": position == 0,
                    "file_id": record.id,
                    "name": record.name,
                    "size": record.size,
                    "checksum": record.checksum or "",
                    "mime_type": record.mime_type,
                    "modified_time": record.modified_time.isoformat(),
                    "web_view_link": record.web_view_link or "",
                    "reason": group.reason,
                }
            )
        return rows
