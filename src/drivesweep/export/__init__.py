"""
Report exporters for drivesweep.

Available formats:
    - JSON: full report (groups, recommendations, statistics)
    - CSV: one row per group member
"""

from drivesweep.export.base import BaseExporter
from drivesweep.export.csv_exporter import CSVExporter
from drivesweep.export.json_exporter import JSONExporter

__all__ = ["BaseExporter", "CSVExporter", "JSONExporter"]
