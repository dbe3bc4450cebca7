"""
drivesweep - duplicate detection for cloud-drive file snapshots.

Given file metadata exported from a drive, drivesweep groups likely
duplicates with six independent heuristics, resolves overlaps between
them, and recommends cleanups.

Example:
    >>> from drivesweep import DuplicateDetector, load_snapshot
    >>>
    >>> files = load_snapshot("files.json")
    >>> report = DuplicateDetector(files).analyze()
    >>> for rec in report.recommendations:
    ...     print(rec.priority.value, rec.action)
"""

__version__ = "0.3.0"

from drivesweep.core.models import (
    DetectionReport,
    DuplicateGroup,
    DuplicateKind,
    FileRecord,
    Recommendation,
    SuggestedAction,
)
from drivesweep.core.snapshot import load_snapshot
from drivesweep.detection import DuplicateDetector, generate_recommendations

__all__ = [
    "__version__",
    "FileRecord",
    "DuplicateGroup",
    "DuplicateKind",
    "SuggestedAction",
    "Recommendation",
    "DetectionReport",
    "DuplicateDetector",
    "generate_recommendations",
    "load_snapshot",
]
