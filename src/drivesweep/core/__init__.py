"""
Core functionality for drivesweep.

This package contains the data models, configuration and snapshot loading.
"""

from .config import (
    DetectionConfig,
    OutputConfig,
    SweepConfig,
    load_config,
    load_config_from_dict,
    merge_configs,
    save_config,
)
from .models import (
    DetectionReport,
    DuplicateGroup,
    DuplicateKind,
    FileRecord,
    Priority,
    Recommendation,
    RiskLevel,
    SuggestedAction,
)
from .snapshot import load_records, load_snapshot, normalize_record

__all__ = [
    # Models
    "FileRecord",
    "DuplicateGroup",
    "DuplicateKind",
    "SuggestedAction",
    "Recommendation",
    "Priority",
    "RiskLevel",
    "DetectionReport",
    # Configuration
    "SweepConfig",
    "DetectionConfig",
    "OutputConfig",
    "load_config",
    "load_config_from_dict",
    "save_config",
    "merge_configs",
    # Snapshots
    "load_snapshot",
    "load_records",
    "normalize_record",
]
