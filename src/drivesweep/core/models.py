"""Core data models for drivesweep."""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class DuplicateKind(str, Enum):
    """Heuristic that produced a duplicate group."""

    IDENTICAL_CHECKSUM = "identical_checksum"
    EXACT_NAME = "exact_name"
    VERSION_PATTERN = "version_pattern"
    SIMILAR_NAME = "similar_name"
    SIZE_TIME_CLUSTER = "size_time_cluster"
    BACKUP_PATTERN = "backup_pattern"


class SuggestedAction(str, Enum):
    """Remediation suggested for a duplicate group."""

    KEEP_LATEST = "keep_latest"
    KEEP_ORIGINAL = "keep_original"
    MANUAL_REVIEW = "manual_review"
    MERGE_FOLDERS = "merge_folders"
    DELETE_BACKUPS = "delete_backups"


class Priority(str, Enum):
    """Recommendation priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Numeric rank, higher is more urgent."""
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class RiskLevel(str, Enum):
    """Risk of acting on a recommendation."""

    SAFE = "safe"
    MODERATE = "moderate"
    RISKY = "risky"


class FileRecord(BaseModel):
    """Metadata for a single file in the drive snapshot.

    Records are immutable for the duration of an analysis run. Field aliases
    follow the Drive API ``files`` resource so API payloads can be validated
    directly.

    Attributes:
        id: Unique, stable file identifier
        name: Display name including extension
        size: Size in bytes
        checksum: Content hash (e.g. MD5); None means unknown content
        mime_type: MIME type reported by the drive
        modified_time: Last modification timestamp (timezone-aware, UTC if unspecified)
        parents: Folder ids containing the file
        web_view_link: Link to open the file in a browser
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    size: int = Field(default=0, ge=0)
    checksum: Optional[str] = Field(default=None, alias="md5Checksum")
    mime_type: str = Field(default="application/octet-stream", alias="mimeType")
    modified_time: datetime = Field(alias="modifiedTime")
    parents: List[str] = Field(default_factory=list)
    web_view_link: Optional[str] = Field(default=None, alias="webViewLink")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("checksum", mode="before")
    @classmethod
    def empty_checksum_is_unknown(cls, v: Any) -> Optional[str]:
        """Treat blank checksums as absent so they never match each other."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("modified_time", mode="before")
    @classmethod
    def accept_date_only(cls, v: Any) -> Any:
        """Accept bare ``YYYY-MM-DD`` dates as midnight."""
        if isinstance(v, str) and _DATE_ONLY.fullmatch(v.strip()):
            return f"{v.strip()}T00:00:00"
        return v

    @field_validator("modified_time")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Make timestamps comparable by assuming UTC for naive values."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class DuplicateGroup(BaseModel):
    """A set of files judged to be likely duplicates by one heuristic.

    ``members[0]`` is the file the strategy proposes to keep.

    Attributes:
        kind: Heuristic that produced the group
        reason: Human-readable explanation of the grouping
        members: Files in the group (at least two)
        wasted_bytes: Storage attributable to the redundant copies
        confidence: Certainty that the files are duplicates (0-100)
        suggested_action: Proposed remediation
        can_auto_resolve: Whether the action may run without confirmation
    """

    kind: DuplicateKind
    reason: str
    members: List[FileRecord] = Field(min_length=2)
    wasted_bytes: int = Field(default=0, ge=0)
    confidence: int = Field(ge=0, le=100)
    suggested_action: SuggestedAction
    can_auto_resolve: bool = False

    @property
    def size(self) -> int:
        """Number of member files."""
        return len(self.members)

    @property
    def kept(self) -> FileRecord:
        """The file proposed to be kept."""
        return self.members[0]

    @property
    def redundant(self) -> List[FileRecord]:
        """Files other than the kept one."""
        return self.members[1:]

    @property
    def total_bytes(self) -> int:
        """Combined size of all members."""
        return sum(f.size for f in self.members)

    @property
    def member_ids(self) -> List[str]:
        return [f.id for f in self.members]


class Recommendation(BaseModel):
    """A prioritized, human-actionable summary of one or more groups.

    Attributes:
        priority: Urgency of the recommendation
        action: Short imperative description
        description: Longer explanation
        potential_savings: Bytes reclaimable by following it
        risk_level: Risk of acting on it
        auto_executable: Whether it may run without confirmation
        group_count: Number of duplicate groups folded into it
    """

    priority: Priority
    action: str
    description: str
    potential_savings: int = Field(default=0, ge=0)
    risk_level: RiskLevel
    auto_executable: bool = False
    group_count: int = Field(default=0, ge=0)


class DetectionReport(BaseModel):
    """Outcome of one analysis run."""

    groups: List[DuplicateGroup] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
    file_count: int = 0
    statistics: Dict[str, Any] = Field(default_factory=dict)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_wasted_bytes(self) -> int:
        return sum(g.wasted_bytes for g in self.groups)
