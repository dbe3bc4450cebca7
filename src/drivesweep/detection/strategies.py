"""
Duplicate detection strategies for drivesweep.

Each strategy is an independent heuristic that turns a snapshot of file
records into candidate duplicate groups. Strategies never look at each
other's output; overlaps are resolved afterwards by the detector.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import timedelta
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple, Type

from drivesweep.core.config import DetectionConfig
from drivesweep.core.models import DuplicateGroup, DuplicateKind, FileRecord, SuggestedAction
from drivesweep.detection.similarity import similarity
from drivesweep.utils.formatting import format_bytes

logger = logging.getLogger(__name__)

# Each rule captures the base name before a version marker and an optional extension.
VERSION_PATTERNS = (
    re.compile(r"(.+?)[-_\s]*(?:v\d+|version\s*\d+)(?:\.\w+)?", re.IGNORECASE | re.ASCII),
    re.compile(r"(.+?)[-_\s]*\(\d+\)(?:\.\w+)?", re.IGNORECASE | re.ASCII),
    re.compile(r"(.+?)[-_\s]*copy(?:\s*\d+)?(?:\.\w+)?", re.IGNORECASE | re.ASCII),
    re.compile(r"(.+?)[-_\s]*\d+(?:\.\w+)?", re.IGNORECASE | re.ASCII),
)

BACKUP_PATTERNS = (
    re.compile(r"(.+?)[-_\s]*(?:backup|bak|old|temp|tmp)(?:\.\w+)?", re.IGNORECASE | re.ASCII),
    re.compile(r"(?:backup|bak|old|temp|tmp)[-_\s]*(.+?)(?:\.\w+)?", re.IGNORECASE | re.ASCII),
    re.compile(r"(.+?)[-_\s]*\d{4}-\d{2}-\d{2}(?:\.\w+)?", re.IGNORECASE | re.ASCII),
)

_EXTENSION = re.compile(r"\.\w+$", re.ASCII)


def extract_base(
    filename: str, patterns: Sequence["re.Pattern[str]"], min_length: int = 3
) -> Optional[str]:
    """Return the lower-cased base name captured by the first matching rule.

    A rule whose trimmed capture is shorter than ``min_length`` is skipped and
    the next rule is tried.

    Example:
        >>> extract_base("Report (2).xlsx", VERSION_PATTERNS)
        'report'
    """
    for pattern in patterns:
        match = pattern.fullmatch(filename)
        if match:
            base = match.group(1).strip()
            if len(base) >= min_length:
                return base.lower()
    return None


def strip_extension(filename: str) -> str:
    """Lower-cased filename without its final extension."""
    return _EXTENSION.sub("", filename).strip().lower()


def describe_gap(seconds: int) -> str:
    """Render a time gap the way group reasons print it ('1 hour', '30 minutes')."""
    if seconds and seconds % 3600 == 0:
        hours = seconds // 3600
        return f"{hours} hour" + ("s" if hours != 1 else "")
    if seconds and seconds % 60 == 0:
        minutes = seconds // 60
        return f"{minutes} minute" + ("s" if minutes != 1 else "")
    return f"{seconds} second" + ("s" if seconds != 1 else "")


class DuplicateStrategy(ABC):
    """Base class for duplicate detection strategies.

    Subclasses set the class-level grouping constants and implement
    :meth:`detect`.
    """

    kind: DuplicateKind
    confidence: int
    suggested_action: SuggestedAction
    can_auto_resolve: bool = False

    def __init__(self, config: Optional[DetectionConfig] = None):
        """Initialize strategy with configuration.

        Args:
            config: Detection configuration (defaults if None)
        """
        self.config = config or DetectionConfig()

    @abstractmethod
    def detect(self, files: Sequence[FileRecord]) -> List[DuplicateGroup]:
        """Find candidate duplicate groups.

        Args:
            files: Snapshot of file records, in caller order

        Returns:
            Candidate groups, each with at least two members
        """
        pass

    def make_group(
        self, members: List[FileRecord], reason: str, wasted_bytes: Optional[int] = None
    ) -> DuplicateGroup:
        """Build a group with this strategy's constants.

        ``wasted_bytes`` defaults to the size of every member but the first.
        """
        if wasted_bytes is None:
            wasted_bytes = self.sum_sizes(members[1:])
        return DuplicateGroup(
            kind=self.kind,
            reason=reason,
            members=members,
            wasted_bytes=wasted_bytes,
            confidence=self.confidence,
            suggested_action=self.suggested_action,
            can_auto_resolve=self.can_auto_resolve,
        )

    @staticmethod
    def group_by(
        files: Sequence[FileRecord], key: Callable[[FileRecord], Optional[Hashable]]
    ) -> Dict[Hashable, List[FileRecord]]:
        """Bucket files by key in first-seen order, skipping files whose key is None."""
        buckets: Dict[Hashable, List[FileRecord]] = defaultdict(list)
        for f in files:
            k = key(f)
            if k is not None:
                buckets[k].append(f)
        return buckets

    @staticmethod
    def sum_sizes(files: Sequence[FileRecord]) -> int:
        return sum(f.size for f in files)

    @staticmethod
    def newest_first(files: Sequence[FileRecord]) -> List[FileRecord]:
        """Sort by modification time, newest first; ties keep input order."""
        return sorted(files, key=lambda f: f.modified_time, reverse=True)


class ExactChecksumStrategy(DuplicateStrategy):
    """Files with the same content hash are certain duplicates."""

    kind = DuplicateKind.IDENTICAL_CHECKSUM
    confidence = 100
    suggested_action = SuggestedAction.KEEP_LATEST
    can_auto_resolve = True

    def detect(self, files: Sequence[FileRecord]) -> List[DuplicateGroup]:
        buckets = self.group_by(files, lambda f: f.checksum)
        groups = []
        for checksum, members in buckets.items():
            if len(members) < 2:
                continue
            # Candidate value counts every copy; the resolver recomputes it.
            groups.append(
                self.make_group(
                    members,
                    f"Files with identical content (checksum: {checksum[:8]}...)",
                    wasted_bytes=self.sum_sizes(members),
                )
            )
        return groups


class NamePatternStrategy(DuplicateStrategy):
    """Groups files whose names reduce to the same base under a set of rules.

    Groups are sorted newest first, so the most recent file is kept.
    """

    patterns: Sequence["re.Pattern[str]"] = ()
    reason_template = "{base}"

    def extract_base(self, filename: str) -> Optional[str]:
        return extract_base(filename, self.patterns, self.config.min_base_length)

    def detect(self, files: Sequence[FileRecord]) -> List[DuplicateGroup]:
        return self._groups_from(self.group_by(files, lambda f: self.extract_base(f.name)))

    def _groups_from(self, buckets: Dict[Hashable, List[FileRecord]]) -> List[DuplicateGroup]:
        return [
            self.make_group(self.newest_first(members), self.reason_template.format(base=base))
            for base, members in buckets.items()
            if len(members) > 1
        ]


class VersionPatternStrategy(NamePatternStrategy):
    """Files named like successive versions of one document (v1, (2), copy, 3)."""

    kind = DuplicateKind.VERSION_PATTERN
    confidence = 85
    suggested_action = SuggestedAction.KEEP_LATEST
    can_auto_resolve = True

    patterns = VERSION_PATTERNS
    reason_template = "Files following version pattern: {base}"


class BackupPatternStrategy(NamePatternStrategy):
    """Backup copies (name_backup, bak_name, name_2024-01-31) and their originals.

    A file that carries no backup marker joins the group when its name
    without extension equals a backup base, so ``Presentation.pptx`` is
    grouped with ``Presentation_backup.pptx``. Backups are never
    auto-resolved: they may still be needed.
    """

    kind = DuplicateKind.BACKUP_PATTERN
    confidence = 90
    suggested_action = SuggestedAction.DELETE_BACKUPS
    can_auto_resolve = False

    patterns = BACKUP_PATTERNS
    reason_template = "Backup files detected for: {base}"

    def detect(self, files: Sequence[FileRecord]) -> List[DuplicateGroup]:
        bases = {f.name: self.extract_base(f.name) for f in files}
        known = {b for b in bases.values() if b is not None}

        def key(f: FileRecord) -> Optional[str]:
            base = bases[f.name]
            if base is not None:
                return base
            stem = strip_extension(f.name)
            return stem if stem in known else None

        return self._groups_from(self.group_by(files, key))


class FuzzyNameSimilarityStrategy(DuplicateStrategy):
    """Files whose names differ by a few edits (typos, small variations).

    Pairwise comparison is O(n^2) in the number of files. Large snapshots
    (tens of thousands of records) should be analyzed off any
    latency-sensitive thread; a warning is logged above
    ``fuzzy_warn_threshold`` files.
    """

    kind = DuplicateKind.SIMILAR_NAME
    confidence = 70
    suggested_action = SuggestedAction.MANUAL_REVIEW
    can_auto_resolve = False

    def detect(self, files: Sequence[FileRecord]) -> List[DuplicateGroup]:
        n = len(files)
        if n > self.config.fuzzy_warn_threshold:
            logger.warning(
                f"Fuzzy name matching over {n} files needs ~{n * (n - 1) // 2:,} comparisons; "
                "this may take a long time"
            )

        threshold = self.config.similarity_threshold
        claimed = [False] * n
        groups = []

        for i in range(n):
            if claimed[i]:
                continue
            name = files[i].name
            similar = [files[i]]
            for j in range(i + 1, n):
                if not claimed[j] and similarity(name, files[j].name) > threshold:
                    similar.append(files[j])
                    claimed[j] = True
            if len(similar) > 1:
                claimed[i] = True
                groups.append(self.make_group(similar, "Files with similar names (typos or variations)"))

        return groups


class SizeTimeClusterStrategy(DuplicateStrategy):
    """Large files of identical size modified within a short time of each other."""

    kind = DuplicateKind.SIZE_TIME_CLUSTER
    confidence = 60
    suggested_action = SuggestedAction.MANUAL_REVIEW
    can_auto_resolve = False

    def detect(self, files: Sequence[FileRecord]) -> List[DuplicateGroup]:
        min_size = self.config.min_cluster_size
        gap_seconds = self.config.max_time_gap_seconds
        buckets = self.group_by(files, lambda f: f.size if f.size > min_size else None)

        groups = []
        for size, members in buckets.items():
            if len(members) < 2:
                continue
            for cluster in self.cluster_by_time(members, timedelta(seconds=gap_seconds)):
                groups.append(
                    self.make_group(
                        cluster,
                        f"Files with same size ({format_bytes(size)}) "
                        f"uploaded within {describe_gap(gap_seconds)}",
                    )
                )
        return groups

    @staticmethod
    def cluster_by_time(files: Sequence[FileRecord], max_gap: timedelta) -> List[List[FileRecord]]:
        """Chain files oldest first, starting a new cluster when a gap exceeds ``max_gap``.

        Only clusters with at least two files are returned.
        """
        ordered = sorted(files, key=lambda f: f.modified_time)
        clusters = []
        current = [ordered[0]]

        for prev, f in zip(ordered, ordered[1:]):
            if f.modified_time - prev.modified_time <= max_gap:
                current.append(f)
            else:
                if len(current) > 1:
                    clusters.append(current)
                current = [f]

        if len(current) > 1:
            clusters.append(current)
        return clusters


class ExactNameStrategy(DuplicateStrategy):
    """Files sharing the exact same name (case-sensitive, extension included).

    Members stay in input order; no temporal sort is applied even though
    the suggested action is keep-latest.
    """

    kind = DuplicateKind.EXACT_NAME
    confidence = 80
    suggested_action = SuggestedAction.KEEP_LATEST
    can_auto_resolve = False

    def detect(self, files: Sequence[FileRecord]) -> List[DuplicateGroup]:
        buckets = self.group_by(files, lambda f: f.name)
        return [
            self.make_group(members, f"Files with identical filename: {name}")
            for name, members in buckets.items()
            if len(members) > 1
        ]


# Overlap resolution depends on this order; do not derive it from a mapping.
DEFAULT_STRATEGY_ORDER: Tuple[Type[DuplicateStrategy], ...] = (
    ExactChecksumStrategy,
    VersionPatternStrategy,
    BackupPatternStrategy,
    FuzzyNameSimilarityStrategy,
    SizeTimeClusterStrategy,
    ExactNameStrategy,
)


def build_strategies(config: Optional[DetectionConfig] = None) -> List[DuplicateStrategy]:
    """Instantiate the enabled strategies in declaration order."""
    config = config or DetectionConfig()
    enabled = set(config.enabled_strategies)
    return [cls(config) for cls in DEFAULT_STRATEGY_ORDER if cls.kind in enabled]
