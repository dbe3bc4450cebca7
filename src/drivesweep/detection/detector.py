"""
Main duplicate detector for drivesweep.

This module provides the DuplicateDetector class, which runs every enabled
strategy over one immutable snapshot, resolves overlaps between their
candidate groups, and summarizes the result.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence, Set

from drivesweep.core.config import DetectionConfig
from drivesweep.core.models import (
    DetectionReport,
    DuplicateGroup,
    FileRecord,
    Recommendation,
)
from drivesweep.detection.recommendations import generate_recommendations
from drivesweep.detection.strategies import DuplicateStrategy, build_strategies
from drivesweep.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)


def rank_and_filter_groups(groups: Sequence[DuplicateGroup]) -> List[DuplicateGroup]:
    """Rank candidate groups and make them disjoint.

    Groups are ordered by confidence, then wasted bytes, both descending.
    Walking that order, each group keeps only files not claimed by an
    earlier group. A group left with two or more files claims all of its
    original files and is kept with ``wasted_bytes`` recomputed as the size
    of every remaining file but the first; otherwise it is dropped whole.
    Kept groups are re-sorted by the same key, so the output stays ordered
    after wasted bytes are recomputed.

    Input groups are not modified.

    Args:
        groups: Candidate groups in strategy declaration order

    Returns:
        Disjoint groups in ranked order
    """
    ranked = sorted(groups, key=lambda g: (-g.confidence, -g.wasted_bytes))

    claimed: Set[str] = set()
    resolved = []
    dropped = 0

    for group in ranked:
        remaining = [f for f in group.members if f.id not in claimed]
        if len(remaining) < 2:
            dropped += 1
            continue

        claimed.update(f.id for f in group.members)
        wasted = sum(f.size for f in remaining) - remaining[0].size
        resolved.append(group.model_copy(update={"members": remaining, "wasted_bytes": wasted}))

    # Recomputed wasted bytes can undercut a later group of equal confidence.
    resolved.sort(key=lambda g: (-g.confidence, -g.wasted_bytes))

    logger.info(f"Overlap resolution kept {len(resolved)} group(s), dropped {dropped}")
    return resolved


class DuplicateDetector:
    """Duplicate detection engine for one analysis run.

    Construct one detector per snapshot and discard it afterwards; it holds
    no state beyond the snapshot it was given.

    Example:
        >>> detector = DuplicateDetector(files)
        >>> report = detector.analyze()
        >>> for group in report.groups:
        ...     print(group.kind.value, group.member_ids)
    """

    def __init__(
        self,
        files: Sequence[FileRecord],
        config: Optional[DetectionConfig] = None,
        strategies: Optional[Sequence[DuplicateStrategy]] = None,
    ):
        """Initialize detector over a snapshot.

        Args:
            files: File records to analyze, in caller order
            config: Detection configuration (defaults if None)
            strategies: Explicit strategy instances, run in the given order.
                Defaults to the enabled strategies in declaration order.
        """
        self.files = tuple(files)
        self.config = config or DetectionConfig()
        self.strategies = (
            list(strategies) if strategies is not None else build_strategies(self.config)
        )

    def collect_candidates(self) -> List[DuplicateGroup]:
        """Run every strategy and concatenate their candidate groups in order."""
        candidates: List[DuplicateGroup] = []
        for strategy in self.strategies:
            found = strategy.detect(self.files)
            logger.debug(f"{type(strategy).__name__}: {len(found)} candidate group(s)")
            candidates.extend(found)
        return candidates

    def detect_duplicates(self) -> List[DuplicateGroup]:
        """Find duplicate groups.

        Returns:
            Disjoint groups sorted by confidence then wasted bytes, descending.
            Empty if no duplicates were found.
        """
        if not self.files:
            return []

        with PerformanceLogger(
            f"Duplicate detection over {len(self.files)} files", logger=logger, level="DEBUG"
        ):
            candidates = self.collect_candidates()
            groups = rank_and_filter_groups(candidates)

        return groups

    def recommend(self, groups: Optional[List[DuplicateGroup]] = None) -> List[Recommendation]:
        """Generate recommendations, detecting groups first if none are given."""
        if groups is None:
            groups = self.detect_duplicates()
        return generate_recommendations(groups)

    def analyze(self) -> DetectionReport:
        """Detect duplicates and build a full report."""
        groups = self.detect_duplicates()
        return DetectionReport(
            groups=groups,
            recommendations=generate_recommendations(groups),
            file_count=len(self.files),
            statistics=self.get_statistics(groups),
        )

    def get_statistics(self, groups: List[DuplicateGroup]) -> Dict[str, Any]:
        """Get detection statistics.

        Args:
            groups: Resolved duplicate groups

        Returns:
            Dictionary with statistics about the detection results

        Example:
            >>> groups = detector.detect_duplicates()
            >>> stats = detector.get_statistics(groups)
            >>> print(f"Duplicate rate: {stats['duplicate_rate']:.1%}")
        """
        total_files = len(self.files)
        files_in_groups = sum(g.size for g in groups)
        redundant_files = sum(len(g.redundant) for g in groups)

        groups_by_kind: Counter = Counter()
        wasted_by_kind: Counter = Counter()
        for group in groups:
            groups_by_kind[group.kind.value] += 1
            wasted_by_kind[group.kind.value] += group.wasted_bytes

        return {
            "total_files": total_files,
            "duplicate_groups": len(groups),
            "files_in_groups": files_in_groups,
            "redundant_files": redundant_files,
            "duplicate_rate": redundant_files / total_files if total_files > 0 else 0.0,
            "wasted_bytes": sum(g.wasted_bytes for g in groups),
            "auto_resolvable_groups": sum(1 for g in groups if g.can_auto_resolve),
            "groups_by_kind": dict(groups_by_kind),
            "wasted_bytes_by_kind": dict(wasted_by_kind),
            "strategies": [s.kind.value for s in self.strategies],
        }
