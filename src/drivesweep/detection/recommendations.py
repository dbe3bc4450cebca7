"""
Recommendation generation.

Only identical-content and version-pattern groups are turned into
recommendations. Groups of the other kinds still appear in the group list
for review, but produce no recommendation.
"""

from typing import List, Sequence

from drivesweep.core.models import DuplicateGroup, DuplicateKind, Priority, Recommendation, RiskLevel


def _groups_of(groups: Sequence[DuplicateGroup], kind: DuplicateKind) -> List[DuplicateGroup]:
    return [g for g in groups if g.kind == kind]


def generate_recommendations(groups: Sequence[DuplicateGroup]) -> List[Recommendation]:
    """Summarize resolved duplicate groups into prioritized recommendations.

    Args:
        groups: Resolved duplicate groups

    Returns:
        Recommendations sorted by priority, then potential savings, descending
    """
    recommendations = []

    identical = _groups_of(groups, DuplicateKind.IDENTICAL_CHECKSUM)
    if identical:
        recommendations.append(
            Recommendation(
                priority=Priority.HIGH,
                action=f"Delete {len(identical)} groups of identical files",
                description=(
                    "These files have identical content (same checksum) and can be safely removed"
                ),
                potential_savings=sum(g.wasted_bytes for g in identical),
                risk_level=RiskLevel.SAFE,
                auto_executable=True,
                group_count=len(identical),
            )
        )

    versioned = _groups_of(groups, DuplicateKind.VERSION_PATTERN)
    if versioned:
        recommendations.append(
            Recommendation(
                priority=Priority.MEDIUM,
                action=f"Clean up {len(versioned)} versioned file groups",
                description="Keep only the latest version of these files",
                potential_savings=sum(g.wasted_bytes for g in versioned),
                risk_level=RiskLevel.MODERATE,
                auto_executable=False,
                group_count=len(versioned),
            )
        )

    return sorted(recommendations, key=lambda r: (-r.priority.rank, -r.potential_savings))
