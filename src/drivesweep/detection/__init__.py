"""
Duplicate detection for drivesweep.

This package identifies likely duplicate files in a drive snapshot using
six independent heuristics, resolves overlaps between them, and produces
prioritized recommendations.

Main classes:
    - DuplicateDetector: Runs the strategies and resolves overlaps
    - DuplicateStrategy: Base class for the heuristics

Example:
    >>> from drivesweep.detection import DuplicateDetector
    >>>
    >>> detector = DuplicateDetector(files)
    >>> groups = detector.detect_duplicates()
    >>> recommendations = detector.recommend(groups)
"""

from drivesweep.detection.detector import DuplicateDetector, rank_and_filter_groups
from drivesweep.detection.recommendations import generate_recommendations
from drivesweep.detection.similarity import levenshtein, similarity
from drivesweep.detection.strategies import (
    DEFAULT_STRATEGY_ORDER,
    BackupPatternStrategy,
    DuplicateStrategy,
    ExactChecksumStrategy,
    ExactNameStrategy,
    FuzzyNameSimilarityStrategy,
    SizeTimeClusterStrategy,
    VersionPatternStrategy,
    build_strategies,
)

__all__ = [
    "DuplicateDetector",
    "rank_and_filter_groups",
    "generate_recommendations",
    "similarity",
    "levenshtein",
    "DuplicateStrategy",
    "ExactChecksumStrategy",
    "VersionPatternStrategy",
    "BackupPatternStrategy",
    "FuzzyNameSimilarityStrategy",
    "SizeTimeClusterStrategy",
    "ExactNameStrategy",
    "DEFAULT_STRATEGY_ORDER",
    "build_strategies",
]
