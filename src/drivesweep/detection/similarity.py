"""
Filename similarity.

Similarity is the Levenshtein distance normalized by the longer string:

    sim(a, b) = 1 - levenshtein(a, b) / max(len(a), len(b))

so ``sim(x, x) == 1.0`` and every score lies in [0, 1]. Two empty strings
are considered identical.
"""

from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions or substitutions."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Normalized edit similarity between two strings, in [0, 1]."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest
