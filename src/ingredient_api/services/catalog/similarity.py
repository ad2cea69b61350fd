"""Edit-distance string similarity."""

from rapidfuzz.distance import Levenshtein


def similarity(a: str, b: str) -> float:
    """1 - levenshtein(a, b) / max(len(a), len(b)); 1.0 for two empty strings."""
    return Levenshtein.normalized_similarity(a, b)
