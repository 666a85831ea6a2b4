"""String similarity helpers for category matching."""

from rapidfuzz.distance import Levenshtein


def normalize(text: str) -> str:
    """Lower-case and trim text for comparisons."""
    return text.strip().lower()


def edit_similarity(a: str, b: str) -> float:
    """Return ``1 - levenshtein(a, b) / max(len(a), len(b))``.

    Identical strings score 1.0; either string empty scores 0.0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    distance = Levenshtein.distance(a, b)
    return 1.0 - distance / max(len(a), len(b))
