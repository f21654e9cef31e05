"""Levenshtein edit distance."""

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Number of single-character inserts, deletes and substitutions turning a into b.

    Inputs are compared as given; callers lowercase and trim first.
    """
    return Levenshtein.distance(a, b)
