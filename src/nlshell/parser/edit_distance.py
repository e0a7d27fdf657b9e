"""Levenshtein distance and normalized similarity."""

from __future__ import annotations

from collections.abc import Iterable

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(s1: str, s2: str) -> int:
    """Number of single-character insertions, deletions or substitutions."""
    return Levenshtein.distance(s1, s2)


def string_similarity(s1: str, s2: str) -> float:
    """1.0 for identical strings, 0.0 for completely different ones.

    Normalized by the longer string, ``1 - distance / max(len(s1), len(s2))``.
    """
    return Levenshtein.normalized_similarity(s1, s2)


def length_ratio(s1: str, s2: str) -> float:
    """Upper bound of ``string_similarity(s1, s2)``."""
    longer = max(len(s1), len(s2))
    if longer == 0:
        return 1.0
    return min(len(s1), len(s2)) / longer


def best_similarity(
    keyword: str,
    tokens: Iterable[str],
    threshold: float,
    prefilter: bool = True,
) -> float:
    """Best similarity between ``keyword`` and any of ``tokens``.

    With ``prefilter`` on, tokens whose length ratio is already below
    ``threshold`` are skipped without computing the edit distance. Their
    similarity cannot reach the threshold, so the answer to "is there a
    token at or above threshold, and how close is the best one" is unchanged.
    """
    best = 0.0
    for token in tokens:
        if prefilter and length_ratio(token, keyword) < threshold:
            continue
        similarity = string_similarity(token, keyword)
        if similarity > best:
            best = similarity
    return best
