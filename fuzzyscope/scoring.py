"""Scorer contract plus the default fuzzy and substring scorers.

A scorer maps ``(candidate_text, filter_text)`` to ``(score, indices)`` or
``None`` when the candidate does not match. Indices are strictly ascending
positions into ``candidate_text`` (code points), so they can be handed to
:func:`fuzzyscope.highlight.highlight_segments` unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

Scorer = Callable[[str, str], Optional[tuple[int, list[int]]]]

BOUNDARY_CHARS = "/_- ."


def _fold_chars(text: str) -> list[str]:
    # Folding per character keeps positions aligned with the original text
    # even when casefold() would change the string length (e.g. "ß" -> "ss").
    return [ch.casefold() for ch in text]


def _find_folded(folded: list[str], needle: str, start: int) -> int:
    for idx in range(start, len(folded)):
        if folded[idx] == needle:
            return idx
    return -1


def fuzzy_indices(candidate: str, query: str) -> tuple[int, list[int]] | None:
    """Score ``candidate`` as a case-insensitive subsequence match of ``query``.

    Contiguous runs earn a growing bonus, gaps are penalized, and characters
    right after a path/word boundary score extra. An empty query matches
    everything with score ``0`` and no indices.
    """
    if not query:
        return 0, []
    folded = _fold_chars(candidate)

    score = 0
    prev_idx = -1
    run = 0
    indices: list[int] = []
    for needle in _fold_chars(query):
        idx = _find_folded(folded, needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate[idx - 1] in BOUNDARY_CHARS:
            score += 35
        indices.append(idx)
        prev_idx = idx

    score -= len(candidate) // 5
    return score, indices


def substring_scorer(candidate: str, query: str) -> tuple[int, list[int]] | None:
    """Accept only contiguous case-insensitive matches, earliest and shortest first."""
    if not query:
        return 0, []
    folded = _fold_chars(candidate)
    needles = _fold_chars(query)
    width = len(needles)
    for start in range(len(folded) - width + 1):
        if folded[start : start + width] == needles:
            score = 10_000 - (start * 50) - len(candidate)
            return score, list(range(start, start + width))
    return None


__all__ = [
    "BOUNDARY_CHARS",
    "Scorer",
    "fuzzy_indices",
    "substring_scorer",
]
