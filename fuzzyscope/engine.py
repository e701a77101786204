"""Fuzzy engine façade combining the match store and selection cursor.

This is the object a UI driver holds on to: feed it candidates and filter
edits, move the selection, then page through :meth:`FuzzyEngine.ranked_view`
and decode each row with :func:`fuzzyscope.highlight.highlight_segments`.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from .highlight import Segment, highlight_segments
from .scoring import Scorer, fuzzy_indices
from .selection import SelectionCursor
from .store import (
    PARALLEL_SCORING_MIN_CANDIDATES,
    CandidateLike,
    MatchStore,
    RankedEntry,
)


class FuzzyEngine:
    """Incremental type-to-narrow filter over a set of text candidates.

    After every mutating call returns, the selection addresses a live matched
    candidate or is cleared. Not safe for concurrent mutation.
    """

    def __init__(
        self,
        options: Iterable[CandidateLike] = (),
        *,
        scorer: Scorer = fuzzy_indices,
        max_workers: int = 1,
        parallel_min_candidates: int = PARALLEL_SCORING_MIN_CANDIDATES,
    ) -> None:
        self._store = MatchStore(
            scorer,
            max_workers=max_workers,
            parallel_min_candidates=parallel_min_candidates,
        )
        self._cursor = SelectionCursor()
        self.insert_many(options)

    @property
    def store(self) -> MatchStore:
        return self._store

    @property
    def filter_text(self) -> str:
        return self._store.filter_text

    @property
    def matched_count(self) -> int:
        return self._store.matched_count

    @property
    def selected_index(self) -> int | None:
        return self._cursor.selected

    def __len__(self) -> int:
        return len(self._store)

    def _reconcile(self) -> None:
        # Ranks shift on every mutation, so an old index would point elsewhere.
        self._cursor.reset(self._store.matched_count)

    def insert(self, candidate: CandidateLike) -> None:
        """Add one candidate (a string, or a ``(key, text)`` pair)."""
        self.insert_many((candidate,))

    def insert_many(self, candidates: Iterable[CandidateLike]) -> None:
        """Add candidates, scoring only the new ones against the current filter."""
        try:
            changed = self._store.insert_many(candidates)
        except Exception:
            # A scorer failure can leave new slots ranked; keep the cursor in range.
            self._reconcile()
            raise
        if changed:
            self._reconcile()

    def remove(self, key: Hashable) -> None:
        self.remove_many((key,))

    def remove_many(self, keys: Iterable[Hashable]) -> None:
        """Remove candidates by key; unknown keys are ignored."""
        if self._store.remove_many(keys):
            self._reconcile()

    def replace_all(self, candidates: Iterable[CandidateLike]) -> None:
        """Swap the whole candidate set."""
        try:
            self._store.replace_all(candidates)
        finally:
            self._reconcile()

    def set_filter(self, text: str) -> None:
        """Apply a new filter term, rescoring every candidate."""
        try:
            self._store.set_filter(text)
        finally:
            self._reconcile()

    def clear_filter(self) -> None:
        self.set_filter("")

    def select_next(self) -> bool:
        return self._cursor.select_next(self._store.matched_count)

    def select_prev(self) -> bool:
        return self._cursor.select_prev(self._store.matched_count)

    def current_selection(self) -> RankedEntry | None:
        """Return the selected matched entry, or ``None`` when unselected."""
        if self._cursor.selected is None:
            return None
        return self._store.ranked_entry(self._cursor.selected)

    def ranked_view(self, offset: int = 0, limit: int | None = None) -> list[RankedEntry]:
        """Return up to ``limit`` matched entries starting at rank ``offset``."""
        return self._store.ranked_view(offset, limit)

    @staticmethod
    def highlight_segments(text: str, indices: Iterable[int]) -> list[Segment]:
        return highlight_segments(text, indices)


__all__ = ["FuzzyEngine"]
