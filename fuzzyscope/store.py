"""Insertion-ordered candidate store with cached match results.

Each candidate slot caches the result of scoring its text against the
current filter. Adding candidates only scores the new (unscored) slots;
changing the filter rescores everything. After every scoring pass the
ranked order is rebuilt: matched slots by descending score with ties in
insertion order, then every unmatched slot.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import NamedTuple, Union

from .scoring import Scorer, fuzzy_indices

logger = logging.getLogger(__name__)

PARALLEL_SCORING_MIN_CANDIDATES = 20_000
SCORE_POOL_MAX_WORKERS = 8

UNSCORED_KIND = "unscored"
NO_MATCH_KIND = "no_match"
MATCHED_KIND = "matched"


class Candidate(NamedTuple):
    """Searchable item: application key plus displayed text."""

    key: Hashable
    text: str


CandidateLike = Union[Candidate, tuple, str]


@dataclass(frozen=True)
class MatchResult:
    """Cached scoring state of one candidate against the current filter."""

    kind: str
    score: int = 0
    indices: tuple[int, ...] = ()

    @classmethod
    def matched(cls, score: int, indices: Iterable[int]) -> MatchResult:
        return cls(kind=MATCHED_KIND, score=int(score), indices=tuple(indices))

    @property
    def is_matched(self) -> bool:
        return self.kind == MATCHED_KIND

    @property
    def is_scored(self) -> bool:
        return self.kind != UNSCORED_KIND


UNSCORED = MatchResult(kind=UNSCORED_KIND)
NO_MATCH = MatchResult(kind=NO_MATCH_KIND)


@dataclass(frozen=True)
class RankedEntry:
    """Matched candidate as exposed to drivers and renderers."""

    key: Hashable
    text: str
    score: int
    indices: tuple[int, ...]


@dataclass
class _Slot:
    key: Hashable
    text: str
    seq: int
    result: MatchResult = UNSCORED


def coerce_candidate(candidate: CandidateLike) -> Candidate:
    """Normalize a bare string or ``(key, text)`` pair into a :class:`Candidate`."""
    if isinstance(candidate, str):
        return Candidate(candidate, candidate)
    key, text = candidate
    if not isinstance(text, str):
        raise TypeError(f"candidate text must be str, got {type(text).__name__}")
    hash(key)
    return Candidate(key, text)


class MatchStore:
    """Unique-keyed candidate collection kept in rank order."""

    def __init__(
        self,
        scorer: Scorer = fuzzy_indices,
        *,
        max_workers: int = 1,
        parallel_min_candidates: int = PARALLEL_SCORING_MIN_CANDIDATES,
    ) -> None:
        self._scorer = scorer
        self._max_workers = max(1, min(SCORE_POOL_MAX_WORKERS, int(max_workers)))
        self._parallel_min_candidates = max(1, int(parallel_min_candidates))
        self._filter = ""
        self._slots: dict[Hashable, _Slot] = {}
        self._ranked: list[_Slot] = []
        self._matched_count = 0
        self._next_seq = 0

    # accessors
    @property
    def filter_text(self) -> str:
        return self._filter

    @property
    def matched_count(self) -> int:
        return self._matched_count

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def result_for(self, key: Hashable) -> MatchResult | None:
        """Return the cached result for ``key`` or ``None`` when absent."""
        slot = self._slots.get(key)
        return slot.result if slot is not None else None

    def entries(self) -> Iterator[tuple[Hashable, str, MatchResult]]:
        """Iterate every slot in rank order, unmatched slots last."""
        for slot in self._ranked:
            yield slot.key, slot.text, slot.result

    def ranked_entry(self, rank: int) -> RankedEntry | None:
        """Return the matched entry at ``rank`` or ``None`` when out of range."""
        if not 0 <= rank < self._matched_count:
            return None
        return self._to_ranked(self._ranked[rank])

    def ranked_view(self, offset: int = 0, limit: int | None = None) -> list[RankedEntry]:
        """Return a window of matched entries in rank order."""
        start = max(0, offset)
        if limit is None:
            end = self._matched_count
        else:
            end = min(self._matched_count, start + max(0, limit))
        return [self._to_ranked(slot) for slot in self._ranked[start:end]]

    # mutations
    def insert(self, candidate: CandidateLike) -> bool:
        return self.insert_many((candidate,))

    def insert_many(self, candidates: Iterable[CandidateLike]) -> bool:
        """Add candidates, score only unscored slots, and re-rank.

        Re-inserting a known key keeps its cached result; if its text changed
        the slot takes the new text and is rescored. The whole batch is
        validated first, so a malformed candidate leaves the store untouched.
        Returns whether the store changed.
        """
        batch = [coerce_candidate(candidate) for candidate in candidates]
        changed = False
        for key, text in batch:
            slot = self._slots.get(key)
            if slot is None:
                self._slots[key] = _Slot(key=key, text=text, seq=self._next_seq)
                self._next_seq += 1
                changed = True
            elif slot.text != text:
                slot.text = text
                slot.result = UNSCORED
                changed = True
        if changed:
            try:
                self._rescore(full=False)
            finally:
                self._sort()
        return changed

    def remove(self, key: Hashable) -> bool:
        return self.remove_many((key,))

    def remove_many(self, keys: Iterable[Hashable]) -> bool:
        """Delete slots for ``keys``; survivors keep their relative rank."""
        removed = 0
        for key in keys:
            if self._slots.pop(key, None) is not None:
                removed += 1
        if not removed:
            return False
        self._ranked = [slot for slot in self._ranked if self._slots.get(slot.key) is slot]
        self._matched_count = sum(1 for slot in self._ranked if slot.result.is_matched)
        logger.debug("Removed %d candidates, %d remain", removed, len(self._slots))
        return True

    def replace_all(self, candidates: Iterable[CandidateLike]) -> bool:
        """Drop every slot and insert ``candidates`` as a fresh set."""
        batch = [coerce_candidate(candidate) for candidate in candidates]
        self._slots.clear()
        self._ranked = []
        self._matched_count = 0
        self._next_seq = 0
        self.insert_many(batch)
        return True

    def set_filter(self, term: str) -> None:
        """Replace the filter term and rescore every slot."""
        self._filter = term
        try:
            self._rescore(full=True)
        finally:
            # A failing scorer still leaves matched slots ahead of the rest.
            self._sort()

    def clear_filter(self) -> None:
        self.set_filter("")

    # scoring
    def _evaluate(self, text: str, query: str) -> MatchResult:
        outcome = self._scorer(text, query)
        if outcome is None:
            return NO_MATCH
        score, indices = outcome
        return MatchResult.matched(score, indices)

    def _score_chunk(self, slots: list[_Slot], query: str) -> None:
        for slot in slots:
            slot.result = self._evaluate(slot.text, query)

    def _score_parallel(self, slots: list[_Slot], query: str) -> None:
        chunk_size = -(-len(slots) // self._max_workers)
        chunks = [slots[idx : idx + chunk_size] for idx in range(0, len(slots), chunk_size)]
        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="fuzzyscope-score") as executor:
            futures = [executor.submit(self._score_chunk, chunk, query) for chunk in chunks]
            for future in futures:
                future.result()

    def _rescore(self, *, full: bool) -> int:
        if full:
            pending = list(self._slots.values())
        else:
            pending = [slot for slot in self._slots.values() if not slot.result.is_scored]
        if not pending:
            return 0

        parallel = self._max_workers > 1 and len(pending) >= self._parallel_min_candidates
        if parallel:
            self._score_parallel(pending, self._filter)
        else:
            self._score_chunk(pending, self._filter)
        logger.debug(
            "%s scoring pass: %d of %d candidates against %r (parallel=%s)",
            "Full" if full else "Incremental",
            len(pending),
            len(self._slots),
            self._filter,
            parallel,
        )
        return len(pending)

    def _sort(self) -> None:
        # Slots iterate in insertion order, so the unmatched tail stays stable too.
        matched: list[_Slot] = []
        unmatched: list[_Slot] = []
        for slot in self._slots.values():
            if slot.result.is_matched:
                matched.append(slot)
            else:
                unmatched.append(slot)
        matched.sort(key=lambda slot: (-slot.result.score, slot.seq))
        self._ranked = matched + unmatched
        self._matched_count = len(matched)

    @staticmethod
    def _to_ranked(slot: _Slot) -> RankedEntry:
        return RankedEntry(
            key=slot.key,
            text=slot.text,
            score=slot.result.score,
            indices=slot.result.indices,
        )


__all__ = [
    "Candidate",
    "CandidateLike",
    "MatchResult",
    "MatchStore",
    "NO_MATCH",
    "PARALLEL_SCORING_MIN_CANDIDATES",
    "RankedEntry",
    "UNSCORED",
    "coerce_candidate",
]
