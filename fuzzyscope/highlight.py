"""Match-index decoding into highlight segments.

Turns a candidate's text plus the ascending match positions reported by a
scorer into alternating unmatched/matched runs. Contiguous positions merge
into one matched run, so a renderer emits one style switch per run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

UNMATCHED = "unmatched"
MATCHED = "matched"


@dataclass(frozen=True)
class Segment:
    """One run of candidate text sharing a highlight kind."""

    kind: str
    text: str

    @property
    def is_matched(self) -> bool:
        return self.kind == MATCHED


class InvalidMatchIndices(ValueError):
    """Raised when match indices are unordered, duplicated, or out of range."""

    def __init__(self, text: str, indices: Iterable[int], position: int, reason: str) -> None:
        self.text = text
        self.indices = tuple(indices)
        self.position = position
        self.reason = reason
        super().__init__(f"invalid match index {position!r} in {self.indices!r} for {text!r}: {reason}")


def validate_match_indices(text: str, indices: Iterable[int]) -> tuple[int, ...]:
    """Return ``indices`` as a tuple after checking order and bounds.

    Indices must be strictly ascending integers addressing positions of
    ``text``. Positions are code points, so an in-range index never splits a
    character.
    """
    checked = tuple(indices)
    text_len = len(text)
    previous = -1
    for position in checked:
        reason = ""
        if isinstance(position, bool) or not isinstance(position, int):
            reason = "not an integer"
        elif position < 0 or position >= text_len:
            reason = f"outside text of length {text_len}"
        elif position == previous:
            reason = "duplicated"
        elif position < previous:
            reason = "not ascending"
        if reason:
            logger.error("Invalid match index %r (%s) in %r for %r", position, reason, checked, text)
            raise InvalidMatchIndices(text, checked, position, reason)
        previous = position
    return checked


def highlight_segments(text: str, indices: Iterable[int]) -> list[Segment]:
    """Split ``text`` into unmatched/matched segments for ``indices``.

    The concatenated segment texts always equal ``text`` and no two adjacent
    segments share a kind. Raises :class:`InvalidMatchIndices` for bad input.
    """
    positions = validate_match_indices(text, indices)
    segments: list[Segment] = []
    cursor = 0
    pos = 0
    count = len(positions)
    while pos < count:
        start = positions[pos]
        if start > cursor:
            segments.append(Segment(UNMATCHED, text[cursor:start]))
        end = start + 1
        pos += 1
        while pos < count and positions[pos] == end:
            end += 1
            pos += 1
        segments.append(Segment(MATCHED, text[start:end]))
        cursor = end
    if cursor < len(text):
        segments.append(Segment(UNMATCHED, text[cursor:]))
    return segments


__all__ = [
    "MATCHED",
    "UNMATCHED",
    "InvalidMatchIndices",
    "Segment",
    "highlight_segments",
    "validate_match_indices",
]
