"""Incremental fuzzy filtering for type-to-narrow pickers.

``FuzzyEngine`` keeps candidates ranked against the current filter term and
tracks a selection over the matches; ``highlight_segments`` decodes a match's
positions into runs a renderer can style.
"""

import logging

from .engine import FuzzyEngine
from .highlight import InvalidMatchIndices, Segment, highlight_segments
from .scoring import Scorer, fuzzy_indices, substring_scorer
from .store import NO_MATCH, UNSCORED, Candidate, MatchResult, MatchStore, RankedEntry

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Candidate",
    "FuzzyEngine",
    "InvalidMatchIndices",
    "MatchResult",
    "MatchStore",
    "NO_MATCH",
    "RankedEntry",
    "Scorer",
    "Segment",
    "UNSCORED",
    "fuzzy_indices",
    "highlight_segments",
    "substring_scorer",
]
