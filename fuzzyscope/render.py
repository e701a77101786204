"""ANSI rendering of the ranked view for terminal pickers.

Rows are painted per highlight segment and clipped to the viewport width.
Only the visible window of the ranked view is materialized per frame.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .ansi import clip_ansi_line, display_width, selected_with_ansi
from .engine import FuzzyEngine
from .highlight import InvalidMatchIndices, highlight_segments
from .store import RankedEntry
from .styles import DEFAULT_STYLE, FuzzyListStyle

logger = logging.getLogger(__name__)

PROMPT_PREFIX = "> "
PROMPT_PLACEHOLDER = "type to filter"
NO_MATCHES_MESSAGE = " no matches"


def _paint(sgr: str, text: str, reset: str) -> str:
    if not sgr or not text:
        return text
    return f"{sgr}{text}{reset}"


def styled_text(text: str, indices: Iterable[int], style: FuzzyListStyle = DEFAULT_STYLE) -> str:
    """Paint matched and unmatched runs of ``text`` with ``style``.

    Invalid indices only degrade this one row to unhighlighted text.
    """
    try:
        segments = highlight_segments(text, indices)
    except InvalidMatchIndices as exc:
        logger.warning("Rendering row without highlights: %s", exc)
        return _paint(style.unmatched, text, style.reset)
    return "".join(
        _paint(style.matched if segment.is_matched else style.unmatched, segment.text, style.reset)
        for segment in segments
    )


def styled_row(entry: RankedEntry, style: FuzzyListStyle = DEFAULT_STYLE, selected: bool = False) -> str:
    """Render one list row with the highlight symbol gutter."""
    if selected:
        gutter = style.highlight_symbol
    else:
        gutter = " " * display_width(style.highlight_symbol)
    row = gutter + styled_text(entry.text, entry.indices, style)
    if selected:
        return selected_with_ansi(row, style.selection, style.reset)
    return row


def viewport_start(selected: int | None, current_start: int, rows: int, total: int) -> int:
    """Return the first visible rank keeping ``selected`` inside ``rows`` rows."""
    rows = max(1, rows)
    start = current_start
    if selected is not None:
        if selected < start:
            start = selected
        elif selected >= start + rows:
            start = selected - rows + 1
    max_start = max(0, total - rows)
    return max(0, min(start, max_start))


def title_line(engine: FuzzyEngine, style: FuzzyListStyle = DEFAULT_STYLE, *, loading: bool = False) -> str:
    title = f"[Loading] {style.title}" if loading else style.title
    return _paint(style.border, f"{title} {engine.matched_count}/{len(engine)}", style.reset)


def prompt_line(query: str, style: FuzzyListStyle = DEFAULT_STYLE) -> str:
    if query:
        return _paint(style.prompt, f"{PROMPT_PREFIX}{query}", style.reset)
    return _paint(style.prompt_placeholder, f"{PROMPT_PREFIX}{PROMPT_PLACEHOLDER}", style.reset)


def render_fuzzy_list(
    engine: FuzzyEngine,
    rows: int,
    width: int,
    style: FuzzyListStyle = DEFAULT_STYLE,
    *,
    list_start: int = 0,
    loading: bool = False,
) -> tuple[list[str], int]:
    """Render the title plus up to ``rows - 1`` ranked entries.

    Returns the rendered lines and the list start actually used, which the
    caller feeds back in on the next frame so scrolling stays stable.
    """
    if rows <= 0:
        return [], list_start
    list_rows = rows - 1
    selected = engine.selected_index
    start = viewport_start(selected, list_start, list_rows, engine.matched_count)

    lines = [clip_ansi_line(title_line(engine, style, loading=loading), width)]
    if list_rows <= 0:
        return lines, start
    if engine.matched_count == 0:
        lines.append(clip_ansi_line(_paint(style.message, NO_MATCHES_MESSAGE, style.reset), width))
        return lines, start
    for offset, entry in enumerate(engine.ranked_view(start, list_rows)):
        row = styled_row(entry, style, selected=(start + offset) == selected)
        lines.append(clip_ansi_line(row, width))
    return lines, start


def render_plain_results(
    engine: FuzzyEngine,
    style: FuzzyListStyle = DEFAULT_STYLE,
    limit: int | None = None,
) -> list[str]:
    """Render matched entries one per line for non-interactive output."""
    return [styled_text(entry.text, entry.indices, style) for entry in engine.ranked_view(0, limit)]


__all__ = [
    "prompt_line",
    "render_fuzzy_list",
    "render_plain_results",
    "styled_row",
    "styled_text",
    "title_line",
    "viewport_start",
]
