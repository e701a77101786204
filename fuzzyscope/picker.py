"""Interactive fzf-style picker driving a :class:`FuzzyEngine`.

Candidates stream in from a text stream on a background reader thread and
are handed to the engine from the event loop only, so the engine keeps a
single writer. Typing narrows the list, Up/Down move the selection, Enter
accepts, and Esc cancels.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from queue import Empty, Queue
from typing import TextIO

from .ansi import clip_ansi_line
from .engine import FuzzyEngine
from .keys import read_key
from .render import prompt_line, render_fuzzy_list
from .styles import DEFAULT_STYLE, FuzzyListStyle
from .terminal import TerminalController

logger = logging.getLogger(__name__)

ACCEPT = "accept"
CANCEL = "cancel"
FEED_BATCH_LINES = 5_000
TICK_MS = 100

_PREV_KEYS = frozenset({"UP", "CTRL_P", "CTRL_K"})
_NEXT_KEYS = frozenset({"DOWN", "CTRL_N", "CTRL_J", "TAB"})
_CANCEL_KEYS = frozenset({"ESC", "CTRL_C", "CTRL_G"})


class PickerCancelled(Exception):
    """Raised by :func:`run_picker` when the user dismisses the picker."""


def _drop_last_word(query: str) -> str:
    trimmed = query.rstrip()
    cut = trimmed.rfind(" ")
    return trimmed[: cut + 1] if cut >= 0 else ""


class LineFeeder:
    """Background reader turning a text stream into queued candidate lines."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._queue: Queue[str | None] = Queue()
        self._exhausted = False
        self._thread: threading.Thread | None = None

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def _worker(self) -> None:
        try:
            for line in self._stream:
                self._queue.put(line.rstrip("\r\n"))
        except (OSError, ValueError):
            logger.exception("Stopped reading candidates")
        finally:
            self._queue.put(None)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._worker,
            name="fuzzyscope-line-feeder",
            daemon=True,
        )
        self._thread.start()

    def drain(self, max_lines: int | None = None) -> tuple[list[str], bool]:
        """Return queued lines (at most ``max_lines``) and whether input ended."""
        lines: list[str] = []
        while max_lines is None or len(lines) < max_lines:
            try:
                item = self._queue.get_nowait()
            except Empty:
                break
            if item is None:
                self._exhausted = True
                break
            lines.append(item)
        return lines, self._exhausted


class PickerSession:
    """Query, scroll, and loading state of one picker run."""

    def __init__(self, engine: FuzzyEngine, style: FuzzyListStyle = DEFAULT_STYLE) -> None:
        self.engine = engine
        self.style = style
        self.query = ""
        self.list_start = 0
        self.loading = True
        self.dirty = True
        self._next_line = len(engine)

    def feed_lines(self, lines: Iterable[str]) -> None:
        """Insert lines keyed by arrival order so duplicate text is kept."""
        batch: list[tuple[int, str]] = []
        for line in lines:
            batch.append((self._next_line, line))
            self._next_line += 1
        if not batch:
            return
        self.engine.insert_many(batch)
        self.dirty = True

    def finish_loading(self) -> None:
        if self.loading:
            self.loading = False
            self.dirty = True

    def set_query(self, query: str) -> None:
        if query == self.query:
            return
        self.query = query
        self.engine.set_filter(query)
        self.dirty = True

    def _move(self, step: Callable[[], bool], times: int = 1) -> None:
        for _ in range(max(1, times)):
            if step():
                self.dirty = True

    def handle_key(self, key: str, page_rows: int = 10) -> str | None:
        """Apply one key token; returns :data:`ACCEPT`, :data:`CANCEL` or ``None``."""
        if key == "ENTER":
            return ACCEPT
        if key in _CANCEL_KEYS:
            return CANCEL
        if key in _PREV_KEYS:
            self._move(self.engine.select_prev)
        elif key in _NEXT_KEYS:
            self._move(self.engine.select_next)
        elif key == "PAGE_UP":
            self._move(self.engine.select_prev, page_rows)
        elif key == "PAGE_DOWN":
            self._move(self.engine.select_next, page_rows)
        elif key == "BACKSPACE":
            self.set_query(self.query[:-1])
        elif key == "CTRL_U":
            self.set_query("")
        elif key == "CTRL_W":
            self.set_query(_drop_last_word(self.query))
        elif len(key) == 1 and key.isprintable():
            self.set_query(self.query + key)
        return None

    def selection_text(self) -> str | None:
        selected = self.engine.current_selection()
        return selected.text if selected is not None else None

    def render(self, width: int, rows: int) -> list[str]:
        """Render prompt row plus the list view for a ``width`` x ``rows`` screen."""
        lines = [clip_ansi_line(prompt_line(self.query, self.style), width)]
        list_lines, self.list_start = render_fuzzy_list(
            self.engine,
            rows - 1,
            width,
            self.style,
            list_start=self.list_start,
            loading=self.loading,
        )
        return lines + list_lines


def run_picker(
    stream: TextIO,
    engine: FuzzyEngine,
    style: FuzzyListStyle = DEFAULT_STYLE,
    *,
    query: str = "",
    terminal_factory: Callable[[], object] = TerminalController.open_tty,
) -> str | None:
    """Run the interactive picker.

    Returns the accepted text, or ``None`` when Enter is pressed with nothing
    selectable. Raises :class:`PickerCancelled` when the user cancels.
    """
    feeder = LineFeeder(stream)
    feeder.start()
    session = PickerSession(engine, style)
    session.set_query(query)
    last_size: tuple[int, int] | None = None

    with terminal_factory() as terminal, terminal.raw_mode():
        while True:
            lines, exhausted = feeder.drain(max_lines=FEED_BATCH_LINES)
            session.feed_lines(lines)
            if exhausted:
                session.finish_loading()

            size = terminal.size()
            if size != last_size:
                last_size = size
                session.dirty = True
            width, rows = size
            if session.dirty:
                terminal.draw(session.render(width, rows))
                session.dirty = False

            more_pending = len(lines) >= FEED_BATCH_LINES
            key = read_key(terminal.tty_fd, timeout_ms=0 if more_pending else TICK_MS)
            if not key:
                continue
            action = session.handle_key(key, page_rows=max(1, rows - 2))
            if action == ACCEPT:
                logger.debug("Accepted selection at rank %s", engine.selected_index)
                return session.selection_text()
            if action == CANCEL:
                raise PickerCancelled


__all__ = [
    "ACCEPT",
    "CANCEL",
    "LineFeeder",
    "PickerCancelled",
    "PickerSession",
    "run_picker",
]
