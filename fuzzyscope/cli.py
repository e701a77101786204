"""Command-line front door for fuzzyscope.

Reads candidate lines from stdin (or ``--input``), then either prints the
ranked matches for ``--filter`` or opens the interactive picker on the
controlling terminal and prints the accepted line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from . import config
from .engine import FuzzyEngine
from .picker import PickerCancelled, run_picker
from .render import render_plain_results
from .scoring import Scorer, fuzzy_indices, substring_scorer
from .store import PARALLEL_SCORING_MIN_CANDIDATES
from .styles import (
    FuzzyListStyle,
    available_style_names,
    normalize_style_name,
    resolve_style,
    with_title,
)

EXIT_NO_MATCH = 1
EXIT_CANCELLED = 130
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def configure_logging(log_file: Path | None, verbose: bool = False) -> None:
    """Send package logs to ``log_file``; stderr stays clean for the TUI."""
    if log_file is None:
        return
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"Cannot open log file {log_file}: {exc.strerror or exc}") from exc
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("fuzzyscope")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fuzzyscope",
        description="Fuzzy-select one line from stdin, or print lines ranked by a filter.",
    )
    parser.add_argument("--filter", metavar="QUERY", default=None, help="Print ranked matches for QUERY and exit.")
    parser.add_argument("--input", metavar="PATH", default=None, help="Read candidates from PATH instead of stdin.")
    parser.add_argument("--query", metavar="QUERY", default="", help="Start the picker with QUERY typed in.")
    parser.add_argument(
        "--select-1",
        action="store_true",
        help="Print the only match without opening the picker; exit 1 when nothing matches.",
    )
    parser.add_argument("--title", default=None, help="Title shown above the picker list.")
    parser.add_argument("--exact", action="store_true", help="Match contiguous substrings only.")
    parser.add_argument("--limit", type=_positive_int, default=None, help="Maximum number of results to print.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"List style name ({', '.join(available_style_names())}).",
    )
    parser.add_argument("--save-theme", action="store_true", help="Remember --theme as the default.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--workers", type=_positive_int, default=None, help="Threads used for scoring large inputs.")
    parser.add_argument("--log-file", metavar="PATH", type=Path, default=None, help="Write logs to PATH.")
    parser.add_argument("--verbose", action="store_true", help="Log scoring passes at debug level.")
    return parser


def _open_input(path: str | None) -> TextIO:
    if path is None:
        return sys.stdin
    try:
        return open(path, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SystemExit(f"Cannot read candidates from {path}: {exc.strerror or exc}") from exc


def build_engine(scorer: Scorer, workers: int | None) -> FuzzyEngine:
    """Create an engine using CLI values with config fallbacks."""
    return FuzzyEngine(
        scorer=scorer,
        max_workers=workers or config.load_score_workers(),
        parallel_min_candidates=config.load_parallel_min_candidates() or PARALLEL_SCORING_MIN_CANDIDATES,
    )


def load_candidates(stream: TextIO, engine: FuzzyEngine) -> None:
    """Insert every line of ``stream`` keyed by its line number."""
    engine.insert_many((idx, line.rstrip("\r\n")) for idx, line in enumerate(stream))


def run_filter(
    stream: TextIO,
    query: str,
    engine: FuzzyEngine,
    *,
    limit: int | None,
    style: FuzzyListStyle,
) -> list[str]:
    """Score every line of ``stream`` against ``query`` and render the matches."""
    load_candidates(stream, engine)
    engine.set_filter(query)
    return render_plain_results(engine, style, limit)


def _pick(stream: TextIO, engine: FuzzyEngine, style: FuzzyListStyle, query: str, select_one: bool) -> str | None:
    """Return the chosen line, or ``None`` when nothing was selectable."""
    if select_one:
        load_candidates(stream, engine)
        engine.set_filter(query)
        if engine.matched_count == 0:
            return None
        if engine.matched_count == 1:
            selected = engine.current_selection()
            return selected.text if selected is not None else None
    try:
        return run_picker(stream, engine, style, query=query)
    except OSError as exc:
        raise SystemExit(f"Cannot open terminal: {exc.strerror or exc}") from exc


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run filter mode or the interactive picker."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    theme_name = args.theme or config.load_theme_name()
    if args.save_theme and args.theme:
        config.save_theme_name(normalize_style_name(args.theme))
    scorer = substring_scorer if args.exact else fuzzy_indices
    engine = build_engine(scorer, args.workers)

    if args.filter is not None:
        style = resolve_style(theme_name, no_color=args.no_color or not sys.stdout.isatty())
        stream = _open_input(args.input)
        try:
            lines = run_filter(
                stream,
                args.filter,
                engine,
                limit=args.limit or config.load_result_limit(),
                style=style,
            )
        finally:
            if stream is not sys.stdin:
                stream.close()
        for line in lines:
            sys.stdout.write(line + "\n")
        if not lines:
            raise SystemExit(EXIT_NO_MATCH)
        return

    if args.input is None and sys.stdin.isatty():
        raise SystemExit("No candidates: pipe lines on stdin or pass --input PATH.")
    style = resolve_style(theme_name, no_color=args.no_color)
    if args.title:
        style = with_title(style, args.title)
    stream = _open_input(args.input)
    try:
        selection = _pick(stream, engine, style, args.query, args.select_1)
    except PickerCancelled:
        raise SystemExit(EXIT_CANCELLED) from None
    finally:
        if stream is not sys.stdin:
            stream.close()
    if selection is None:
        raise SystemExit(EXIT_NO_MATCH)
    sys.stdout.write(selection + "\n")
