"""Persistent JSON preferences for the fuzzyscope command line.

Stores the list style name and scoring defaults. Candidate data and filter
state are never written here. All access is defensive: malformed or missing
config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "fuzzyscope"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are ignored so a read-only config
    directory never breaks the picker.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _load_positive_int(key: str) -> int | None:
    """Read a strictly positive integer; booleans and other types are rejected."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_theme_name() -> str | None:
    """Load persisted list style name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_score_workers() -> int:
    """Return the configured scoring thread count, defaulting to ``1``."""
    return _load_positive_int("score_workers") or 1


def load_parallel_min_candidates() -> int | None:
    """Return the candidate count at which scoring switches to the thread pool."""
    return _load_positive_int("parallel_min_candidates")


def load_result_limit() -> int | None:
    """Return the default cap on printed results in filter mode."""
    return _load_positive_int("result_limit")


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "load_parallel_min_candidates",
    "load_result_limit",
    "load_score_workers",
    "load_theme_name",
    "save_config",
    "save_theme_name",
]
