"""Presentation style records for the fuzzy list renderer.

A style is a plain record of ANSI sequences plus the list title and
highlight symbol. Renderers read fields; nothing mutates a style in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class FuzzyListStyle:
    """Semantic ANSI palette and chrome used by :mod:`fuzzyscope.render`."""

    name: str
    title: str
    border: str
    matched: str
    unmatched: str
    selection: str
    highlight_symbol: str
    prompt: str
    prompt_placeholder: str
    message: str
    reset: str


DEFAULT_STYLE = FuzzyListStyle(
    name="default",
    title="Options",
    border="\033[2m",
    matched="\033[1;38;5;81m",
    unmatched="\033[38;5;252m",
    selection="\033[1m",
    highlight_symbol="> ",
    prompt="\033[1;38;5;229m",
    prompt_placeholder="\033[2;38;5;250m",
    message="\033[2;38;5;250m",
    reset="\033[0m",
)

OCEAN_STYLE = FuzzyListStyle(
    name="ocean",
    title="Options",
    border="\033[2;38;5;31m",
    matched="\033[1;38;5;45m",
    unmatched="\033[38;5;153m",
    selection="\033[1;48;5;24m",
    highlight_symbol="> ",
    prompt="\033[1;38;5;45m",
    prompt_placeholder="\033[2;38;5;110m",
    message="\033[2;38;5;110m",
    reset="\033[0m",
)

PLAIN_STYLE = FuzzyListStyle(
    name="plain",
    title="Options",
    border="",
    matched="",
    unmatched="",
    selection="",
    highlight_symbol="> ",
    prompt="",
    prompt_placeholder="",
    message="",
    reset="",
)

_STYLES: dict[str, FuzzyListStyle] = {
    DEFAULT_STYLE.name: DEFAULT_STYLE,
    OCEAN_STYLE.name: OCEAN_STYLE,
}


def available_style_names() -> tuple[str, ...]:
    """Return selectable non-plain style names."""
    return tuple(sorted(_STYLES.keys()))


def normalize_style_name(name: str | None) -> str:
    """Return a valid style name, falling back to default."""
    if not name:
        return DEFAULT_STYLE.name
    candidate = str(name).strip().lower()
    if candidate in _STYLES:
        return candidate
    return DEFAULT_STYLE.name


def resolve_style(name: str | None, *, no_color: bool = False) -> FuzzyListStyle:
    """Return concrete style for requested name and color mode."""
    if no_color:
        return PLAIN_STYLE
    return _STYLES[normalize_style_name(name)]


def with_title(style: FuzzyListStyle, title: str) -> FuzzyListStyle:
    return replace(style, title=title)


__all__ = [
    "DEFAULT_STYLE",
    "FuzzyListStyle",
    "OCEAN_STYLE",
    "PLAIN_STYLE",
    "available_style_names",
    "normalize_style_name",
    "resolve_style",
    "with_title",
]
