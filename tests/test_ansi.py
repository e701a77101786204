"""Tests for ANSI-aware width measurement and clipping."""

from __future__ import annotations

import unittest

from fuzzyscope.ansi import clip_ansi_line, display_width, selected_with_ansi


class AnsiWidthTests(unittest.TestCase):
    def test_escape_sequences_have_no_width(self) -> None:
        self.assertEqual(display_width("\033[1mabc\033[0m"), 3)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(display_width("漢字"), 4)
        self.assertEqual(display_width("é"), 1)

    def test_tab_expands_to_next_stop(self) -> None:
        self.assertEqual(display_width("ab\t"), 8)


class ClipAnsiLineTests(unittest.TestCase):
    def test_clips_plain_text(self) -> None:
        self.assertEqual(clip_ansi_line("abcdef", 3), "abc")

    def test_keeps_escape_sequences_after_clip_point(self) -> None:
        self.assertEqual(
            clip_ansi_line("\033[1mabc\033[0mdef\033[0m", 2),
            "\033[1mab\033[0m\033[0m",
        )

    def test_wide_character_is_not_split(self) -> None:
        self.assertEqual(clip_ansi_line("a漢b", 2), "a")

    def test_non_positive_width_yields_empty(self) -> None:
        self.assertEqual(clip_ansi_line("abc", 0), "")


class SelectedWithAnsiTests(unittest.TestCase):
    def test_reapplies_selection_after_inner_resets(self) -> None:
        self.assertEqual(
            selected_with_ansi("\033[31ma\033[0mb", "\033[1m", "\033[0m"),
            "\033[1m\033[31ma\033[0m\033[1mb\033[0m",
        )

    def test_without_selection_style_returns_text(self) -> None:
        self.assertEqual(selected_with_ansi("abc", "", ""), "abc")


if __name__ == "__main__":
    unittest.main()
