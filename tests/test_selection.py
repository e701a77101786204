"""Tests for saturating selection cursor movement."""

from __future__ import annotations

import unittest

from fuzzyscope.selection import SelectionCursor


class SelectionCursorTests(unittest.TestCase):
    def test_reset_selects_first_match_or_clears(self) -> None:
        cursor = SelectionCursor()
        self.assertTrue(cursor.reset(3))
        self.assertEqual(cursor.selected, 0)
        self.assertTrue(cursor.reset(0))
        self.assertIsNone(cursor.selected)

    def test_next_and_prev_saturate(self) -> None:
        cursor = SelectionCursor()
        cursor.reset(2)
        self.assertTrue(cursor.select_next(2))
        self.assertEqual(cursor.selected, 1)
        self.assertFalse(cursor.select_next(2))
        self.assertEqual(cursor.selected, 1)
        self.assertTrue(cursor.select_prev(2))
        self.assertFalse(cursor.select_prev(2))
        self.assertEqual(cursor.selected, 0)

    def test_movement_with_no_matches_keeps_selection_cleared(self) -> None:
        cursor = SelectionCursor()
        self.assertFalse(cursor.select_next(0))
        self.assertFalse(cursor.select_prev(0))
        self.assertIsNone(cursor.selected)


if __name__ == "__main__":
    unittest.main()
