"""Selection cursor over the matched part of the ranked view."""

from __future__ import annotations


class SelectionCursor:
    """Track the highlighted rank, or ``None`` when nothing matches.

    Movement saturates at both ends instead of wrapping. Every method takes
    the current matched count and returns whether the selection changed.
    """

    def __init__(self) -> None:
        self.selected: int | None = None

    def _set(self, value: int | None) -> bool:
        changed = value != self.selected
        self.selected = value
        return changed

    def reset(self, matched_count: int) -> bool:
        """Select the first match, or clear when there are none."""
        return self._set(0 if matched_count > 0 else None)

    def select_next(self, matched_count: int) -> bool:
        if self.selected is None or matched_count <= 0:
            return self.reset(matched_count)
        return self._set(min(self.selected + 1, matched_count - 1))

    def select_prev(self, matched_count: int) -> bool:
        if self.selected is None or matched_count <= 0:
            return self.reset(matched_count)
        return self._set(max(0, min(self.selected - 1, matched_count - 1)))


__all__ = ["SelectionCursor"]
