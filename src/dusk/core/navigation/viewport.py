from __future__ import annotations

"""
Scrolling Viewport.

Maps the selected menu index onto the visible slice of a terminal that is
shorter than the menu. Movement stops hard at both ends; it never wraps.
"""

from dataclasses import dataclass

from dusk.domain.constants import DEFAULT_HEADER_ROWS


def available_rows(terminal_rows: int, header_rows: int = DEFAULT_HEADER_ROWS) -> int:
    """Rows left for menu items below the header, never fewer than one."""
    return max(1, terminal_rows - header_rows)


def scroll_window(selected: int, window_start: int, rows: int) -> int:
    """
    Compute the new window start so that `selected` is visible.

    Args:
        selected: Index of the highlighted item.
        window_start: Previous first visible index.
        rows: Number of visible rows.

    Returns:
        int: New first visible index.
    """
    if selected < window_start:
        return selected
    if selected >= window_start + rows:
        return selected - rows + 1
    return window_start


def move_selection(selected: int, delta: int, total: int) -> int:
    """Shift the selection by `delta`, clamped to the list bounds."""
    if total <= 0:
        return 0
    return max(0, min(total - 1, selected + delta))


@dataclass
class Viewport:
    """
    Selection and scroll position over a menu of `total` items.

    Attributes:
        total: Number of menu items.
        rows: Visible rows (see `available_rows`).
        selected: Highlighted index.
        window_start: First visible index.
    """
    total: int
    rows: int
    selected: int = 0
    window_start: int = 0

    def move(self, delta: int) -> None:
        self.selected = move_selection(self.selected, delta, self.total)
        self.window_start = scroll_window(self.selected, self.window_start, self.rows)

    def resize(self, rows: int) -> None:
        """Adopt a new row count (terminal resized) and keep the selection visible."""
        self.rows = max(1, rows)
        self.window_start = scroll_window(self.selected, self.window_start, self.rows)

    def visible_range(self) -> range:
        return range(self.window_start, min(self.total, self.window_start + self.rows))
