from __future__ import annotations

"""
Screen Rendering.

Pure functions that turn navigator data into terminal text, plus the
single-line scan spinner. Nothing here reads input.
"""

from typing import List, Sequence, TextIO

from dusk.domain import constants as const
from dusk.domain.menu_models import MenuItem
from dusk.infra.terminal import CLEAR_SCREEN, highlight
from dusk.utils.formatting import display_text

# -----------------------------------------------------------------------------
# MENU SCREEN
# -----------------------------------------------------------------------------

def render_menu_screen(
        current: str,
        items: Sequence[MenuItem],
        selected: int,
        visible: range,
        columns: int,
) -> str:
    """
    Compose the full menu screen.

    Each visible line is cut and padded to the terminal width so that
    nothing wraps; the selected line is shown in inverse video.

    Args:
        current: Directory being listed.
        items: Full menu.
        selected: Highlighted index.
        visible: Indices to draw.
        columns: Terminal width.

    Returns:
        str: Text to write, starting with a clear-screen sequence.
    """
    lines: List[str] = [
        f"=== {const.APP_NAME}: Disk Usage SKanner ({display_text(current)}) ===",
        const.HELP_LINE,
        const.SEPARATOR_LINE,
    ]
    for i in visible:
        line = _fit(items[i].label, columns)
        lines.append(highlight(line) if i == selected else line)
    return CLEAR_SCREEN + "\n".join(lines)


def render_panel_screen(lines: Sequence[str]) -> str:
    """Info panel screen followed by the keypress prompt."""
    return CLEAR_SCREEN + "\n".join(lines) + "\nPress any key to return to menu..."


def _fit(text: str, columns: int) -> str:
    width = max(1, columns)
    return text[:width].ljust(width)


# -----------------------------------------------------------------------------
# PROGRESS
# -----------------------------------------------------------------------------

class ScanSpinner:
    """
    Single-line spinner redrawn on every scanner tick.
    """

    def __init__(self, stream: TextIO, start: str) -> None:
        self._stream = stream
        self._start = display_text(start)

    def __call__(self, frame: int) -> None:
        glyph = const.SPINNER_FRAMES[frame % len(const.SPINNER_FRAMES)]
        self._stream.write(f"\r{const.APP_NAME} is Scanning {self._start} ... {glyph}")
        self._stream.flush()

    def finish(self) -> None:
        self._stream.write(f"\r{const.APP_NAME} Scanning completed for: {self._start}               \n")
        self._stream.flush()
