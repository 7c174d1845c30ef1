from __future__ import annotations

"""
Human-Readable Formatting Helpers.

Size and bar-graph rendering used by the menu rows and the info panel.
"""

import math

from dusk.domain.constants import BAR_FILL_CHAR, DEFAULT_BAR_WIDTH, SIZE_STEP, SIZE_UNITS

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def human_size(num_bytes: int) -> str:
    """
    Convert a byte count to a one-decimal string with a unit suffix.

    Divides by 1024 while the value is at least 1024 and a larger unit is
    still available, so anything beyond TB stays expressed in TB.

    Args:
        num_bytes: Non-negative byte count.

    Returns:
        str: e.g. '0B', '1023.0B', '1.0KB', '3.5GB'.
    """
    if num_bytes == 0:
        return "0B"

    value = float(num_bytes)
    unit = 0
    while value >= SIZE_STEP and unit < len(SIZE_UNITS) - 1:
        value /= SIZE_STEP
        unit += 1
    return f"{value:.1f}{SIZE_UNITS[unit]}"


def display_text(text: str) -> str:
    """
    Make a path printable on a strict UTF-8 stream.

    Undecodable filename bytes arrive as lone surrogates; they are shown as
    U+FFFD instead. Lookups keep using the raw path.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def filled_cells(size: int, max_size: int, width: int = DEFAULT_BAR_WIDTH) -> int:
    """Number of fill characters for `size` relative to the largest sibling."""
    if max_size <= 0:
        return 0
    return math.floor(size / max_size * width)


def render_bar(size: int, max_size: int, width: int = DEFAULT_BAR_WIDTH) -> str:
    """
    Render the fixed-width bracketed bar graph for a menu row.

    Returns:
        str: e.g. '[##########          ]'.
    """
    bar = BAR_FILL_CHAR * filled_cells(size, max_size, width)
    return f"[{bar:<{width}}]"
