from __future__ import annotations

"""
Terminal Infrastructure.

Raw key input and ANSI output helpers for the interactive navigator.
Input mode changes are scoped: `cbreak_mode` always restores the saved
terminal attributes, whatever way the wrapped block exits.
"""

import enum
import shutil
import termios
import tty
from contextlib import contextmanager
from typing import Iterator, TextIO, Tuple

ESC = "\033"
CSI = ESC + "["

CLEAR_SCREEN = CSI + "2J" + CSI + "H"
INVERSE = CSI + "7m"
RESET = CSI + "0m"


class Key(enum.Enum):
    """Logical keys understood by the navigator."""
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    QUIT = "quit"
    OTHER = "other"


# -----------------------------------------------------------------------------
# ENVIRONMENT PROBES
# -----------------------------------------------------------------------------

def is_interactive(stdin: TextIO, stdout: TextIO) -> bool:
    """True when both standard streams are attached to a terminal."""
    try:
        return stdin.isatty() and stdout.isatty()
    except (AttributeError, ValueError):
        return False


def terminal_size() -> Tuple[int, int]:
    """
    Return (columns, rows) of the controlling terminal.
    """
    size = shutil.get_terminal_size(fallback=(80, 24))
    return size.columns, size.lines


# -----------------------------------------------------------------------------
# INPUT
# -----------------------------------------------------------------------------

@contextmanager
def cbreak_mode(stream: TextIO) -> Iterator[None]:
    """
    Put the terminal attached to `stream` in cbreak mode for the block.

    Keys are delivered one at a time without waiting for Enter; the
    previous attributes are restored on exit, including on exceptions and
    KeyboardInterrupt.
    """
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def read_key(stream: TextIO) -> Key:
    """
    Block for one key press and translate it.

    Arrow keys arrive as ESC '[' 'A'/'B'; any truncated or unexpected
    sequence maps to Key.OTHER so the caller treats it as a no-op.

    Args:
        stream: Input stream in cbreak mode.

    Returns:
        Key: Logical key.
    """
    ch = stream.read(1)
    # Closed input behaves like quit, otherwise the loop would spin on EOF
    if ch in ("q", ""):
        return Key.QUIT
    if ch in ("\n", "\r"):
        return Key.ENTER
    if ch != ESC:
        return Key.OTHER

    if stream.read(1) != "[":
        return Key.OTHER
    code = stream.read(1)
    if code == "A":
        return Key.UP
    if code == "B":
        return Key.DOWN
    return Key.OTHER


# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------

def highlight(line: str) -> str:
    """Wrap a line in inverse video."""
    return f"{INVERSE}{line}{RESET}"
