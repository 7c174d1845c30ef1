from __future__ import annotations

"""
Unit tests for the Terminal Infrastructure.

Verifies:
1. Key decoding (arrows, enter, quit, EOF, unknown sequences).
2. cbreak_mode restores the saved attributes on every exit path.
3. Interactive detection.
"""

import io
from unittest.mock import MagicMock, patch

import pytest

from dusk.infra import terminal
from dusk.infra.terminal import Key, cbreak_mode, highlight, is_interactive, read_key


class FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True

    def fileno(self) -> int:
        return 0


@pytest.mark.parametrize("data,expected", [
    ("\033[A", Key.UP),
    ("\033[B", Key.DOWN),
    ("\n", Key.ENTER),
    ("\r", Key.ENTER),
    ("q", Key.QUIT),
    ("", Key.QUIT),
    ("x", Key.OTHER),
    ("\033[C", Key.OTHER),
    ("\033O", Key.OTHER),
    ("\033", Key.OTHER),
    ("Q", Key.OTHER),
])
def test_read_key(data: str, expected: Key) -> None:
    assert read_key(io.StringIO(data)) is expected


def test_read_key_consumes_one_key_at_a_time() -> None:
    stream = io.StringIO("\033[B\033[Bq")

    assert [read_key(stream) for _ in range(3)] == [Key.DOWN, Key.DOWN, Key.QUIT]


def test_cbreak_mode_restores_attributes() -> None:
    saved = ["attrs"]
    with patch.object(terminal, "termios") as mock_termios, \
            patch.object(terminal, "tty") as mock_tty:
        mock_termios.tcgetattr.return_value = saved

        with cbreak_mode(FakeTTY()):
            mock_tty.setcbreak.assert_called_once_with(0)

        mock_termios.tcsetattr.assert_called_once_with(0, mock_termios.TCSADRAIN, saved)


@pytest.mark.parametrize("exc_type", [RuntimeError, KeyboardInterrupt])
def test_cbreak_mode_restores_on_exception(exc_type: type) -> None:
    with patch.object(terminal, "termios") as mock_termios, \
            patch.object(terminal, "tty"):
        mock_termios.tcgetattr.return_value = ["attrs"]

        with pytest.raises(exc_type):
            with cbreak_mode(FakeTTY()):
                raise exc_type()

        mock_termios.tcsetattr.assert_called_once()


def test_is_interactive() -> None:
    assert is_interactive(FakeTTY(), FakeTTY()) is True
    assert is_interactive(io.StringIO(), FakeTTY()) is False
    assert is_interactive(FakeTTY(), io.StringIO()) is False

    closed = MagicMock()
    closed.isatty.side_effect = ValueError("I/O operation on closed file")
    assert is_interactive(closed, FakeTTY()) is False


def test_highlight_wraps_in_inverse_video() -> None:
    assert highlight("row") == "\033[7mrow\033[0m"
