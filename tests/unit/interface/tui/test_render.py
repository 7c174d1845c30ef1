from __future__ import annotations

"""
Unit tests for Screen Rendering.

Verifies the menu screen layout (header, visible slice, highlight, width
fitting), the panel prompt and the scan spinner output.
"""

import io

from dusk.domain.menu_models import MenuItem, MenuItemKind
from dusk.infra.terminal import CLEAR_SCREEN, INVERSE, RESET
from dusk.interface.tui.render import ScanSpinner, render_menu_screen, render_panel_screen


def _items(n: int):
    return [MenuItem(kind=MenuItemKind.ENTRY, label=f"item-{i}", path=f"/x/{i}") for i in range(n)]


def test_menu_screen_header_and_rows() -> None:
    screen = render_menu_screen("/x", _items(3), selected=0, visible=range(0, 3), columns=20)

    assert screen.startswith(CLEAR_SCREEN)
    lines = screen[len(CLEAR_SCREEN):].split("\n")
    assert lines[0] == "=== DUSK: Disk Usage SKanner (/x) ==="
    assert lines[1] == "Use ↑/↓ to navigate, ENTER to select, or 'q' to quit"
    assert lines[2] == "-" * 32
    assert lines[3] == INVERSE + "item-0".ljust(20) + RESET
    assert lines[4] == "item-1".ljust(20)
    assert len(lines) == 6


def test_menu_screen_draws_only_visible_slice() -> None:
    screen = render_menu_screen("/x", _items(10), selected=7, visible=range(5, 8), columns=10)

    assert "item-4" not in screen
    assert "item-8" not in screen
    assert INVERSE + "item-7".ljust(10) + RESET in screen


def test_menu_screen_truncates_long_lines() -> None:
    items = [MenuItem(kind=MenuItemKind.EXIT, label="x" * 50)]

    screen = render_menu_screen("/", items, selected=-1, visible=range(0, 1), columns=12)

    assert screen.endswith("\n" + "x" * 12)


def test_panel_screen_prompt() -> None:
    screen = render_panel_screen(["line one", "line two"])

    assert screen == CLEAR_SCREEN + "line one\nline two\nPress any key to return to menu..."


def test_scan_spinner_cycles_and_finishes() -> None:
    out = io.StringIO()
    spinner = ScanSpinner(out, "/srv")

    for frame in range(5):
        spinner(frame)
    spinner.finish()

    text = out.getvalue()
    assert "\rDUSK is Scanning /srv ... |" in text
    assert "\rDUSK is Scanning /srv ... \\" in text
    assert text.count("DUSK is Scanning") == 5
    assert text.rstrip(" \n").endswith("DUSK Scanning completed for: /srv")
