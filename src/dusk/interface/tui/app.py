from __future__ import annotations

"""
Interactive Terminal Application.

Runs the browse loop on top of the navigator: draws the menu through the
scrolling viewport, reads one key at a time in cbreak mode, and shows the
info panel when a file is selected. Terminal input mode is acquired per
read phase and always restored, including on quit.
"""

import logging
import os
import sys
import time
from typing import Any, Callable, ContextManager, Dict, List, Optional, Sequence, TextIO, Tuple

from dusk.core.navigation.menu import DirectoryProbe
from dusk.core.navigation.navigator import Navigator
from dusk.core.navigation.viewport import Viewport, available_rows
from dusk.core.services.info_panel import collect_file_info, render_file_error, render_file_info
from dusk.domain import constants as const
from dusk.domain.errors import RuntimeDisplayError
from dusk.domain.menu_models import Browsing, Exited, ExitReason, MenuItem, ViewingFile
from dusk.domain.tree_models import Cache
from dusk.infra.terminal import Key, cbreak_mode, read_key, terminal_size
from dusk.interface.tui.render import render_menu_screen, render_panel_screen

logger = logging.getLogger(__name__)

RawMode = Callable[[TextIO], ContextManager[None]]
SizeProbe = Callable[[], Tuple[int, int]]


class TuiApp:
    """
    Interactive browser over a built cache.

    All terminal collaborators are injectable so the loop can be driven
    from in-memory streams.
    """

    def __init__(
            self,
            cache: Cache,
            config: Dict[str, Any],
            *,
            stdin: Optional[TextIO] = None,
            stdout: Optional[TextIO] = None,
            raw_mode: RawMode = cbreak_mode,
            size_probe: SizeProbe = terminal_size,
            is_dir: DirectoryProbe = os.path.isdir,
            sleep: Callable[[float], None] = time.sleep,
            collect_info: Callable[..., Any] = collect_file_info,
    ) -> None:
        self._config = config
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._raw_mode = raw_mode
        self._size_probe = size_probe
        self._sleep = sleep
        self._collect_info = collect_info
        self.navigator = Navigator(
            cache,
            bar_width=config.get("bar_width", const.DEFAULT_BAR_WIDTH),
            is_dir=is_dir,
        )

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    def run(self) -> int:
        """
        Browse until the user exits or quits.

        Returns:
            int: Process exit code (always 0; quitting is a success).
        """
        nav = self.navigator
        while not nav.finished:
            state = nav.state
            if isinstance(state, ViewingFile):
                self._show_file(state.path)
            elif isinstance(state, Browsing):
                items = nav.menu()
                self._maybe_show_loading(items)
                choice = self._menu_select(state.path, items)
                if choice is None:
                    nav.quit()
                else:
                    nav.select(choice)

        final = nav.state
        if isinstance(final, Exited) and final.reason is ExitReason.EXIT_ENTRY:
            self._write("\nExiting DUSK...\n")
        logger.info(f"Navigator finished: {final}")
        return 0

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def _menu_select(self, current: str, items: Sequence[MenuItem]) -> Optional[MenuItem]:
        """
        Let the user pick one item; None means the quit key was pressed.
        """
        header_rows = self._config.get("header_rows", const.DEFAULT_HEADER_ROWS)
        _, rows = self._size_probe()
        viewport = Viewport(total=len(items), rows=available_rows(rows, header_rows))

        with self._raw_mode(self._stdin):
            while True:
                columns, rows = self._size_probe()
                viewport.resize(available_rows(rows, header_rows))
                self._write(render_menu_screen(
                    current, items, viewport.selected, viewport.visible_range(), columns
                ))

                key = read_key(self._stdin)
                if key is Key.QUIT:
                    return None
                if key is Key.ENTER:
                    return items[viewport.selected]
                if key is Key.UP:
                    viewport.move(-1)
                elif key is Key.DOWN:
                    viewport.move(1)

    def _show_file(self, path: str) -> None:
        """Render the info panel and wait for one key."""
        command = self._config.get("classifier_command", const.DEFAULT_CLASSIFIER_COMMAND)
        lines: List[str]
        try:
            lines = render_file_info(self._collect_info(path, command))
        except RuntimeDisplayError as e:
            lines = render_file_error(e)

        self._write(render_panel_screen(lines))
        with self._raw_mode(self._stdin):
            key = read_key(self._stdin)

        if key is Key.QUIT:
            self.navigator.quit()
        else:
            self.navigator.dismiss_file()

    def _maybe_show_loading(self, items: Sequence[MenuItem]) -> None:
        threshold = self._config.get("loading_threshold", const.DEFAULT_LOADING_THRESHOLD)
        if len(items) > threshold:
            self._write("\rLoading directory contents, please wait...")
            self._sleep(self._config.get("loading_delay", const.DEFAULT_LOADING_DELAY))

    def _write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()
