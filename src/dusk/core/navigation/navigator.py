from __future__ import annotations

"""
Navigator State Machine.

Drives every user-visible transition over the cache: entering a directory,
going up, opening the info panel for a file and leaving the program.
The navigator performs no I/O itself; the TUI renders its menu and feeds
back the user's choices.
"""

import logging
import os
from typing import List

from dusk.core.navigation.menu import DirectoryProbe, build_menu
from dusk.domain.constants import DEFAULT_BAR_WIDTH
from dusk.domain.menu_models import (
    Browsing,
    Exited,
    ExitReason,
    MenuItem,
    MenuItemKind,
    NavState,
    NodeType,
    ViewingFile,
)
from dusk.domain.tree_models import Cache

logger = logging.getLogger(__name__)


class Navigator:
    """
    State machine with the states Browsing, ViewingFile and Exited.

    Starts in `Browsing(cache.start)`; `Exited` is terminal and ignores any
    further input.
    """

    def __init__(
            self,
            cache: Cache,
            *,
            bar_width: int = DEFAULT_BAR_WIDTH,
            is_dir: DirectoryProbe = os.path.isdir,
    ) -> None:
        self._cache = cache
        self._bar_width = bar_width
        self._is_dir = is_dir
        self.state: NavState = Browsing(cache.start)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def cache(self) -> Cache:
        return self._cache

    @property
    def current_path(self) -> str:
        """Directory being listed (or to return to, while viewing a file)."""
        if isinstance(self.state, Browsing):
            return self.state.path
        if isinstance(self.state, ViewingFile):
            return self.state.return_path
        return self._cache.start

    @property
    def finished(self) -> bool:
        return isinstance(self.state, Exited)

    def menu(self) -> List[MenuItem]:
        """Menu for the current directory."""
        return build_menu(
            self._cache,
            self.current_path,
            bar_width=self._bar_width,
            is_dir=self._is_dir,
        )

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def select(self, item: MenuItem) -> NavState:
        """
        Apply a menu selection made while browsing.

        Args:
            item: The chosen menu item.

        Returns:
            NavState: The new state.
        """
        if not isinstance(self.state, Browsing):
            logger.debug(f"Ignoring selection in state {self.state}")
            return self.state

        current = self.state.path

        if item.kind is MenuItemKind.EXIT:
            self.state = Exited(ExitReason.EXIT_ENTRY)
        elif item.kind is MenuItemKind.UP:
            if current != self._cache.start:
                self.state = Browsing(self._cache.parent_of(current))
        elif item.kind is MenuItemKind.ENTRY and item.path:
            if item.node_type is NodeType.DIRECTORY:
                self.state = Browsing(item.path)
            else:
                self.state = ViewingFile(path=item.path, return_path=current)
        # PLACEHOLDER: stay put

        logger.debug(f"Selection {item.kind.value} -> {self.state}")
        return self.state

    def dismiss_file(self) -> NavState:
        """Close the info panel and return to the listing it was opened from."""
        if isinstance(self.state, ViewingFile):
            self.state = Browsing(self.state.return_path)
        return self.state

    def quit(self) -> NavState:
        """Global quit, accepted from any non-terminal state."""
        if not isinstance(self.state, Exited):
            self.state = Exited(ExitReason.QUIT)
        return self.state
