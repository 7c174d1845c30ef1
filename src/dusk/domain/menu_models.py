from __future__ import annotations

"""
Navigator Menu and State Models.

Menu items carry their structured meaning (kind, path, node type) next to
the rendered label, so selection never has to re-parse display text.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Union

from dusk.domain.constants import TYPE_CHAR_DIRECTORY, TYPE_CHAR_FILE

# -----------------------------------------------------------------------------
# MENU ITEMS
# -----------------------------------------------------------------------------

class MenuItemKind(enum.Enum):
    UP = "up"
    PLACEHOLDER = "placeholder"
    ENTRY = "entry"
    EXIT = "exit"


class NodeType(enum.Enum):
    DIRECTORY = TYPE_CHAR_DIRECTORY
    FILE = TYPE_CHAR_FILE


@dataclass(frozen=True)
class MenuItem:
    """
    One selectable line of the directory menu.

    Attributes:
        kind: Role of the item.
        label: Text shown on screen.
        path: Absolute path, for ENTRY items only.
        node_type: Directory or file, for ENTRY items only.
    """
    kind: MenuItemKind
    label: str
    path: Optional[str] = None
    node_type: Optional[NodeType] = None


# -----------------------------------------------------------------------------
# NAVIGATOR STATES
# -----------------------------------------------------------------------------

class ExitReason(enum.Enum):
    EXIT_ENTRY = "exit_entry"
    QUIT = "quit"


@dataclass(frozen=True)
class Browsing:
    path: str


@dataclass(frozen=True)
class ViewingFile:
    """Showing the info panel for `path`; `return_path` is the listing to go back to."""
    path: str
    return_path: str


@dataclass(frozen=True)
class Exited:
    reason: ExitReason


NavState = Union[Browsing, ViewingFile, Exited]
