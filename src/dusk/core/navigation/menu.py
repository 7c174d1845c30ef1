from __future__ import annotations

"""
Directory Menu Builder.

Builds the list of menu items for one directory of the cache: an optional
"go up" entry, one row per child with size, bar graph and type indicator
(or a placeholder when the directory is empty), and a trailing "Exit".
"""

import os
from typing import Callable, List

from dusk.domain import constants as const
from dusk.domain.menu_models import MenuItem, MenuItemKind, NodeType
from dusk.domain.tree_models import Cache, Node
from dusk.utils.formatting import display_text, human_size, render_bar

DirectoryProbe = Callable[[str], bool]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_menu(
        cache: Cache,
        current: str,
        *,
        bar_width: int = const.DEFAULT_BAR_WIDTH,
        is_dir: DirectoryProbe = os.path.isdir,
) -> List[MenuItem]:
    """
    Assemble the menu for the directory `current`.

    Args:
        cache: Scan snapshot.
        current: Normalized directory being browsed.
        bar_width: Number of cells in the bar graph.
        is_dir: Filesystem probe used when the cache alone cannot tell that
                a child is a directory (e.g. an empty directory).

    Returns:
        List[MenuItem]: Items in display order.
    """
    items: List[MenuItem] = []

    if current != cache.start:
        items.append(MenuItem(kind=MenuItemKind.UP, label=const.LABEL_GO_UP))

    children = cache.children(current)
    if children:
        max_size = max(child.size for child in children)
        for child in children:
            items.append(_entry_item(cache, child, max_size, bar_width, is_dir))
    else:
        items.append(MenuItem(kind=MenuItemKind.PLACEHOLDER, label=const.LABEL_NO_ENTRIES))

    items.append(MenuItem(kind=MenuItemKind.EXIT, label=const.LABEL_EXIT))
    return items


def classify_node(cache: Cache, path: str, is_dir: DirectoryProbe = os.path.isdir) -> NodeType:
    """Directory if the cache lists children for it or the filesystem says so."""
    if cache.is_directory(path) or is_dir(path):
        return NodeType.DIRECTORY
    return NodeType.FILE


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _entry_item(
        cache: Cache,
        node: Node,
        max_size: int,
        bar_width: int,
        is_dir: DirectoryProbe,
) -> MenuItem:
    node_type = classify_node(cache, node.path, is_dir)
    label = "{:<8} {} {} {}".format(
        human_size(node.size),
        render_bar(node.size, max_size, bar_width),
        node_type.value,
        display_text(node.path),
    )
    return MenuItem(kind=MenuItemKind.ENTRY, label=label, path=node.path, node_type=node_type)
