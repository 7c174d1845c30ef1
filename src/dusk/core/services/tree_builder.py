from __future__ import annotations

"""
Tree Cache Builder.

Turns the flat record stream of a scan into the immutable parent-to-children
cache consumed by the navigator. Children are ordered by descending size;
equal sizes keep the order in which the enumeration emitted them.
"""

import logging
from typing import Dict, Iterable, List, Set

from dusk.domain.errors import FatalSetupError
from dusk.domain.tree_models import Cache, Node, ScanRecord
from dusk.infra.fs import is_within, normalize_path, parent_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_cache(records: Iterable[ScanRecord], start: str) -> Cache:
    """
    Build the cache snapshot for `start` from scan records.

    Every path is linked under its parent the first time its own record is
    seen. Later records for the same path only replace its size. Records
    outside the start subtree are dropped. Parents that were referenced but
    never reported get a zero-size node, so every parent chain reaches
    `start`. Synthesized parents are linked after all reported siblings,
    so they sort last among zero-size entries.

    Args:
        records: Scan records in emission order.
        start: Start path of the scan.

    Returns:
        Cache: The immutable snapshot.

    Raises:
        FatalSetupError: If the snapshot cannot be materialized.
    """
    start = normalize_path(start)
    try:
        nodes: Dict[str, Node] = {start: Node(path=start, size=0)}
        child_paths: Dict[str, List[str]] = {}
        linked: Set[str] = set()
        dropped = 0

        for record in records:
            path = normalize_path(record.path)
            if not is_within(path, start):
                dropped += 1
                logger.debug(f"Dropping record outside {start}: {path}")
                continue

            nodes[path] = Node(path=path, size=record.size)
            if path == start or path in linked:
                continue
            linked.add(path)
            child_paths.setdefault(parent_path(path), []).append(path)

        _link_missing_parents(start, nodes, child_paths, linked)

        tree = {
            parent: _sorted_children([nodes[p] for p in paths])
            for parent, paths in child_paths.items()
        }
        cache = Cache(start=start, tree=tree, nodes=nodes)
    except MemoryError as e:
        raise FatalSetupError(f"Cannot materialize the cache for {start}: out of memory") from e

    if dropped:
        logger.warning(f"Dropped {dropped} records outside the start path {start}.")
    stats = cache.stats()
    logger.info(
        f"Cache built for {start}: {stats.nodes} nodes, "
        f"{stats.directories} directories, {stats.total_size} bytes"
    )
    return cache


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _sorted_children(children: List[Node]) -> List[Node]:
    """Descending by size; `sorted` is stable, so ties keep emission order."""
    return sorted(children, key=lambda n: n.size, reverse=True)


def _link_missing_parents(
        start: str,
        nodes: Dict[str, Node],
        child_paths: Dict[str, List[str]],
        linked: Set[str],
) -> None:
    """Synthesize zero-size nodes for parents that never got their own record."""
    pending = [p for p in child_paths if p != start and p not in linked]
    while pending:
        path = pending.pop()
        if path == start or path in linked:
            continue
        logger.debug(f"Synthesizing unreported directory node: {path}")
        nodes.setdefault(path, Node(path=path, size=0))
        linked.add(path)
        parent = parent_path(path)
        child_paths.setdefault(parent, []).append(path)
        if parent != start and parent not in linked:
            pending.append(parent)
