from __future__ import annotations

"""
Disk Usage Tree Data Models.

Defines the immutable snapshot produced by a single scan: size-annotated
nodes, the parent-to-children table and the cache that bundles them for
the interactive navigator.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from dusk.infra.fs import parent_path

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Node:
    """
    Represents a single scanned entry (file or directory).

    Attributes:
        path: Normalized absolute path (no trailing slash except '/').
        size: Byte count reported by the enumeration for this exact path.
    """
    path: str
    size: int = 0


@dataclass(frozen=True)
class ScanRecord:
    """
    Raw `(size, path)` pair emitted by the enumeration collaborator.
    """
    size: int
    path: str


@dataclass(frozen=True)
class ScanReport:
    """
    Outcome of one enumeration run.

    Attributes:
        start: Normalized start path.
        records: Parsed records in emission order.
        skipped_lines: Number of malformed lines dropped.
        return_code: Exit status of the enumeration process.
        elapsed_sec: Wall-clock duration of the scan.
    """
    start: str
    records: Tuple[ScanRecord, ...]
    skipped_lines: int = 0
    return_code: Optional[int] = 0
    elapsed_sec: float = 0.0


Tree = Mapping[str, Tuple[Node, ...]]


@dataclass(frozen=True)
class CacheStats:
    """Aggregated counters describing a built cache."""
    nodes: int
    directories: int
    total_size: int


# -----------------------------------------------------------------------------
# CACHE SNAPSHOT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Cache:
    """
    Read-only snapshot of a scanned subtree.

    Built exactly once by the tree builder and handed to the navigator.
    The mappings are exposed as read-only proxies and child lists as
    tuples, so no consumer can mutate the snapshot after construction.

    Attributes:
        start: Normalized start path of the scan.
        tree: Parent path -> children sorted by descending size (stable).
        nodes: Path -> Node for every scanned entry.
    """
    start: str
    tree: Tree = field(default_factory=dict)
    nodes: Mapping[str, Node] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the containers even if plain dicts were passed in
        frozen_tree: Dict[str, Tuple[Node, ...]] = {
            parent: tuple(children) for parent, children in self.tree.items()
        }
        object.__setattr__(self, "tree", MappingProxyType(frozen_tree))
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    def children(self, path: str) -> Tuple[Node, ...]:
        """Return the sorted children of `path` (empty if unknown)."""
        return self.tree.get(path, ())

    def is_directory(self, path: str) -> bool:
        """Return True if the cache itself knows `path` as a parent."""
        return path in self.tree

    def size_of(self, path: str) -> int:
        node = self.nodes.get(path)
        return node.size if node else 0

    def parent_of(self, path: str) -> str:
        """Return the normalized parent directory of `path`."""
        return parent_path(path)

    def stats(self) -> CacheStats:
        """Compute node, directory and total size counters."""
        return CacheStats(
            nodes=len(self.nodes),
            directories=len(self.tree),
            total_size=self.size_of(self.start),
        )
