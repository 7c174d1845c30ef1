from __future__ import annotations

"""
Unit tests for the Tree Cache Builder.

Verifies:
1. Children ordered by descending size, ties in emission order.
2. Duplicate records replace the size without duplicating children.
3. Records outside the start path are dropped.
4. Unreported parents are synthesized so chains reach the start path, after
   reported siblings.
5. Degenerate enumerations still produce a usable cache.
"""

from typing import List

from dusk.core.services.tree_builder import build_cache
from dusk.domain.tree_models import Node, ScanRecord


def _paths(nodes) -> List[str]:
    return [n.path for n in nodes]


def test_children_sorted_by_size_descending() -> None:
    records = [ScanRecord(40, "/a/x"), ScanRecord(60, "/a/y"), ScanRecord(100, "/a")]

    cache = build_cache(records, "/a")

    assert _paths(cache.children("/a")) == ["/a/y", "/a/x"]
    assert cache.size_of("/a") == 100


def test_equal_sizes_keep_emission_order() -> None:
    records = [
        ScanRecord(5, "/s/c"),
        ScanRecord(5, "/s/a"),
        ScanRecord(9, "/s/big"),
        ScanRecord(5, "/s/b"),
        ScanRecord(24, "/s"),
    ]

    cache = build_cache(records, "/s")

    assert _paths(cache.children("/s")) == ["/s/big", "/s/c", "/s/a", "/s/b"]


def test_duplicate_record_replaces_size_only() -> None:
    records = [
        ScanRecord(10, "/d/f"),
        ScanRecord(20, "/d/g"),
        ScanRecord(50, "/d/f"),
        ScanRecord(70, "/d"),
    ]

    cache = build_cache(records, "/d")

    assert cache.children("/d") == (Node("/d/f", 50), Node("/d/g", 20))


def test_records_outside_start_are_dropped() -> None:
    records = [ScanRecord(1, "/elsewhere/x"), ScanRecord(2, "/data2"), ScanRecord(3, "/data")]

    cache = build_cache(records, "/data")

    assert set(cache.nodes) == {"/data"}
    assert "/elsewhere" not in cache.tree
    assert "/" not in cache.tree


def test_missing_parents_are_synthesized() -> None:
    records = [ScanRecord(7, "/r/one/two/leaf"), ScanRecord(7, "/r")]

    cache = build_cache(records, "/r")

    assert cache.children("/r") == (Node("/r/one", 0),)
    assert cache.children("/r/one") == (Node("/r/one/two", 0),)
    assert _paths(cache.children("/r/one/two")) == ["/r/one/two/leaf"]


def test_synthesized_parent_sorts_after_reported_zero_size_sibling() -> None:
    cache = build_cache(
        [ScanRecord(5, "/g/ghost/f"), ScanRecord(0, "/g/empty"), ScanRecord(5, "/g")], "/g"
    )

    assert _paths(cache.children("/g")) == ["/g/empty", "/g/ghost"]


def test_every_node_reaches_start_through_parents(sample_cache) -> None:
    for path in sample_cache.nodes:
        hops = 0
        while path != sample_cache.start:
            parent = sample_cache.parent_of(path)
            assert path in _paths(sample_cache.children(parent))
            path = parent
            hops += 1
            assert hops < 10


def test_start_with_trailing_slash_is_normalized() -> None:
    cache = build_cache([ScanRecord(3, "/t/f"), ScanRecord(3, "/t/")], "/t/")

    assert cache.start == "/t"
    assert _paths(cache.children("/t")) == ["/t/f"]


def test_empty_enumeration_yields_root_only() -> None:
    cache = build_cache([], "/empty")

    assert cache.start == "/empty"
    assert cache.size_of("/empty") == 0
    assert cache.children("/empty") == ()


def test_root_start_accepts_all_absolute_paths() -> None:
    records = [ScanRecord(1, "/etc/hosts"), ScanRecord(2, "/etc"), ScanRecord(9, "/")]

    cache = build_cache(records, "/")

    assert _paths(cache.children("/")) == ["/etc"]
    assert _paths(cache.children("/etc")) == ["/etc/hosts"]
    assert cache.size_of("/") == 9
