# src/e2e/test_store_contract.py
# Every backend must behave like the redis primitives the index is built on.

import pytest

from subcomplete.DB.api import make_store, resolve_range
from subcomplete.DB.memory_store import MemoryStore


def test_increment_starts_at_one(store):
    assert store.increment("acd.nextid") == 1
    assert store.increment("acd.nextid") == 2
    assert store.increment("other") == 1


def test_hash_get_many_keeps_positions(store):
    store.hash_set("acd.dcs", "1", "Otto Mustermann")
    store.hash_set("acd.dcs", "2", "Ottilie Bauer")
    assert store.hash_get_many("acd.dcs", ["2", "7", "1"]) == ["Ottilie Bauer", None, "Otto Mustermann"]
    assert store.hash_get_many("nope", ["1"]) == [None]


def test_exists_and_delete(store):
    assert not store.exists("acd.dcs")
    store.hash_set("acd.dcs", "1", "x")
    store.ordered_set_add("acd.trm.x", "1")
    assert store.exists("acd.dcs") and store.exists("acd.trm.x")
    store.delete("acd.dcs")
    store.delete("acd.dcs")  # missing key is fine
    assert not store.exists("acd.dcs")
    assert store.exists("acd.trm.x")


def test_ordered_set_is_a_set_sorted_as_strings(store):
    for m in ["2", "10", "1", "2", "10"]:
        store.ordered_set_add("z", m, 0)
    assert store.ordered_set_range("z", 0, -1) == ["1", "10", "2"]


def test_ordered_set_add_many(store):
    store.ordered_set_add_many(["a", "b", "c"], "5", 0)
    store.ordered_set_add_many(["a"], "5", 0)
    for k in ("a", "b", "c"):
        assert store.ordered_set_range(k) == ["5"]


def test_ordered_set_range_bounds(store):
    for m in ["a", "b", "c", "d"]:
        store.ordered_set_add("z", m)
    assert store.ordered_set_range("z", 1, 2) == ["b", "c"]
    assert store.ordered_set_range("z", -2, -1) == ["c", "d"]
    assert store.ordered_set_range("z", 0, 100) == ["a", "b", "c", "d"]
    assert store.ordered_set_range("z", 3, 1) == []
    assert store.ordered_set_range("missing", 0, -1) == []


def test_intersect_store(store):
    for m in ["1", "2", "3"]:
        store.ordered_set_add("a", m)
    for m in ["2", "3", "4"]:
        store.ordered_set_add("b", m)
    store.ordered_set_add("c", "3")
    assert store.ordered_set_intersect_store("dst", ["a", "b"]) == 2
    assert store.ordered_set_range("dst") == ["2", "3"]
    # destination is overwritten, not merged
    assert store.ordered_set_intersect_store("dst", ["a", "b", "c"]) == 1
    assert store.ordered_set_range("dst") == ["3"]
    assert store.ordered_set_intersect_store("dst", ["a", "missing"]) == 0
    assert store.ordered_set_range("dst") == []
    assert not store.exists("dst")


def test_delete_matching_only_touches_the_pattern(store):
    store.ordered_set_add("acd.trm.o", "1")
    store.ordered_set_add("acd.trm.ot", "1")
    store.ordered_set_add("acd.trmx", "1")
    store.hash_set("acd.dcs", "1", "Otto")
    assert store.delete_matching("acd.trm.*") == 2
    assert not store.exists("acd.trm.o")
    assert store.exists("acd.trmx")
    assert store.exists("acd.dcs")
    assert store.delete_matching("acd.trm.*") == 0


def test_resolve_range():
    assert resolve_range(4, 0, -1) == (0, 4)
    assert resolve_range(4, -1, -1) == (3, 4)
    assert resolve_range(4, -10, 1) == (0, 2)
    assert resolve_range(0, 0, -1) == (0, 0)
    assert resolve_range(4, 5, 8) == (0, 0)


def test_make_store_dsn(tmp_path):
    assert isinstance(make_store("memory://"), MemoryStore)
    s = make_store(f"sqlite:///{tmp_path / 'x.sqlite'}")
    try:
        assert (tmp_path / "x.sqlite").exists()
    finally:
        s.close()
    with pytest.raises(ValueError):
        make_store("mongodb://localhost")


def test_sqlite_store_persists_across_reopen(tmp_path):
    path = str(tmp_path / "p.sqlite")
    with make_store(f"sqlite:///{path}") as s:
        s.increment("acd.nextid")
        s.ordered_set_add("acd.trm.ot", "1")
    with make_store(f"sqlite:///{path}") as s:
        assert s.increment("acd.nextid") == 2
        assert s.ordered_set_range("acd.trm.ot") == ["1"]
