import pytest

from subcomplete.errors import EmptyQueryError
from subcomplete.models import DEFAULT_KEYS as K


@pytest.mark.e2e
def test_clean_removes_every_index_key(engine):
    engine.ingest(["Otto Mustermann", "Ottilie Bauer"])
    engine.store.ordered_set_add(K.scratch("leftover"), "1")
    engine.store.hash_set("unrelated", "f", "v")

    removed = engine.clean()
    assert removed > 0
    s = engine.store
    assert not s.exists(K.documents)
    assert not s.exists(K.next_id)
    assert not s.exists(K.term("ott"))
    assert not s.exists(K.scratch("leftover"))
    assert s.delete_matching(K.terms_pattern) == 0
    assert s.exists("unrelated")


@pytest.mark.e2e
def test_clean_is_idempotent(engine):
    assert engine.clean() == 0
    engine.ingest(["Otto"])
    engine.clean()
    assert engine.clean() == 0


@pytest.mark.e2e
def test_reingest_after_clean_restarts_ids(engine):
    engine.ingest(["Otto"])
    engine.clean()
    assert engine.ingest(["Anna"]) == 1
    assert engine.search_ids("anna") == ["1"]
    assert engine.complete("otto") == []


@pytest.mark.e2e
def test_load_missing_ids_are_none(engine):
    engine.ingest(["Otto Mustermann"])
    assert engine.load("1", "42") == ["Otto Mustermann", None]
    assert engine.load("42") == [None]


@pytest.mark.e2e
def test_load_without_ids_signals_no_result(engine):
    engine.ingest(["Otto Mustermann"])
    assert engine.load() is None


@pytest.mark.e2e
def test_empty_query_is_rejected(engine):
    engine.ingest(["Otto Mustermann"])
    with pytest.raises(EmptyQueryError):
        engine.complete()
    with pytest.raises(ValueError):
        engine.search_ids()


@pytest.mark.e2e
def test_query_on_empty_store(engine):
    assert engine.complete("otto") == []
    assert engine.complete("ot", "to") == []
