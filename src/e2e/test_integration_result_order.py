import pytest

import subcomplete.config as CFG


def _seed(eng):
    eng.ingest([f"Anna {i}" for i in range(1, 13)])


@pytest.mark.e2e
def test_ids_sort_as_strings(engine):
    _seed(engine)
    ids = engine.search_ids("anna")
    assert ids == ["1", "10", "11", "12", "2", "3", "4", "5", "6", "7", "8", "9"]
    assert engine.complete("anna")[:3] == ["Anna 1", "Anna 10", "Anna 11"]


@pytest.mark.e2e
def test_intersection_keeps_string_order(engine):
    _seed(engine)
    # "1" only matches tokens "1", "10", "11", "12"
    assert engine.search_ids("ann", "1") == ["1", "10", "11", "12"]
    assert engine.search_ids("ann", "2") == ["12", "2"]


@pytest.mark.e2e
def test_numeric_order_is_opt_in(engine, monkeypatch):
    _seed(engine)
    monkeypatch.setattr(CFG, "NUMERIC_ID_ORDER", True)
    assert engine.search_ids("anna") == [str(i) for i in range(1, 13)]
    assert engine.complete("ann", "2") == ["Anna 2", "Anna 12"]
