from __future__ import annotations
import logging
import uuid
from typing import List, Optional, Sequence

from . import config as CFG
from .DB.api import KeyValueStore
from .errors import EmptyQueryError
from .models import DEFAULT_KEYS, KeyLayout
from .normalize import fold_query_term

log = logging.getLogger(__name__)


def search_ids(store: KeyValueStore, terms: Sequence[str], *, keys: Optional[KeyLayout] = None) -> List[str]:
    """
    Resolve search terms to document ids (as strings).

    * one term   -> the whole postings list of that term
    * many terms -> intersection of all postings lists (AND), computed into a
                    scratch key that belongs to this call only and is dropped afterwards

    Ids come back in ordered-set order: all weights are 0, so members sort as
    strings ("10" before "2"). config.NUMERIC_ID_ORDER switches to numeric order.
    """
    keys = keys or DEFAULT_KEYS
    terms = list(terms)
    if not terms:
        raise EmptyQueryError()

    term_keys = [keys.term(fold_query_term(t)) for t in terms]
    if len(term_keys) == 1:
        ids = store.ordered_set_range(term_keys[0], 0, -1)
    else:
        scratch = keys.scratch(uuid.uuid4().hex)
        log.debug("Intersecting %s into %s", term_keys, scratch)
        try:
            store.ordered_set_intersect_store(scratch, term_keys)
            ids = store.ordered_set_range(scratch, 0, -1)
        finally:
            store.delete(scratch)

    if CFG.NUMERIC_ID_ORDER:
        ids = sorted(ids, key=int)
    return ids


def load(store: KeyValueStore, ids: Sequence[str], *, keys: Optional[KeyLayout] = None) -> Optional[List[Optional[str]]]:
    """
    Fetch the raw lines for the given ids.
    Returns None when no id was given; unknown ids yield None at their position.
    """
    keys = keys or DEFAULT_KEYS
    ids = [str(i) for i in ids]
    if not ids:
        return None
    return store.hash_get_many(keys.documents, ids)


def complete(store: KeyValueStore, terms: Sequence[str], *, keys: Optional[KeyLayout] = None) -> List[Optional[str]]:
    """Documents matching every term, in search_ids() order ([] when nothing matches)."""
    ids = search_ids(store, terms, keys=keys)
    return load(store, ids, keys=keys) or []
