from __future__ import annotations
import logging
from typing import Optional

from .DB.api import KeyValueStore
from .models import DEFAULT_KEYS, KeyLayout

log = logging.getLogger(__name__)


def clean(store: KeyValueStore, *, keys: Optional[KeyLayout] = None) -> int:
    """
    Remove the whole index: document hash, id counter, every postings list and
    any scratch key a crashed query left behind. Safe to call on an empty store.
    Returns the number of postings/scratch keys removed.
    """
    keys = keys or DEFAULT_KEYS
    log.debug("Cleaning index namespace %s", keys.prefix)
    # FLUSHDB would be faster but also wipes foreign keys (and times out on big dbs)
    store.delete(keys.documents)
    store.delete(keys.next_id)
    n = store.delete_matching(keys.terms_pattern)
    n += store.delete_matching(keys.scratch_pattern)
    log.info("Removed %d term keys under %s", n, keys.prefix)
    return n
