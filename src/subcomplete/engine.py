# subcomplete/engine.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from . import config as CFG
from . import indexer, maintenance, search
from .DB.api import KeyValueStore, make_store
from .errors import StorageError
from .models import DEFAULT_KEYS, KeyLayout

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - a key-value store (memory, SQLite or redis) picked by DSN,
      - the index builder (indexer.ingest / ingest_file),
      - the query engine (search.complete / load),
      - maintenance (maintenance.clean).

    Public API (used by CLI/Flask):
      * ingest(lines) / ingest_file(path): load the corpus once
      * complete(*terms):                  matching documents (AND over terms)
      * search_ids(*terms), load(*ids):    the two halves of complete()
      * clean():                           drop every index key
      * shutdown():                        close the store

    The engine owns its store for its whole life; use it as a context manager
    so the store is released on every exit path:

        with Engine("sqlite:///./index.sqlite") as eng:
            eng.ingest_file("names.txt")
            eng.complete("Ot", "Be")

    Backend failures surface as StorageError, never as an empty result.
    """

    # ------------- lifecycle -------------

    def __init__(self, dsn: Optional[str] = None, *, keys: Optional[KeyLayout] = None,
                 store: Optional[KeyValueStore] = None) -> None:
        self.keys = keys or DEFAULT_KEYS
        if store is None:
            self.dsn = dsn or CFG.DEFAULT_DSN
            log.info("Initializing store: %s", self.dsn)
            store = make_store(self.dsn)
        else:
            self.dsn = dsn or type(store).__name__
        self._store: Optional[KeyValueStore] = store

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    @property
    def store(self) -> KeyValueStore:
        if self._store is None:
            raise RuntimeError("Engine is shut down.")
        return self._store

    # ------------- ingestion -------------

    def loaded(self) -> bool:
        with self._storage_errors("exists"):
            return self.store.exists(self.keys.documents)

    def ingest(self, lines: Iterable[str]) -> int:
        with self._storage_errors("ingest"):
            return indexer.ingest(self.store, lines, keys=self.keys)

    def ingest_file(self, path: str) -> int:
        with self._storage_errors("ingest"):
            return indexer.ingest_file(self.store, path, keys=self.keys)

    # ------------- query -------------

    def search_ids(self, *terms: str) -> List[str]:
        with self._storage_errors("search"):
            return search.search_ids(self.store, terms, keys=self.keys)

    def load(self, *ids: str) -> Optional[List[Optional[str]]]:
        with self._storage_errors("load"):
            return search.load(self.store, ids, keys=self.keys)

    def complete(self, *terms: str) -> List[Optional[str]]:
        with self._storage_errors("complete"):
            return search.complete(self.store, terms, keys=self.keys)

    # ------------- maintenance -------------

    def clean(self) -> int:
        with self._storage_errors("clean"):
            return maintenance.clean(self.store, keys=self.keys)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self._store is not None:
                self._store.close()
        finally:
            self._store = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    @contextmanager
    def _storage_errors(self, op: str) -> Iterator[None]:
        """Re-raise the backend's native exceptions as StorageError."""
        errors = getattr(self.store, "errors", ())
        try:
            yield
        except errors as e:
            log.error("%s failed on %s: %s", op, self.dsn, e)
            raise StorageError(f"{op} failed: {e}") from e
