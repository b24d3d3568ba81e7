from __future__ import annotations
import logging
from typing import Iterable, Optional

from . import config as CFG
from .DB.api import KeyValueStore
from .errors import IngestError
from .models import DEFAULT_KEYS, Document, KeyLayout
from .normalize import terms_for_line

log = logging.getLogger(__name__)


def ingest(store: KeyValueStore, lines: Iterable[str], *, keys: Optional[KeyLayout] = None) -> int:
    """
    Load a corpus into the store unless one is already there.

    The document hash doubles as the "corpus loaded" marker: when it exists the
    call is a no-op, nothing is merged or appended. Otherwise every line gets
    the next counter value as id, its raw text goes into the document hash and
    the id is added (weight 0) to the postings list of every term of the line.

    Returns the number of lines indexed (0 when skipped).
    """
    keys = keys or DEFAULT_KEYS
    if store.exists(keys.documents):
        log.info("Key %s already exists, skipping ingestion", keys.documents)
        return 0
    return _ingest_lines(store, lines, keys, _Progress())


def ingest_file(store: KeyValueStore, path: str, *, keys: Optional[KeyLayout] = None,
                encoding: str = "utf-8") -> int:
    """
    ingest() for a newline-delimited text file.
    Read failures abort the run with IngestError; lines already written stay.
    """
    keys = keys or DEFAULT_KEYS
    if store.exists(keys.documents):
        log.info("Key %s already exists, skipping %s", keys.documents, path)
        return 0

    log.info("Loading %s into the store", path)
    progress = _Progress()
    try:
        # binary + per-line decode: a bad byte fails exactly at its own line
        with open(path, "rb") as f:
            lines = (raw.rstrip(b"\r\n").decode(encoding) for raw in f)
            n = _ingest_lines(store, lines, keys, progress)
    except (OSError, UnicodeDecodeError) as e:
        log.error("Error reading %s after %d line(s): %s", path, progress.count, e)
        raise IngestError(path, progress.count, str(e)) from e
    log.info("Loaded %s: documents=%d", path, n)
    return n


class _Progress:
    """Counts committed lines so a failing reader can report how far it got."""

    def __init__(self) -> None:
        self.count = 0

    def tick(self) -> None:
        self.count += 1
        if self.count % CFG.PROGRESS_EVERY_LINES == 0:
            if CFG.VERBOSE:
                print(f"[indexed] documents={self.count:,}")
            log.info("indexed %d documents", self.count)


def _ingest_lines(store: KeyValueStore, lines: Iterable[str], keys: KeyLayout, progress: _Progress) -> int:
    for line in lines:
        doc = Document(store.increment(keys.next_id), line)
        index_document(store, doc, keys=keys)
        progress.tick()
    return progress.count


def index_document(store: KeyValueStore, doc: Document, *, keys: Optional[KeyLayout] = None) -> None:
    """Store the raw text under doc.id and add the id to the postings list of each of its terms."""
    keys = keys or DEFAULT_KEYS
    doc_id = str(doc.id)
    store.hash_set(keys.documents, doc_id, doc.text)
    log.debug("%s - %s", doc_id, doc.text)
    store.ordered_set_add_many((keys.term(t) for t in terms_for_line(doc.text)), doc_id, 0)
