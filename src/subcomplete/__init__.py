"""
Substring Autocomplete Index

Builds an inverted index over every contiguous substring of every token of a
corpus of short lines (names, titles, ...) inside a key-value store, so that a
partial prefix or infix typed by a user finds the original lines. Several
partial terms combine with AND semantics.

Storage backends are picked by DSN:
    memory://               process local (tests, demos)
    sqlite:///path.sqlite   single file
    redis://host:6379/0     redis server (the database number selects the db)

Key layout (prefix "acd"):
    acd.nextid       id counter
    acd.dcs          hash: id -> raw line (its existence marks a loaded corpus)
    acd.trm.<term>   ordered set of ids per substring

Example Usage:
    from subcomplete import Engine

    with Engine("sqlite:///./names.sqlite") as eng:
        eng.ingest_file("data/names.txt")
        eng.complete("ott")          # ['Otto Mustermann', ...]
        eng.complete("Ot", "Be")     # documents containing both substrings
        eng.clean()
"""

# src/subcomplete/__init__.py
from .engine import Engine
from .errors import EmptyQueryError, IngestError, StorageError, SubcompleteError
from .models import Document, KeyLayout

__version__ = "1.0.0"
__all__ = [
    "Engine",
    "Document",
    "KeyLayout",
    "SubcompleteError",
    "IngestError",
    "StorageError",
    "EmptyQueryError",
]
