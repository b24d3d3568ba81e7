from __future__ import annotations


class SubcompleteError(Exception):
    """Base class for everything the index raises on purpose."""


class IngestError(SubcompleteError, RuntimeError):
    """The corpus could not be read to the end.

    Lines before the failure stay committed; ``committed`` tells how many.
    """

    def __init__(self, path: str, committed: int, reason: str = "") -> None:
        self.path = path
        self.committed = committed
        msg = f"failed reading {path} after {committed} line(s)"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class StorageError(SubcompleteError, RuntimeError):
    """The key-value store failed (connection, timeout, command error)."""


class EmptyQueryError(SubcompleteError, ValueError):
    """complete() was called without any search term."""

    def __init__(self) -> None:
        super().__init__("at least one search term is required")
