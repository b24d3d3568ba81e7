# subcomplete/DB/api.py
from __future__ import annotations
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, Type


class KeyValueStore(Protocol):
    # native exceptions of the backend (mapped to StorageError by the engine)
    errors: Tuple[Type[BaseException], ...]

    # keys
    def exists(self, key: str) -> bool: ...
    def delete(self, key: str) -> None: ...
    def delete_matching(self, pattern: str) -> int: ...
    # hash
    def hash_set(self, key: str, field: str, value: str) -> None: ...
    def hash_get_many(self, key: str, fields: Sequence[str]) -> List[Optional[str]]: ...
    # counter
    def increment(self, key: str) -> int: ...
    # ordered set
    def ordered_set_add(self, key: str, member: str, weight: float = 0) -> None: ...
    def ordered_set_add_many(self, keys: Iterable[str], member: str, weight: float = 0) -> None: ...
    def ordered_set_range(self, key: str, start: int = 0, stop: int = -1) -> List[str]: ...
    def ordered_set_intersect_store(self, dest: str, keys: Sequence[str]) -> int: ...
    # lifecycle
    def close(self) -> None: ...


class StoreBase:
    """Shared plumbing: context manager + inclusive/negative range resolution."""

    errors: Tuple[Type[BaseException], ...] = ()

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        pass


def resolve_range(size: int, start: int, stop: int) -> Tuple[int, int]:
    """
    Turn inclusive, possibly negative (start, stop) into a half-open [lo, hi)
    window over a sequence of `size` items; (0, -1) covers everything.
    """
    if start < 0:
        start = max(size + start, 0)
    if stop < 0:
        stop = size + stop
    stop = min(stop, size - 1)
    if start > stop or start >= size:
        return 0, 0
    return start, stop + 1


def make_store(dsn: str) -> KeyValueStore:
    """
    Factory:
      - memory://               -> MemoryStore (process local, tests / demos)
      - sqlite:///path          -> SQLiteStore (sqlite:///:memory: works too)
      - redis://host:port/db    -> RedisStore (db number selects the database)
    """
    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    if dsn.startswith("sqlite:///"):
        from .sqlite_store import SQLiteStore
        return SQLiteStore(dsn.removeprefix("sqlite:///"))

    if dsn.startswith(("redis://", "rediss://", "unix://")):
        # Lazy import: redis is only needed when talking to a server
        from .redis_store import RedisStore
        return RedisStore(dsn)

    raise ValueError(f"Unsupported store DSN: {dsn}")
