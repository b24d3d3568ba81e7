# subcomplete/DB/memory_store.py
from __future__ import annotations
import fnmatch
import threading
from typing import Dict, Iterable, List, Optional, Sequence

from .api import StoreBase, resolve_range


class MemoryStore(StoreBase):
    """Simple in-memory key-value store (useful for tests or ephemeral runs)."""

    def __init__(self) -> None:
        self._counters: Dict[str, int] = {}
        self._hashes: Dict[str, Dict[str, str]] = {}
        self._zsets: Dict[str, Dict[str, float]] = {}
        self._lock = threading.Lock()

    # ---- keys ----
    def exists(self, key: str) -> bool:
        return key in self._counters or key in self._hashes or key in self._zsets

    def delete(self, key: str) -> None:
        self._counters.pop(key, None)
        self._hashes.pop(key, None)
        self._zsets.pop(key, None)

    def delete_matching(self, pattern: str) -> int:
        n = 0
        for space in (self._counters, self._hashes, self._zsets):
            for key in [k for k in space if fnmatch.fnmatchcase(k, pattern)]:
                del space[key]; n += 1
        return n

    # ---- hash ----
    def hash_set(self, key: str, field: str, value: str) -> None:
        self._hashes.setdefault(key, {})[field] = value

    def hash_get_many(self, key: str, fields: Sequence[str]) -> List[Optional[str]]:
        h = self._hashes.get(key, {})
        return [h.get(f) for f in fields]

    # ---- counter ----
    def increment(self, key: str) -> int:
        with self._lock:
            value = self._counters.get(key, 0) + 1
            self._counters[key] = value
            return value

    # ---- ordered set ----
    def ordered_set_add(self, key: str, member: str, weight: float = 0) -> None:
        self._zsets.setdefault(key, {})[member] = weight

    def ordered_set_add_many(self, keys: Iterable[str], member: str, weight: float = 0) -> None:
        for key in keys:
            self.ordered_set_add(key, member, weight)

    def ordered_set_range(self, key: str, start: int = 0, stop: int = -1) -> List[str]:
        z = self._zsets.get(key)
        if not z:
            return []
        ordered = sorted(z, key=lambda m: (z[m], m))
        lo, hi = resolve_range(len(ordered), start, stop)
        return ordered[lo:hi]

    def ordered_set_intersect_store(self, dest: str, keys: Sequence[str]) -> int:
        sources = [self._zsets.get(k, {}) for k in keys]
        result: Dict[str, float] = {}
        if sources:
            common = set(sources[0]).intersection(*sources[1:])
            result = {m: sum(s[m] for s in sources) for m in common}
        self._zsets.pop(dest, None)
        if result:
            self._zsets[dest] = result
        return len(result)

    def close(self) -> None:
        self._counters.clear()
        self._hashes.clear()
        self._zsets.clear()
