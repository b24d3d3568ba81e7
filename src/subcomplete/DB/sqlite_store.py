# subcomplete/DB/sqlite_store.py
from __future__ import annotations
import os
import sqlite3
import threading
from typing import Iterable, List, Optional, Sequence

from .. import config as CFG
from .api import StoreBase, resolve_range

_SCHEMA = """
CREATE TABLE IF NOT EXISTS counters (
  key TEXT PRIMARY KEY,
  value INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS hashes (
  key TEXT NOT NULL,
  field TEXT NOT NULL,
  value TEXT NOT NULL,
  PRIMARY KEY (key, field)
);
CREATE TABLE IF NOT EXISTS zsets (
  key TEXT NOT NULL,
  member TEXT NOT NULL,
  weight REAL NOT NULL DEFAULT 0,
  PRIMARY KEY (key, member)
);
"""

_TABLES = ("counters", "hashes", "zsets")


class SQLiteStore(StoreBase):
    """
    Key-value primitives on top of a single sqlite file.
    Ordered sets sort by (weight, member) with the default BINARY collation,
    i.e. members compare as byte strings exactly like a redis ZSET with equal scores.
    """

    errors = (sqlite3.Error,)

    def __init__(self, db_path: str) -> None:
        if db_path != ":memory:":
            db_path = os.path.abspath(db_path)
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path, timeout=CFG.STORE_TIMEOUT, check_same_thread=False)
        self._lock = threading.RLock()
        with self._lock:
            self.conn.executescript(_SCHEMA)

    # ---- keys ----
    def exists(self, key: str) -> bool:
        with self._lock:
            for table in _TABLES:
                row = self.conn.execute(f"SELECT 1 FROM {table} WHERE key=? LIMIT 1", (key,)).fetchone()
                if row:
                    return True
            return False

    def delete(self, key: str) -> None:
        with self._lock, self.conn:
            for table in _TABLES:
                self.conn.execute(f"DELETE FROM {table} WHERE key=?", (key,))

    def delete_matching(self, pattern: str) -> int:
        # GLOB uses the same wildcard syntax as redis KEYS/SCAN MATCH
        n = 0
        with self._lock, self.conn:
            for table in _TABLES:
                keys = self.conn.execute(
                    f"SELECT DISTINCT key FROM {table} WHERE key GLOB ?", (pattern,)
                ).fetchall()
                n += len(keys)
                self.conn.execute(f"DELETE FROM {table} WHERE key GLOB ?", (pattern,))
        return n

    # ---- hash ----
    def hash_set(self, key: str, field: str, value: str) -> None:
        with self._lock, self.conn:
            self.conn.execute(
                "INSERT OR REPLACE INTO hashes(key, field, value) VALUES (?,?,?)",
                (key, field, value),
            )

    def hash_get_many(self, key: str, fields: Sequence[str]) -> List[Optional[str]]:
        fields = list(fields)
        if not fields:
            return []
        found = {}
        with self._lock:
            # chunk to stay below SQLITE_MAX_VARIABLE_NUMBER
            for i in range(0, len(fields), 500):
                chunk = fields[i:i + 500]
                marks = ",".join("?" * len(chunk))
                rows = self.conn.execute(
                    f"SELECT field, value FROM hashes WHERE key=? AND field IN ({marks})",
                    (key, *chunk),
                ).fetchall()
                found.update(rows)
        return [found.get(f) for f in fields]

    # ---- counter ----
    def increment(self, key: str) -> int:
        with self._lock, self.conn:
            # fetchall() steps the statement to completion before the commit
            rows = self.conn.execute(
                "INSERT INTO counters(key, value) VALUES (?, 1) "
                "ON CONFLICT(key) DO UPDATE SET value = value + 1 "
                "RETURNING value",
                (key,),
            ).fetchall()
        return int(rows[0][0])

    # ---- ordered set ----
    def ordered_set_add(self, key: str, member: str, weight: float = 0) -> None:
        self.ordered_set_add_many([key], member, weight)

    def ordered_set_add_many(self, keys: Iterable[str], member: str, weight: float = 0) -> None:
        rows = [(k, member, weight) for k in keys]
        if not rows:
            return
        with self._lock, self.conn:
            self.conn.executemany(
                "INSERT INTO zsets(key, member, weight) VALUES (?,?,?) "
                "ON CONFLICT(key, member) DO UPDATE SET weight = excluded.weight",
                rows,
            )

    def ordered_set_range(self, key: str, start: int = 0, stop: int = -1) -> List[str]:
        with self._lock:
            size = self.conn.execute("SELECT COUNT(*) FROM zsets WHERE key=?", (key,)).fetchone()[0]
            lo, hi = resolve_range(size, start, stop)
            if hi <= lo:
                return []
            rows = self.conn.execute(
                "SELECT member FROM zsets WHERE key=? ORDER BY weight, member LIMIT ? OFFSET ?",
                (key, hi - lo, lo),
            ).fetchall()
        return [r[0] for r in rows]

    def ordered_set_intersect_store(self, dest: str, keys: Sequence[str]) -> int:
        sources = list(dict.fromkeys(keys))
        with self._lock, self.conn:
            self.conn.execute("DELETE FROM zsets WHERE key=?", (dest,))
            if not sources:
                return 0
            marks = ",".join("?" * len(sources))
            cur = self.conn.execute(
                f"INSERT INTO zsets(key, member, weight) "
                f"SELECT ?, member, SUM(weight) FROM zsets WHERE key IN ({marks}) "
                f"GROUP BY member HAVING COUNT(DISTINCT key) = ?",
                (dest, *sources, len(sources)),
            )
            return cur.rowcount

    # ---- lifecycle ----
    def close(self) -> None:
        with self._lock:
            self.conn.close()
