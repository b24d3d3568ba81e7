# subcomplete/DB/redis_store.py
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

import redis

from .. import config as CFG
from .api import StoreBase


class RedisStore(StoreBase):
    """
    Thin wrapper over a redis client. Every command borrows a connection from
    the client's pool and returns it afterwards; close() tears the pool down.
    """

    errors = (redis.RedisError,)

    def __init__(self, dsn: str | None = None, *, client: "redis.Redis | None" = None) -> None:
        if client is None:
            client = redis.Redis.from_url(
                dsn or CFG.DEFAULT_DSN,
                decode_responses=True,
                socket_timeout=CFG.STORE_TIMEOUT,
                socket_connect_timeout=CFG.STORE_TIMEOUT,
            )
        self.r = client

    # ---- keys ----
    def exists(self, key: str) -> bool:
        return bool(self.r.exists(key))

    def delete(self, key: str) -> None:
        self.r.delete(key)

    def delete_matching(self, pattern: str) -> int:
        # SCAN instead of KEYS / FLUSHDB: neither blocks the server on a large index
        n = 0
        batch: List[str] = []
        for key in self.r.scan_iter(match=pattern, count=CFG.SCAN_BATCH):
            batch.append(key)
            if len(batch) >= CFG.SCAN_BATCH:
                n += self.r.delete(*batch)
                batch = []
        if batch:
            n += self.r.delete(*batch)
        return n

    # ---- hash ----
    def hash_set(self, key: str, field: str, value: str) -> None:
        self.r.hset(key, field, value)

    def hash_get_many(self, key: str, fields: Sequence[str]) -> List[Optional[str]]:
        fields = list(fields)
        if not fields:
            return []
        return self.r.hmget(key, fields)

    # ---- counter ----
    def increment(self, key: str) -> int:
        return int(self.r.incr(key))

    # ---- ordered set ----
    def ordered_set_add(self, key: str, member: str, weight: float = 0) -> None:
        self.r.zadd(key, {member: weight})

    def ordered_set_add_many(self, keys: Iterable[str], member: str, weight: float = 0) -> None:
        pipe = self.r.pipeline(transaction=False)
        for key in keys:
            pipe.zadd(key, {member: weight})
        pipe.execute()

    def ordered_set_range(self, key: str, start: int = 0, stop: int = -1) -> List[str]:
        return list(self.r.zrange(key, start, stop))

    def ordered_set_intersect_store(self, dest: str, keys: Sequence[str]) -> int:
        keys = list(keys)
        if not keys:
            self.r.delete(dest)
            return 0
        return int(self.r.zinterstore(dest, keys))

    # ---- lifecycle ----
    def close(self) -> None:
        self.r.close()
