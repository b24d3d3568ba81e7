from pathlib import Path
import pytest

from subcomplete.engine import Engine
from subcomplete.DB.memory_store import MemoryStore
from subcomplete.DB.sqlite_store import SQLiteStore


@pytest.fixture(params=["memory", "sqlite", "redis"])
def store(request, tmp_path: Path):
    """One instance of every storage backend; redis runs on fakeredis when installed."""
    if request.param == "memory":
        s = MemoryStore()
    elif request.param == "sqlite":
        s = SQLiteStore(str(tmp_path / "index.sqlite"))
    else:
        fakeredis = pytest.importorskip("fakeredis")
        from subcomplete.DB.redis_store import RedisStore
        s = RedisStore(client=fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True))
    yield s
    s.close()


@pytest.fixture
def engine(store):
    eng = Engine(store=store)
    yield eng
    eng.shutdown()
