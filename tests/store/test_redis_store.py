import json
from datetime import datetime, timezone

import pytest
import redis

from codenotes.store import SERVER_TIMESTAMP, RedisDocumentStore, StoreConfig, StoreError


class _FakePipeline:
    def __init__(self, client):
        self.client = client
        self.ops = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_exc):
        return False

    def set(self, key, value):
        self.ops.append(("set", key, value))
        return self

    def zadd(self, key, mapping):
        self.ops.append(("zadd", key, mapping))
        return self

    def delete(self, key):
        self.ops.append(("delete", key))
        return self

    def zrem(self, key, member):
        self.ops.append(("zrem", key, member))
        return self

    async def execute(self):
        for op in self.ops:
            name, key, *rest = op
            if name == "set":
                self.client.values[key] = rest[0].encode("utf-8")
            elif name == "zadd":
                self.client.indexes.setdefault(key, {}).update(rest[0])
            elif name == "delete":
                self.client.values.pop(key, None)
            elif name == "zrem":
                self.client.indexes.get(key, {}).pop(rest[0], None)
        return [True] * len(self.ops)


class _FakeAsyncRedis:
    def __init__(self, *, now=1_704_110_400, error=None):
        self.values = {}
        self.indexes = {}
        self.now = now
        self.error = error
        self.closed = False
        self.range_calls = []

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    async def time(self):
        self._maybe_fail()
        self.now += 1
        return self.now, 250_000

    def pipeline(self, transaction=True):
        return _FakePipeline(self)

    async def _range(self, key, start, end, reverse):
        self._maybe_fail()
        self.range_calls.append((key, start, end, reverse))
        members = sorted(self.indexes.get(key, {}).items(), key=lambda item: item[1], reverse=reverse)
        ids = [member.encode("utf-8") for member, _score in members]
        return ids[start:] if end == -1 else ids[start : end + 1]

    async def zrange(self, key, start, end):
        return await self._range(key, start, end, reverse=False)

    async def zrevrange(self, key, start, end):
        return await self._range(key, start, end, reverse=True)

    async def mget(self, keys):
        self._maybe_fail()
        return [self.values.get(key) for key in keys]

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return _FakeAsyncRedis()


@pytest.fixture
def store(fake_redis):
    return RedisDocumentStore(fake_redis, namespace="test")


@pytest.mark.asyncio
async def test_add_writes_json_document_and_index(store, fake_redis):
    doc_id = await store.add("notes", {"date": "2024-01-01", "code": "x", "timestamp": SERVER_TIMESTAMP})

    raw = fake_redis.values[f"test:notes:doc:{doc_id}"]
    payload = json.loads(raw)
    assert payload["date"] == "2024-01-01"
    assert payload["timestamp"] == {"$timestamp": "2024-01-01T12:00:01.250000+00:00"}
    assert fake_redis.indexes["test:notes:index"][doc_id] == pytest.approx(1_704_110_401.25)


@pytest.mark.asyncio
async def test_query_decodes_timestamps_and_orders_descending(store):
    first = await store.add("notes", {"code": "a", "timestamp": SERVER_TIMESTAMP})
    second = await store.add("notes", {"code": "b", "timestamp": SERVER_TIMESTAMP})

    documents = await store.query("notes", order_by="timestamp", descending=True)

    assert [doc.id for doc in documents] == [second, first]
    assert documents[0].data["timestamp"] == datetime(2024, 1, 1, 12, 0, 2, 250_000, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_query_without_ordering_pushes_limit_to_index(store, fake_redis):
    await store.add("notes", {"code": "a"})
    await store.add("notes", {"code": "b"})

    documents = await store.query("notes", limit=1)

    assert len(documents) == 1
    assert fake_redis.range_calls[-1] == ("test:notes:index", 0, 0, False)


@pytest.mark.asyncio
async def test_query_skips_index_entries_without_documents(store, fake_redis):
    kept = await store.add("notes", {"code": "a"})
    fake_redis.indexes["test:notes:index"]["ghost"] = 0.0

    documents = await store.query("notes")

    assert [doc.id for doc in documents] == [kept]


@pytest.mark.asyncio
async def test_query_on_empty_collection_skips_mget(store):
    assert await store.query("notes") == []
    assert await store.query("notes", limit=0) == []


@pytest.mark.asyncio
async def test_delete_removes_document_and_index_entry(store, fake_redis):
    doc_id = await store.add("notes", {"code": "a"})

    await store.delete("notes", doc_id)

    assert fake_redis.values == {}
    assert fake_redis.indexes["test:notes:index"] == {}


@pytest.mark.asyncio
async def test_redis_errors_become_store_errors():
    store = RedisDocumentStore(_FakeAsyncRedis(error=redis.ConnectionError("Connection refused")))

    with pytest.raises(StoreError) as excinfo:
        await store.query("notes", limit=1)

    assert excinfo.value.message == "Connection refused"
    assert excinfo.value.code == "unavailable"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "code"),
    [
        (redis.AuthenticationError("invalid password"), "permission-denied"),
        (redis.TimeoutError("Timeout reading from socket"), "unavailable"),
        (redis.ResponseError("WRONGTYPE Operation against a key"), "internal"),
    ],
)
async def test_redis_error_codes(error, code):
    store = RedisDocumentStore(_FakeAsyncRedis(error=error))

    with pytest.raises(StoreError) as excinfo:
        await store.add("notes", {"code": "x"})

    assert excinfo.value.code == code
    assert excinfo.value.message == str(error)


@pytest.mark.asyncio
async def test_close_closes_client(store, fake_redis):
    await store.close()

    assert fake_redis.closed


def test_from_config_uses_url(monkeypatch):
    captured = {}

    def _from_url(url, **kwargs):
        captured["url"] = url
        captured["kwargs"] = kwargs
        return _FakeAsyncRedis()

    monkeypatch.setattr("codenotes.store.redis_store.aioredis.Redis.from_url", _from_url)

    store = RedisDocumentStore.from_config(
        StoreConfig(url="redis://cache:6379/2", namespace="ns", socket_timeout=2.5)
    )

    assert captured == {"url": "redis://cache:6379/2", "kwargs": {"socket_timeout": 2.5}}
    assert store.namespace == "ns"
