"""Key-value store adapters, driven with asyncio.run (no live Redis needed)."""

import asyncio
from types import SimpleNamespace

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from domains.core import ConfigurationError, StoreUnavailableError
from domains.infra.kv import MemoryKVStore, RedisKVStore, create_kv_store


class StubRedis:
    """Minimal stand-in for a redis.asyncio client."""

    def __init__(self, error=None):
        self.data = {}
        self.error = error
        self.closed = False

    async def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    async def get(self, key):
        await self._maybe_fail()
        return self.data.get(key)

    async def set(self, key, value):
        await self._maybe_fail()
        self.data[key] = value

    async def delete(self, key):
        await self._maybe_fail()
        self.data.pop(key, None)

    async def ping(self):
        await self._maybe_fail()
        return True

    async def aclose(self):
        self.closed = True


# =============================================================================
# MemoryKVStore
# =============================================================================

def test_memory_store_get_put_delete():
    async def scenario():
        store = MemoryKVStore()
        assert await store.get("note:a") is None
        await store.put("note:a", "hello")
        assert await store.get("note:a") == "hello"
        await store.put("note:a", "bye")
        assert await store.get("note:a") == "bye"
        await store.delete("note:a")
        assert await store.get("note:a") is None

    asyncio.run(scenario())


def test_memory_store_delete_is_idempotent():
    async def scenario():
        store = MemoryKVStore()
        await store.delete("note:missing")
        await store.delete("note:missing")
        return len(store)

    assert asyncio.run(scenario()) == 0


def test_memory_store_initial_data_and_ping():
    store = MemoryKVStore({"note:x": "1"})

    assert store.keys() == ["note:x"]
    assert asyncio.run(store.ping()) is True


def test_memory_store_async_context_manager():
    async def scenario():
        async with MemoryKVStore() as store:
            await store.put("k", "v")
            return await store.get("k")

    assert asyncio.run(scenario()) == "v"


# =============================================================================
# RedisKVStore
# =============================================================================

def test_redis_store_round_trip_with_stub_client():
    client = StubRedis()
    store = RedisKVStore(client=client)

    async def scenario():
        await store.put("note:a", "hello\nworld")
        value = await store.get("note:a")
        await store.delete("note:a")
        await store.delete("note:a")
        return value

    assert asyncio.run(scenario()) == "hello\nworld"
    assert client.data == {}


@pytest.mark.parametrize("operation,args", [
    ("get", ("note:a",)),
    ("put", ("note:a", "v")),
    ("delete", ("note:a",)),
])
@pytest.mark.parametrize("error", [
    RedisConnectionError("connection refused"),
    RedisTimeoutError("timed out"),
    OSError("network unreachable"),
])
def test_redis_failures_become_store_unavailable(operation, args, error):
    store = RedisKVStore(client=StubRedis(error=error))

    with pytest.raises(StoreUnavailableError) as exc_info:
        asyncio.run(getattr(store, operation)(*args))

    exc = exc_info.value
    assert exc.http_status_code == 502
    assert exc.operation == operation
    assert exc.key == "note:a"
    assert exc.cause is error
    assert exc.__cause__ is error


def test_redis_ping_reports_failure_without_raising():
    store = RedisKVStore(client=StubRedis(error=RedisConnectionError("down")))
    assert asyncio.run(store.ping()) is False


def test_redis_close_closes_client():
    client = StubRedis()
    asyncio.run(RedisKVStore(client=client).close())
    assert client.closed


def test_redis_store_builds_client_from_url_lazily():
    store = RedisKVStore("redis://example.invalid:6390/2")

    assert store.redis_url == "redis://example.invalid:6390/2"
    assert store.backend_name == "redis"


# =============================================================================
# Factory
# =============================================================================

def _settings(**overrides):
    values = {
        "KV_BACKEND": "memory",
        "REDIS_URL": "redis://localhost:6379/0",
        "REDIS_SOCKET_TIMEOUT": 1.0,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_factory_memory_backend():
    assert isinstance(create_kv_store(_settings()), MemoryKVStore)


def test_factory_redis_backend():
    store = create_kv_store(_settings(KV_BACKEND="Redis", REDIS_URL="redis://cache:6379/1"))

    assert isinstance(store, RedisKVStore)
    assert store.redis_url == "redis://cache:6379/1"


def test_factory_unknown_backend():
    with pytest.raises(ConfigurationError) as exc_info:
        create_kv_store(_settings(KV_BACKEND="dynamo"))
    assert "KV_BACKEND" in exc_info.value.message
