import asyncio

import pytest

from app.core.config import Settings
from domains.core import (
    ApplicationError,
    ConfigurationError,
    ErrorCategory,
    NoteNotFoundError,
    ServiceRegistry,
    StoreUnavailableError,
    get_service_registry,
    register_core_services,
    reset_service_registry,
)
from domains.infra.kv import MemoryKVStore
from domains.note_hub import NoteService


class ClosableStore(MemoryKVStore):
    def __init__(self):
        super().__init__()
        self.closed = False

    async def close(self):
        self.closed = True


def test_registry_creates_lazily_in_dependency_order():
    registry = ServiceRegistry()
    created = []

    def make_a():
        created.append("a")
        return "A"

    def make_b():
        created.append("b")
        return registry.get("a") + "B"

    registry.register("a", make_a)
    registry.register("b", make_b)

    assert created == []
    assert registry.get("b") == "AB"
    assert registry.get("b") == "AB"
    assert created == ["b", "a"]
    assert registry.initialized_services == ["a", "b"]


def test_registry_unknown_service():
    with pytest.raises(KeyError):
        ServiceRegistry().get("missing")


def test_registry_set_overrides_instance():
    registry = ServiceRegistry()
    registry.register("kv_store", lambda: pytest.fail("factory should not run"))
    store = MemoryKVStore()

    registry.set("kv_store", store)

    assert registry.get("kv_store") is store
    assert "kv_store" in registry


def test_registry_shutdown_closes_in_reverse_creation_order():
    registry = ServiceRegistry()
    order = []

    async def close_a(_):
        order.append("a")

    registry.register("a", lambda: object(), close=close_a)
    registry.register("b", lambda: registry.get("a") and object(), close=lambda _: order.append("b"))
    registry.get("b")

    asyncio.run(registry.shutdown())

    assert order == ["b", "a"]
    assert registry.initialized_services == []


def test_registry_shutdown_skips_injected_instances():
    registry = ServiceRegistry()
    store = ClosableStore()
    registry.set("kv_store", store)

    asyncio.run(registry.shutdown())

    assert not store.closed


def test_reset_registry_closes_registered_store(monkeypatch):
    store = ClosableStore()
    monkeypatch.setattr("domains.infra.kv.MemoryKVStore", lambda: store)
    register_core_services(Settings(KV_BACKEND="memory")).get("note_service")

    reset_service_registry()

    assert store.closed
    assert get_service_registry().initialized_services == []


def test_register_core_services_wires_note_service(fresh_registry):
    registry = register_core_services(Settings(KV_BACKEND="memory", KV_KEY_PREFIX="t:"))

    service = registry.get("note_service")

    assert isinstance(service, NoteService)
    assert isinstance(registry.get("kv_store"), MemoryKVStore)
    assert service.store.key_prefix == "t:"


def test_register_core_services_keeps_injected_store(fresh_registry):
    store = ClosableStore()
    fresh_registry.set("kv_store", store)

    registry = register_core_services(Settings())

    assert registry.get("note_service").store.kv is store


def test_registered_kv_store_is_closed_on_shutdown(fresh_registry, monkeypatch):
    store = ClosableStore()
    monkeypatch.setattr("domains.infra.kv.MemoryKVStore", lambda: store)

    registry = register_core_services(Settings(KV_BACKEND="memory"))
    registry.get("note_service")
    asyncio.run(registry.shutdown())

    assert store.closed


def test_unknown_backend_fails_on_first_use(fresh_registry):
    registry = register_core_services(Settings(KV_BACKEND="nope"))

    with pytest.raises(ConfigurationError):
        registry.get("note_service")


# =============================================================================
# Error taxonomy
# =============================================================================

@pytest.mark.parametrize("error,status", [
    (NoteNotFoundError("abc"), 404),
    (StoreUnavailableError("get", "note:abc"), 502),
    (ConfigurationError("KV_BACKEND", "bad"), 500),
])
def test_error_status_mapping(error, status):
    assert isinstance(error, ApplicationError)
    assert error.http_status_code == status


def test_store_unavailable_details():
    error = StoreUnavailableError("put", "note:abc")

    assert error.category == ErrorCategory.EXTERNAL
    assert error.message == "Storage unavailable"
    assert error.to_dict()["details"] == {"service": "kv_store", "operation": "put", "key": "note:abc"}
    assert str(error) == "[EXTERNAL_SERVICE_ERROR] Storage unavailable"


def test_settings_defaults():
    settings = Settings()

    assert settings.KV_KEY_PREFIX == "note:"
    assert settings.NOTE_ID_MAX_LENGTH == 64
    assert settings.GENERATED_ID_LENGTH == 5
    assert settings.SYNC_INTERVAL_MS == 1000


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("KV_BACKEND", "redis")
    monkeypatch.setenv("SYNC_INTERVAL_MS", "2000")

    settings = Settings()

    assert settings.KV_BACKEND == "redis"
    assert settings.SYNC_INTERVAL_MS == 2000
