"""Shared pytest configuration and fixtures for the TextPad test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the backend directory is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
BACKEND_ROOT = PROJECT_ROOT / "backend"
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from domains.core import StoreUnavailableError, get_service_registry, reset_service_registry  # noqa: E402
from domains.infra.kv import KVStore, MemoryKVStore  # noqa: E402


# =============================================================================
# Test doubles
# =============================================================================

class FailingKVStore(KVStore):
    """Backend whose every operation fails like an unreachable Redis."""

    backend_name = "failing"

    async def get(self, key):
        raise StoreUnavailableError("get", key)

    async def put(self, key, value):
        raise StoreUnavailableError("put", key)

    async def delete(self, key):
        raise StoreUnavailableError("delete", key)

    async def ping(self):
        return False


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_registry():
    """Every test starts with an empty service registry."""
    reset_service_registry()
    yield get_service_registry()
    reset_service_registry()


@pytest.fixture
def kv_store(fresh_registry) -> MemoryKVStore:
    store = MemoryKVStore()
    fresh_registry.set("kv_store", store)
    return store


@pytest.fixture
def app(kv_store):
    from app.main import create_application
    return create_application()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_kv_store():
    return FailingKVStore()


@pytest.fixture
def failing_client(fresh_registry, failing_kv_store):
    from app.main import create_application

    fresh_registry.set("kv_store", failing_kv_store)
    with TestClient(create_application()) as test_client:
        yield test_client
