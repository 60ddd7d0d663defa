"""
键值存储适配器

- MemoryKVStore: 进程内存储（开发 / 测试）
- RedisKVStore: Redis 托管存储（生产）

后端由配置项 KV_BACKEND 选择。
"""

from domains.core.exceptions import ConfigurationError

from .base import KVStore
from .memory import MemoryKVStore
from .redis_store import RedisKVStore

KV_BACKENDS = ("memory", "redis")


def create_kv_store(settings) -> KVStore:
    """
    根据配置创建键值存储

    Raises:
        ConfigurationError: KV_BACKEND 不是已知后端
    """
    backend = (settings.KV_BACKEND or "").strip().lower()

    if backend == "memory":
        return MemoryKVStore()
    if backend == "redis":
        return RedisKVStore(
            redis_url=settings.REDIS_URL,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )

    raise ConfigurationError(
        "KV_BACKEND",
        f"未知的存储后端 {settings.KV_BACKEND!r}，可选: {', '.join(KV_BACKENDS)}",
    )


__all__ = [
    "KVStore",
    "MemoryKVStore",
    "RedisKVStore",
    "KV_BACKENDS",
    "create_kv_store",
]
