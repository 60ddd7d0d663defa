"""
Redis 键值存储

基于 redis.asyncio 的托管键值后端。连接失败、超时或服务端错误统一转换为
StoreUnavailableError，由 HTTP 层映射为 502，不做重试。
"""

import logging
import os
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from domains.core.exceptions import StoreUnavailableError

from .base import KVStore

logger = logging.getLogger(__name__)


class RedisKVStore(KVStore):
    """
    Redis 存储

    使用示例:
        store = RedisKVStore("redis://localhost:6379/0")
        await store.put("note:abc12", "hello")
        await store.close()
    """

    backend_name = "redis"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        socket_timeout: Optional[float] = 5.0,
        client: Any = None,
    ):
        """
        Args:
            redis_url: Redis 连接 URL，默认从环境变量 REDIS_URL 获取
            socket_timeout: 单次命令超时（秒）
            client: 预先构造的 redis.asyncio 客户端（测试时注入）
        """
        self.redis_url = redis_url or os.getenv("REDIS_URL", "redis://localhost:6379/0")
        if client is None:
            client = redis.from_url(
                self.redis_url,
                decode_responses=True,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
            )
        self._redis = client

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(key)
        except (RedisError, OSError) as e:
            raise self._unavailable("get", key, e) from e

    async def put(self, key: str, value: str) -> None:
        try:
            await self._redis.set(key, value)
        except (RedisError, OSError) as e:
            raise self._unavailable("put", key, e) from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except (RedisError, OSError) as e:
            raise self._unavailable("delete", key, e) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except (RedisError, OSError) as e:
            logger.warning(f"Redis ping 失败: {e}")
            return False

    async def close(self) -> None:
        await self._redis.aclose()

    def _unavailable(self, operation: str, key: str, error: Exception) -> StoreUnavailableError:
        logger.error(f"Redis {operation} 失败: key={key}, {type(error).__name__}: {error}")
        return StoreUnavailableError(operation, key, cause=error)
