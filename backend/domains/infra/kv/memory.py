"""进程内键值存储，用于本地开发和测试。重启后数据丢失。"""

from typing import Dict, Optional

from .base import KVStore


class MemoryKVStore(KVStore):
    """基于 dict 的内存存储"""

    backend_name = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """当前所有键（调试用）"""
        return list(self._data.keys())

    def __len__(self) -> int:
        return len(self._data)
