"""
键值存储基类

笔记服务只依赖三个操作：get / put / delete。
持久性、一致性和并发写入的冲突解决（最后写入者胜出）全部交给后端存储，
本层不做任何重试或乐观锁。
"""

from abc import ABC, abstractmethod
from typing import Optional


class KVStore(ABC):
    """
    键值存储抽象接口

    约定:
    - 值为原始文本（UTF-8 字符串）
    - get 未命中返回 None
    - delete 幂等，删除不存在的键不报错
    - 后端故障统一抛出 StoreUnavailableError

    使用示例:
        store = MemoryKVStore()
        await store.put("note:abc12", "hello")
        await store.get("note:abc12")   # "hello"
        await store.delete("note:abc12")
    """

    #: 后端名称（用于日志和健康检查）
    backend_name: str = ""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """读取键值，未命中返回 None"""

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """写入（覆盖）键值"""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """删除键，不存在时静默返回"""

    async def ping(self) -> bool:
        """检查后端是否可用"""
        return True

    async def close(self) -> None:
        """释放连接等资源"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
