"""
服务注册表

TextPad 只有一条依赖链：kv_store -> note_store -> note_service。
工厂在首次 get() 时调用，工厂内部自行 get() 所依赖的服务，
因此实例的创建顺序天然就是依赖顺序；shutdown() 按相反顺序关闭。

测试通过 set() 直接注入替身（如 MemoryKVStore），注入的实例不会被关闭。
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]
Closer = Callable[[Any], Any]


class ServiceRegistry:
    """按名称延迟创建并缓存服务实例"""

    def __init__(self):
        self._factories: dict[str, Factory] = {}
        self._closers: dict[str, Closer] = {}
        self._instances: dict[str, Any] = {}

    def register(self, name: str, factory: Factory, close: Closer | None = None) -> "ServiceRegistry":
        """
        注册服务工厂

        Args:
            name: 服务名称
            factory: 无参工厂函数
            close: 关闭函数，接收实例，可返回协程
        """
        self._factories[name] = factory
        if close is not None:
            self._closers[name] = close
        return self

    def get(self, name: str) -> Any:
        """获取服务实例，首次访问时创建。未注册抛出 KeyError"""
        if name in self._instances:
            return self._instances[name]
        if name not in self._factories:
            raise KeyError(f"服务未注册: {name}")

        instance = self._factories[name]()
        self._instances[name] = instance
        logger.debug(f"服务 {name} 已初始化")
        return instance

    def set(self, name: str, instance: Any) -> None:
        """注入现成的实例，跳过工厂"""
        self._instances[name] = instance

    async def shutdown(self) -> None:
        """按创建的逆序关闭服务并清空实例缓存"""
        for name in reversed(list(self._instances)):
            instance = self._instances.pop(name)
            close = self._closers.get(name)
            if close is None:
                continue
            try:
                result = close(instance)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.warning(f"服务 {name} 关闭失败: {e}")
        logger.info("所有服务已关闭")

    @property
    def initialized_services(self) -> list[str]:
        """已创建（或注入）的服务，按创建顺序"""
        return list(self._instances)

    def __contains__(self, name: str) -> bool:
        return name in self._factories or name in self._instances


# ==================== 全局注册表 ====================

_registry: ServiceRegistry | None = None


def get_service_registry() -> ServiceRegistry:
    """获取全局服务注册表"""
    global _registry
    if _registry is None:
        _registry = ServiceRegistry()
    return _registry


def reset_service_registry() -> None:
    """
    丢弃全局注册表（用于测试）

    仍持有实例时先走一遍 shutdown()，保证 Redis 连接池等异步资源被关闭。
    不能在运行中的事件循环里调用。
    """
    global _registry
    if _registry is not None and _registry.initialized_services:
        asyncio.run(_registry.shutdown())
    _registry = None


def register_core_services(settings) -> ServiceRegistry:
    """
    注册 kv_store / note_store / note_service

    settings 为 app.core.config.Settings 实例。
    已存在的名称（包括通过 set() 注入的实例）保持不变。
    """
    from domains.infra.kv import create_kv_store
    from domains.note_hub.core.store import NoteStore
    from domains.note_hub.services import NoteService

    registry = get_service_registry()

    if "kv_store" not in registry:
        registry.register("kv_store", lambda: create_kv_store(settings), close=lambda kv: kv.close())
    if "note_store" not in registry:
        registry.register(
            "note_store",
            lambda: NoteStore(registry.get("kv_store"), key_prefix=settings.KV_KEY_PREFIX),
        )
    if "note_service" not in registry:
        registry.register("note_service", lambda: NoteService(registry.get("note_store")))

    return registry


__all__ = [
    "ServiceRegistry",
    "get_service_registry",
    "reset_service_registry",
    "register_core_services",
]
