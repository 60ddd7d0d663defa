"""Application lifecycle event handlers.

使用 ServiceRegistry 统一管理生命周期。
"""

from typing import Callable

from app.core.config import get_settings
from domains.core import get_service_registry, register_core_services
from domains.infra.logging import get_logger

logger = get_logger(__name__)


def create_start_handler() -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        settings = get_settings()
        logger.info("api_starting", component="api", version=settings.VERSION)

        # ConfigurationError（如未知的 KV_BACKEND）直接中止启动
        registry = register_core_services(settings)
        kv_store = registry.get("kv_store")
        registry.get("note_service")

        # 存储不可用时仍然启动，请求会得到 502
        if await kv_store.ping():
            logger.info("kv_store_ready", component="kv_store", backend=kv_store.backend_name)
        else:
            logger.warning("kv_store_unreachable", component="kv_store", backend=kv_store.backend_name)

        logger.info(
            "services_initialized",
            component="registry",
            services=registry.initialized_services,
        )
        logger.info("api_started", component="api", status="success")

    return start_app


def create_stop_handler() -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("api_stopping", component="api")

        try:
            registry = get_service_registry()
            await registry.shutdown()
        except Exception as e:
            logger.warning("service_registry_stop_error", component="registry", error=str(e))

        logger.info("api_stopped", component="api", status="success")

    return stop_app
