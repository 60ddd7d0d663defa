"""TextPad ASGI application and the textpad-server command."""

import argparse
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.config import Settings, settings
from app.core.deps import get_kv_store
from app.core.events import create_start_handler, create_stop_handler
from app.core.exceptions import NO_STORE_HEADERS, register_exception_handlers
from app.routes.router import api_router
from domains.infra.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    每个请求一条 http_request 日志（处理抛异常时为 http_request_error）。

    请求 ID 绑定到 structlog contextvars，处理过程中的日志都带上它。
    skip_paths 中的路径（健康检查、favicon）不记录。
    """

    def __init__(self, app, skip_paths: Optional[set[str]] = None):
        super().__init__(app)
        self.skip_paths = {"/favicon.ico"} | (skip_paths or set())

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        bind_request_context(uuid.uuid4().hex[:8])
        started = time.perf_counter()
        fields = {
            "method": request.method,
            "path": request.url.path,
            "raw": "raw" in request.query_params,
            "user_agent": request.headers.get("user-agent", "")[:100],
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "http_request_error",
                **fields,
                elapsed_ms=_elapsed_ms(started),
                error_type=type(e).__name__,
            )
            raise
        else:
            logger.info(
                "http_request",
                **fields,
                status_code=response.status_code,
                elapsed_ms=_elapsed_ms(started),
            )
            return response
        finally:
            clear_request_context()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register services on startup, close them on shutdown."""
    await create_start_handler()()
    yield
    await create_stop_handler()()


def create_application(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="Minimal web notepad backed by a key-value store",
        version=app_settings.VERSION,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware, skip_paths={app_settings.HEALTH_PATH})

    # Health check must be registered before the catch-all note routes
    @app.get(app_settings.HEALTH_PATH)
    async def health_check(kv_store=Depends(get_kv_store)):
        healthy = await kv_store.ping()
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "unhealthy",
                "version": app_settings.VERSION,
                "kv_backend": kv_store.backend_name,
            },
            headers=NO_STORE_HEADERS,
        )

    app.include_router(api_router)

    register_exception_handlers(app)

    return app


configure_logging(service_name="textpad")

app = create_application()


def run(argv: Optional[list[str]] = None) -> None:
    """Command-line entry point: serve the app with uvicorn."""
    parser = argparse.ArgumentParser(
        description="TextPad - minimal web notepad server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
    %(prog)s                            # 使用 .env / 环境变量中的配置
    %(prog)s --host 0.0.0.0 --port 8080
    KV_BACKEND=redis REDIS_URL=redis://cache:6379/0 %(prog)s
        """
    )
    parser.add_argument("--host", default=settings.HOST, help="监听地址")
    parser.add_argument("--port", type=int, default=settings.PORT, help="监听端口")
    parser.add_argument("--reload", action="store_true", help="代码变更时自动重载（开发用）")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn 日志级别",
    )
    args = parser.parse_args(argv)

    logger.info("server_starting", host=args.host, port=args.port, kv_backend=settings.KV_BACKEND)

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
