"""Exception handling for FastAPI routes.

统一异常处理，集成 domains.core 的 ApplicationError 体系。

所有错误都以纯文本返回（笔记服务的客户端是浏览器脚本和 curl，
不消费 JSON 错误体），并带 Cache-Control: no-store。
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domains.core import ApplicationError, ErrorCategory

logger = logging.getLogger(__name__)

NO_STORE_HEADERS = {"Cache-Control": "no-store"}


def error_response(message: str, status_code: int) -> PlainTextResponse:
    """Plain-text error response with caching disabled."""
    return PlainTextResponse(message, status_code=status_code, headers=NO_STORE_HEADERS)


def register_exception_handlers(app: FastAPI) -> None:
    """
    注册 FastAPI 异常处理器

    - ApplicationError 及其子类: 使用其 HTTP 状态码（400 / 404 / 502 ...）
    - HTTPException: 保留状态码，转为纯文本
    - 其他异常: 500
    """

    @app.exception_handler(ApplicationError)
    async def application_error_handler(
        request: Request,
        exc: ApplicationError
    ) -> PlainTextResponse:
        """处理 ApplicationError 及其子类"""
        # 存储故障记 error，非法 ID 与 raw 404 记 warning
        level = logging.ERROR if exc.category == ErrorCategory.EXTERNAL else logging.WARNING
        logger.log(
            level,
            f"{request.method} {request.url.path} -> {exc.http_status_code} {exc}",
            extra={"error": exc.to_dict()},
        )

        return error_response(exc.message, exc.http_status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException
    ) -> PlainTextResponse:
        """处理 FastAPI / Starlette 抛出的 HTTPException（如 405）"""
        response = error_response(str(exc.detail), exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> PlainTextResponse:
        """全局异常处理器 - 捕获所有未处理的异常"""
        logger.exception(
            f"Unhandled exception: {type(exc).__name__}: {exc}",
            extra={
                "path": request.url.path,
                "method": request.method,
            }
        )

        return error_response("Internal Server Error", 500)
