"""
结构化日志配置

应用代码通过 get_logger() 拿到 structlog 日志器，以事件名加关键字字段记录：

    logger.info("note_saved", note_id="abc12", length=42)

uvicorn、redis 以及 logging.getLogger() 产生的标准库日志经由同一个
ProcessorFormatter 渲染，所有输出都是同一种格式：
LOG_FORMAT=json（默认，每行一个 JSON 对象）或 console（开发时阅读）。
请求 ID 放在 contextvars 中，由中间件绑定，自动并入每条日志。
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

DEFAULT_SERVICE_NAME = "textpad"

# 只在 WARNING 以上才值得看的第三方日志器
_QUIET_LOGGERS = ("uvicorn.access", "redis", "httpx")


class LogFormat(str, Enum):
    """日志格式"""
    JSON = "json"
    CONSOLE = "console"


@dataclass
class LogConfig:
    """日志配置"""
    level: str = "INFO"
    format: LogFormat = LogFormat.JSON
    service_name: str = DEFAULT_SERVICE_NAME

    @classmethod
    def from_env(cls, service_name: str = DEFAULT_SERVICE_NAME) -> "LogConfig":
        """读取 LOG_LEVEL / LOG_FORMAT，未知格式按 console 处理"""
        fmt = os.getenv("LOG_FORMAT", LogFormat.JSON.value).lower()
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format=LogFormat.JSON if fmt == LogFormat.JSON.value else LogFormat.CONSOLE,
            service_name=service_name,
        )


_current_config: Optional[LogConfig] = None


def _pre_chain(service_name: str) -> list:
    """structlog 与标准库日志共用的处理器"""

    def tag_service(logger, method_name, event_dict):
        event_dict.setdefault("service", service_name)
        return event_dict

    return [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        tag_service,
    ]


def _renderer(fmt: LogFormat):
    if fmt == LogFormat.JSON:
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(config: Optional[LogConfig] = None, service_name: str = DEFAULT_SERVICE_NAME):
    """
    配置 structlog 和根日志器

    可重复调用：每次都替换根日志器上的处理器，只保留一个 stderr 输出。

    Args:
        config: 日志配置，None 则从环境变量读取
        service_name: config 为 None 时使用的服务名
    """
    global _current_config

    config = config or LogConfig.from_env(service_name=service_name)
    _current_config = config
    level = logging.getLevelName(config.level)
    if not isinstance(level, int):
        level = logging.INFO

    pre_chain = _pre_chain(config.service_name)

    # 最终渲染交给 ProcessorFormatter，structlog 这里只做预处理
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(config.format),
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    logging.getLogger("uvicorn").setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_current_config() -> Optional[LogConfig]:
    """最近一次 configure_logging 使用的配置"""
    return _current_config


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str):
    """开始处理一个请求：丢弃上一个请求的上下文，绑定 request_id"""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request_context():
    structlog.contextvars.clear_contextvars()
