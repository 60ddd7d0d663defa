import json
import logging

import pytest
import structlog

from domains.infra.logging import (
    LogConfig,
    LogFormat,
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_current_config,
)


@pytest.fixture
def restore_logging():
    yield
    configure_logging(LogConfig())


def _format(record_msg="hello %s", args=("world",)):
    handler = logging.getLogger().handlers[0]
    record = logging.LogRecord("textpad.test", logging.INFO, __file__, 1, record_msg, args, None)
    return handler.format(record)


def test_log_config_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "console")

    config = LogConfig.from_env(service_name="svc")

    assert config.level == "DEBUG"
    assert config.format == LogFormat.CONSOLE
    assert config.service_name == "svc"


def test_json_format_for_stdlib_records(restore_logging):
    configure_logging(LogConfig(level="INFO", format=LogFormat.JSON, service_name="textpad"))

    payload = json.loads(_format())

    assert payload["event"] == "hello world"
    assert payload["level"] == "info"
    assert payload["logger"] == "textpad.test"
    assert payload["service"] == "textpad"
    assert "timestamp" in payload
    assert get_current_config().format == LogFormat.JSON


def test_single_root_handler(restore_logging):
    configure_logging(LogConfig())
    configure_logging(LogConfig())

    assert len(logging.getLogger().handlers) == 1


def test_request_context_is_merged(restore_logging):
    configure_logging(LogConfig(format=LogFormat.JSON))

    bind_request_context("req12345")
    try:
        payload = json.loads(_format("plain", ()))
    finally:
        clear_request_context()

    assert payload["request_id"] == "req12345"
    assert structlog.contextvars.get_contextvars() == {}
