from __future__ import annotations

import json
import logging

import pytest

from product_store.app.core.env import get_env
from product_store.app.core.logging import JsonFormatter, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    get_env.cache_clear()


class _Buffer:
    def __init__(self):
        self.data = ""

    def write(self, s):
        self.data += s

    def flush(self):
        pass


def _emit(logger_name: str, **kwargs) -> dict:
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    buf = _Buffer()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(JsonFormatter())
    logger.handlers[:] = [handler]
    logger.info("stored", **kwargs)
    return json.loads(buf.data)


def test_json_formatter_includes_http_context():
    payload = _emit(
        "test.json.http",
        extra={"request_id": "req-1", "http_method": "POST", "path": "/products", "status_code": 202},
    )
    assert payload["message"] == "stored"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.json.http"
    assert payload["request_id"] == "req-1"
    assert payload["http"] == {"method": "POST", "path": "/products", "status": 202}


def test_json_formatter_omits_absent_context():
    payload = _emit("test.json.plain")
    assert "http" not in payload
    assert "request_id" not in payload
    assert "error" not in payload


def test_json_formatter_truncates_long_stacks(monkeypatch):
    monkeypatch.setenv("LOG_STACK_LIMIT", "10")
    try:
        raise ValueError("bad record")
    except ValueError:
        payload = _emit("test.json.exc", exc_info=True)
    assert payload["error"]["type"] == "ValueError"
    assert payload["error"]["message"] == "bad record"
    assert payload["error"]["stack"].endswith("...(truncated)")


def test_setup_logging_explicit_level_and_format():
    setup_logging(level="warning", fmt="json")
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_setup_logging_reads_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_FORMAT", "plain")
    setup_logging()
    root = logging.getLogger()
    assert root.level == logging.ERROR
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_setup_logging_defaults_per_environment(monkeypatch):
    monkeypatch.setenv("PRODUCT_STORE_ENV", "prod")
    get_env.cache_clear()
    setup_logging()
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
