"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

import pytest

from vidshare.core.logger import JSONFormatter, configure_logging, ensure_request_id


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_sets_level(restore_root_logger) -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert restore_root_logger.level == logging.DEBUG
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)


def test_json_formatter_includes_known_extras() -> None:
    record = logging.LogRecord("vidshare.test", logging.INFO, __file__, 1, "videos.viewed", None, None)
    record.user_id = 3
    record.video_id = 9
    record.request_id = "req-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "videos.viewed"
    assert payload["level"] == "INFO"
    assert payload["user_id"] == 3
    assert payload["video_id"] == 9
    assert payload["request_id"] == "req-1"


def test_request_id_taken_from_header(app) -> None:
    with app.test_request_context(headers={"X-Request-ID": "abc-123"}):
        assert ensure_request_id() == "abc-123"
        assert ensure_request_id() == "abc-123"


def test_request_id_echoed_in_response(client) -> None:
    resp = client.get("/api/v1/health", headers={"X-Correlation-ID": "corr-9"})
    assert resp.headers["X-Request-ID"] == "corr-9"


def test_each_request_resolves_its_own_id(client) -> None:
    first = client.get("/api/v1/health", headers={"X-Request-ID": "first-id"})
    second = client.get("/api/v1/health", headers={"X-Correlation-ID": "second-id"})
    third = client.get("/api/v1/health")

    assert first.headers["X-Request-ID"] == "first-id"
    assert second.headers["X-Request-ID"] == "second-id"
    assert third.headers["X-Request-ID"] not in {"first-id", "second-id"}
