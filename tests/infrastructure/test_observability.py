"""Structured Logging — verifies JSON output and correlation-id propagation."""

import json
import logging

from bookstore.infrastructure.observability import (
    CorrelationIdFilter, JSONFormatter, correlation_id_var, get_correlation_id,
)


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("bookstore.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "bookstore.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload


def test_json_formatter_surfaces_extra_fields():
    payload = json.loads(JSONFormatter().format(
        _record(error_code="CONFLICT", entity_id="abc", status_code=409),
    ))
    assert payload["error_code"] == "CONFLICT"
    assert payload["entity_id"] == "abc"
    assert payload["status_code"] == 409


def test_filter_attaches_current_correlation_id():
    token = correlation_id_var.set("c0ffee")
    try:
        record = _record()
        assert CorrelationIdFilter().filter(record)
        assert get_correlation_id() == "c0ffee"
        payload = json.loads(JSONFormatter().format(record))
        assert payload["correlation_id"] == "c0ffee"
    finally:
        correlation_id_var.reset(token)


def test_no_correlation_id_outside_requests():
    record = _record()
    CorrelationIdFilter().filter(record)
    assert "correlation_id" not in json.loads(JSONFormatter().format(record))
