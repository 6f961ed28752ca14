"""Unit tests for the JSON log format."""

import json
import logging

from trip_planner.logging_config import JsonLineFormatter, RequestContextFilter, request_id_var


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("trip_planner.test", logging.INFO, __file__, 1, "Todo moved", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_known_fields_are_kept():
    record = _record(todo_id=7, status="completed", position=15000.0)
    RequestContextFilter().filter(record)

    entry = json.loads(JsonLineFormatter().format(record))

    assert entry["msg"] == "Todo moved"
    assert entry["level"] == "INFO"
    assert entry["todo_id"] == 7
    assert entry["position"] == 15000.0
    assert "request_id" not in entry


def test_unknown_extras_are_dropped():
    entry = json.loads(JsonLineFormatter().format(_record(password="TripPass123", user_id=3)))

    assert "password" not in entry
    assert entry["user_id"] == 3


def test_request_id_from_context():
    token = request_id_var.set("req-42")
    try:
        record = _record()
        RequestContextFilter().filter(record)
    finally:
        request_id_var.reset(token)

    assert record.request_id == "req-42"
    assert json.loads(JsonLineFormatter().format(record))["request_id"] == "req-42"
