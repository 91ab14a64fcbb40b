"""
Name: JSON Logger Unit Tests

Responsibilities:
  - One JSON object per record, with request context and call-site extras
  - Hide credentials passed as extras, keep public actor URLs
"""

import json
import logging
import sys

import pytest

from accounts_api.context import request_id_var
from accounts_api.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "accounts-api", logging.INFO, __file__, 10, msg, (), None
    )
    record.__dict__.update(extra)
    return record


def test_formats_base_fields():
    payload = json.loads(JSONFormatter().format(_record("listing done")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "accounts-api"
    assert payload["message"] == "listing done"
    assert "timestamp" in payload


def test_includes_extras_and_request_context():
    token = request_id_var.set("req-123")
    try:
        payload = json.loads(
            JSONFormatter().format(
                _record(actor_url="https://remote.example/accounts/bob", job_id="j1")
            )
        )
    finally:
        request_id_var.reset(token)

    assert payload["request_id"] == "req-123"
    assert payload["actor_url"] == "https://remote.example/accounts/bob"
    assert payload["job_id"] == "j1"


def test_hides_credentials():
    payload = json.loads(
        JSONFormatter().format(
            _record(redis_url="redis://:pw@cache:6379", authorization="Bearer x")
        )
    )

    assert payload["redis_url"] == "***"
    assert payload["authorization"] == "***"


def test_attaches_exception_text():
    try:
        raise RuntimeError("queue down")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))

    assert "RuntimeError: queue down" in payload["exception"]
