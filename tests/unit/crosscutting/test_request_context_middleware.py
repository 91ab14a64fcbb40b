"""Unit tests for RequestContextMiddleware (X-Request-Id + context cleanup)."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from accounts_api.context import get_context_dict, request_id_var
from accounts_api.crosscutting.middleware import RequestContextMiddleware

pytestmark = pytest.mark.unit


def _client() -> TestClient:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)

    @app.get("/ping")
    def ping():
        return {"context": get_context_dict()}

    return TestClient(app)


def test_incoming_request_id_is_echoed():
    response = _client().get("/ping", headers={"X-Request-Id": "abc-123"})

    assert response.headers["X-Request-Id"] == "abc-123"
    assert response.json()["context"]["request_id"] == "abc-123"
    assert response.json()["context"]["path"] == "/ping"


def test_request_id_is_generated_when_missing():
    response = _client().get("/ping")

    assert len(response.headers["X-Request-Id"]) == 36


def test_oversized_request_id_is_replaced():
    response = _client().get("/ping", headers={"X-Request-Id": "x" * 500})

    assert response.headers["X-Request-Id"] != "x" * 500


def test_context_is_cleared_after_request():
    _client().get("/ping", headers={"X-Request-Id": "abc-123"})

    assert request_id_var.get() == ""


def test_records_request_metrics_without_raw_path():
    with patch(
        "accounts_api.crosscutting.middleware.record_request_metrics"
    ) as record:
        _client().get("/ping")

    kwargs = record.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["status_code"] == 200
    assert kwargs["endpoint"] in {"/ping", "unmatched"}


def test_unmatched_path_is_collapsed():
    with patch(
        "accounts_api.crosscutting.middleware.record_request_metrics"
    ) as record:
        _client().get("/accounts/someone-random")

    assert record.call_args.kwargs["endpoint"] == "unmatched"
