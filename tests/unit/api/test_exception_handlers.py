"""Unit tests for centralized exception -> RFC7807 mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from accounts_api.api.exception_handlers import register_exception_handlers
from accounts_api.crosscutting.exceptions import (
    AccountsAPIError,
    ForbiddenError,
    InvalidSortError,
    ListingInvariantError,
    StoreUnavailableError,
    UnauthorizedError,
)

pytestmark = pytest.mark.unit


def _client(exc: Exception) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise exc

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.parametrize(
    "exc, status, code",
    [
        (InvalidSortError("sort inválido"), 400, "BAD_REQUEST"),
        (UnauthorizedError("login"), 401, "UNAUTHORIZED"),
        (ForbiddenError("owner only"), 403, "FORBIDDEN"),
        (StoreUnavailableError("db down"), 503, "STORE_UNAVAILABLE"),
        (ListingInvariantError("bug"), 500, "INTERNAL_ERROR"),
        (AccountsAPIError("unexpected"), 500, "INTERNAL_ERROR"),
    ],
)
def test_typed_errors_map_to_problem_json(exc, status, code):
    response = _client(exc).get("/boom")

    assert response.status_code == status
    assert response.headers["content-type"].startswith("application/problem+json")
    body = response.json()
    assert body["code"] == code
    assert body["errors"][0]["error_id"] == exc.error_id


def test_internal_details_are_not_leaked():
    response = _client(StoreUnavailableError("password=secret")).get("/boom")

    assert "secret" not in response.text


def test_untyped_exception_is_internal_error():
    response = _client(RuntimeError("kaboom")).get("/boom")

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"


def test_malformed_query_param_is_400_problem_json():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/items")
    def items(start: int = 0):
        return {"start": start}

    response = TestClient(app).get("/items", params={"start": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "BAD_REQUEST"
    assert body["errors"][0]["field"] == "query.start"
