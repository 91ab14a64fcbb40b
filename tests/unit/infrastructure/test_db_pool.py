"""Unit tests for the process-wide connection pool lifecycle."""

from unittest.mock import MagicMock, patch

import pytest

from accounts_api.infrastructure.db import pool as db_pool
from accounts_api.infrastructure.db.errors import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _no_pool():
    db_pool.close_pool()
    yield
    db_pool.close_pool()


def test_get_pool_before_init_raises():
    with pytest.raises(PoolNotInitializedError):
        db_pool.get_pool()


def test_init_get_close_lifecycle():
    fake = MagicMock()
    with patch("psycopg_pool.ConnectionPool", return_value=fake) as factory:
        created = db_pool.init_pool("postgresql://u:p@db/accounts", 1, 4)

    assert created is fake
    assert db_pool.get_pool() is fake
    assert factory.call_args.kwargs["min_size"] == 1
    assert factory.call_args.kwargs["max_size"] == 4

    db_pool.close_pool()
    fake.close.assert_called_once()
    with pytest.raises(PoolNotInitializedError):
        db_pool.get_pool()


def test_double_init_raises():
    with patch("psycopg_pool.ConnectionPool", return_value=MagicMock()):
        db_pool.init_pool("postgresql://u:p@db/accounts", 1, 2)
        with pytest.raises(PoolAlreadyInitializedError):
            db_pool.init_pool("postgresql://u:p@db/accounts", 1, 2)


def test_configure_connection_sets_timeout_and_read_only():
    conn = MagicMock()

    db_pool._configure_connection(conn)

    statements = [call.args[0] for call in conn.execute.call_args_list]
    assert any("statement_timeout" in s for s in statements)
    assert any("read_only" in s for s in statements)
