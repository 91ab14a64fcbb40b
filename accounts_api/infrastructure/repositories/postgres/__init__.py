"""
PostgreSQL Repository Implementations.

Read-only adapters over psycopg / psycopg_pool (raw, parameterized SQL).
"""

from .account import PostgresAccountRepository
from .query_executor import PostgresQueryExecutor

__all__ = [
    "PostgresAccountRepository",
    "PostgresQueryExecutor",
]
