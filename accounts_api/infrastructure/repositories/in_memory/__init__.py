"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .account import InMemoryAccountRepository
from .catalog import InMemoryCatalog
from .query_executor import InMemoryQueryExecutor

__all__ = [
    "InMemoryCatalog",
    "InMemoryAccountRepository",
    "InMemoryQueryExecutor",
]
