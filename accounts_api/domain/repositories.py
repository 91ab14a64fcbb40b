"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define the account lookup contract used by the accounts endpoints.
- Keep application/domain independent from PostgreSQL or in-memory storage.

Collaborators
- domain.entities: Account
- infrastructure.repositories: postgres / in_memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
"""

from typing import Optional, Protocol

from .entities import Account


class AccountRepository(Protocol):
    """R: Read-only access to accounts (local and remote)."""

    def get_account_by_name(
        self, name: str, host: Optional[str] = None
    ) -> Optional[Account]:
        """
        R: Find an account by preferred username.

        host=None means a local account; otherwise the remote actor host.
        Returns None when no account matches.
        """
        ...

    def ping(self) -> bool:
        """R: True when the backing store answers (health checks)."""
        ...
