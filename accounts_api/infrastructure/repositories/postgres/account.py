"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/account.py
============================================================
Class: PostgresAccountRepository

Responsibilities:
- Resolver cuentas por (name, host) en PostgreSQL (SQL crudo, parametrizado).
- host NULL en actor = cuenta local.

Collaborators:
- domain.repositories.AccountRepository (contrato)
- rows.PostgresRepositoryBase / row_to_account
============================================================
"""

from __future__ import annotations

from typing import Optional

from ....domain.entities import Account
from .rows import ACCOUNT_COLUMNS, ACCOUNT_FROM, PostgresRepositoryBase, row_to_account


class PostgresAccountRepository(PostgresRepositoryBase):
    def get_account_by_name(
        self, name: str, host: Optional[str] = None
    ) -> Optional[Account]:
        if host is None:
            host_sql, params = "ac.host IS NULL", [name]
        else:
            host_sql, params = "lower(ac.host) = lower(%s)", [name, host]

        query = f"""
            SELECT {ACCOUNT_COLUMNS}
            {ACCOUNT_FROM}
            WHERE a.name = %s AND {host_sql}
            LIMIT 1
        """
        row = self._fetchone(
            query=query,
            params=params,
            context_msg="PostgresAccountRepository: Failed to load account",
            extra={"account_name": name, "host": host},
        )
        return row_to_account(row) if row else None

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1",
            params=(),
            context_msg="PostgresAccountRepository: Ping failed",
            extra={},
        )
        return bool(row)
