"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/account.py
============================================================
Class: InMemoryAccountRepository

Responsibilities:
  - Resolver cuentas por (name, host) sobre InMemoryCatalog.

Collaborators:
  - domain.repositories.AccountRepository (contrato)
  - InMemoryCatalog
============================================================
"""

from __future__ import annotations

from typing import Optional

from ....domain.entities import Account
from .catalog import InMemoryCatalog


class InMemoryAccountRepository:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self._catalog = catalog

    def get_account_by_name(
        self, name: str, host: Optional[str] = None
    ) -> Optional[Account]:
        wanted_host = host.lower() if host else None
        for account in self._catalog.snapshot().accounts:
            account_host = account.host.lower() if account.host else None
            if account.name == name and account_host == wanted_host:
                return account
        return None

    def ping(self) -> bool:
        return True
