"""
===============================================================================
USE CASE: Get Account (lookup por `name` o `name@host`)
===============================================================================

Name:
    Get Account Use Case

Business Goal:
    Resolver una cuenta local o remota a partir del handle de la URL.

Why (Context / Intención):
    - El handle con el host de la instancia equivale a la cuenta local.
    - El refresh del actor NO se dispara acá: el router lo agenda como
      background task para que no influya en la respuesta.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    GetAccountUseCase

Collaborators:
    - domain.repositories.AccountRepository
    - domain.value_objects.AccountHandle
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import Account
from ....domain.repositories import AccountRepository
from ....domain.value_objects import AccountHandle
from .account_results import AccountError, AccountErrorCode, GetAccountResult


def find_account(
    handle: str, repository: AccountRepository, *, local_host: str
) -> Account | None:
    """Busca la cuenta del handle; handles malformados no matchean nada."""
    try:
        parsed = AccountHandle.parse(handle, local_host=local_host)
    except ValueError:
        return None
    return repository.get_account_by_name(parsed.name, parsed.host)


class GetAccountUseCase:
    def __init__(self, account_repository: AccountRepository, local_host: str):
        self._accounts = account_repository
        self._local_host = local_host

    def execute(self, account_handle: str) -> GetAccountResult:
        account = find_account(
            account_handle, self._accounts, local_host=self._local_host
        )
        if account is None:
            return GetAccountResult(
                error=AccountError(
                    code=AccountErrorCode.NOT_FOUND,
                    message=f"Account '{account_handle}' not found",
                    resource="Account",
                )
            )
        return GetAccountResult(account=account)
