"""
===============================================================================
ACCOUNT USE CASE RESULTS
===============================================================================

Tipos de resultado/error para los casos de uso de lectura de cuentas.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.entities import Account


class AccountErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class AccountError:
    code: AccountErrorCode
    message: str
    resource: str | None = None


@dataclass
class GetAccountResult:
    """
    Contrato:
      - Éxito: account != None y error == None
      - Falla: account == None y error != None
    """

    account: Account | None = None
    error: AccountError | None = None
