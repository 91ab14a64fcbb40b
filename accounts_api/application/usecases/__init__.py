"""
===============================================================================
TARJETA CRC — application/usecases/__init__.py
===============================================================================

Responsabilidades:
    - Re-exportar casos de uso y tipos de resultado para imports limpios.

Colaboradores:
    - usecases.listing: listados genéricos por recurso
    - usecases.accounts: lookup de cuentas
===============================================================================
"""

from .accounts.account_results import AccountError, AccountErrorCode, GetAccountResult
from .accounts.get_account import GetAccountUseCase, find_account
from .listing.list_account_resources import ListAccountResourcesUseCase
from .listing.list_resources import ListResourcesUseCase
from .listing.listing_results import ListingError, ListingErrorCode, ListResourcesResult

__all__ = [
    "AccountError",
    "AccountErrorCode",
    "GetAccountResult",
    "GetAccountUseCase",
    "find_account",
    "ListAccountResourcesUseCase",
    "ListResourcesUseCase",
    "ListingError",
    "ListingErrorCode",
    "ListResourcesResult",
]
