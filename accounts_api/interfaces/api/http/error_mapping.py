"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de los casos de uso a AppHTTPException.
  - Centralizar el mapeo para que los routers no lo dupliquen.

Reglas:
  - Input inválido (paginación / sort / filtro) => 400.
  - Owner-only sin identidad => 401; sin ownership o sin right => 403.
  - Cuenta inexistente => 404.

Colaboradores:
  - application.usecases.listing / application.usecases.accounts
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from ....application.usecases.accounts.account_results import AccountErrorCode
from ....application.usecases.listing.listing_results import ListingErrorCode
from ....crosscutting.error_responses import (
    bad_request,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
)


def raise_listing_error(
    error_code: ListingErrorCode,
    message: str,
    *,
    account_handle: str | None = None,
) -> None:
    """Traduce ListingErrorCode -> HTTP."""
    if error_code == ListingErrorCode.VALIDATION_ERROR:
        raise bad_request(message)
    if error_code == ListingErrorCode.UNAUTHORIZED:
        raise unauthorized(message)
    if error_code == ListingErrorCode.FORBIDDEN:
        raise forbidden(message)
    if error_code == ListingErrorCode.NOT_FOUND:
        raise not_found("Account", account_handle or "unknown")
    raise internal_error(message)


def raise_account_error(
    error_code: AccountErrorCode, message: str, *, account_handle: str
) -> None:
    if error_code == AccountErrorCode.NOT_FOUND:
        raise not_found("Account", account_handle)
    raise internal_error(message)
