"""
===============================================================================
MÓDULO: Excepciones tipadas del backend
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (sin filtrar secretos)

Taxonomía
---------
- InvalidQueryError (input del caller, se rechaza antes del List Service)
    * InvalidPaginationError
    * InvalidSortError
    * InvalidFilterError
- AccessError (visibilidad / capacidades)
    * UnauthorizedError
    * ForbiddenError
- StoreUnavailableError (se propaga tal cual desde el query executor)
- ListingInvariantError (error de programación: descriptor/query mal armados)
    * FilterDescriptorMismatchError

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - application/usecases/listing (traduce InvalidQueryError/AccessError a códigos)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Estructura mínima para responder errores de forma consistente."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class AccountsAPIError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AccountsAPIError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "ACCOUNTS_API_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


# -----------------------------------------------------------------------------
# Input del caller
# -----------------------------------------------------------------------------
class InvalidQueryError(AccountsAPIError):
    """Parámetros de listado inválidos."""

    error_code: str = "INVALID_QUERY"


class InvalidPaginationError(InvalidQueryError):
    """start/count fuera de rango (ej: start negativo)."""

    error_code: str = "INVALID_PAGINATION"


class InvalidSortError(InvalidQueryError):
    """sort fuera de la whitelist del recurso."""

    error_code: str = "INVALID_SORT"


class InvalidFilterError(InvalidQueryError):
    """Filtro con valor desconocido (rating, playlistType, filter, nsfw)."""

    error_code: str = "INVALID_FILTER"


# -----------------------------------------------------------------------------
# Visibilidad / capacidades
# -----------------------------------------------------------------------------
class AccessError(AccountsAPIError):
    """Base de errores de acceso."""

    error_code: str = "ACCESS_ERROR"


class UnauthorizedError(AccessError):
    """Se requiere identidad autenticada."""

    error_code: str = "UNAUTHORIZED"


class ForbiddenError(AccessError):
    """Identidad autenticada sin permisos suficientes."""

    error_code: str = "FORBIDDEN"


# -----------------------------------------------------------------------------
# Infraestructura / invariantes
# -----------------------------------------------------------------------------
class StoreUnavailableError(AccountsAPIError):
    """Errores del store (conexión, query, timeout, pool)."""

    error_code: str = "STORE_UNAVAILABLE"


class ListingInvariantError(AccountsAPIError):
    """Descriptor o query que no respeta el contrato del recurso (bug interno)."""

    error_code: str = "LISTING_INVARIANT_VIOLATION"


class FilterDescriptorMismatchError(ListingInvariantError):
    """Descriptor de un tipo distinto al que declara el recurso."""

    error_code: str = "FILTER_DESCRIPTOR_MISMATCH"
