"""
===============================================================================
LISTING USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Listing Use Case Results

Business Goal:
    Tipos consistentes de resultados y errores para los listados de recursos
    de una cuenta (videos, canales, playlists, ratings) y de cuentas.

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de propagar
      excepciones de input/acceso.
    - Los errores de infraestructura (StoreUnavailableError) y de programación
      (ListingInvariantError) NO se traducen acá: se propagan.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ....crosscutting.pagination import ResultPage


class ListingErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: paginación, sort o filtro inválido.
      - UNAUTHORIZED: recurso owner-only pedido sin identidad.
      - FORBIDDEN: identidad sin ownership o sin el right requerido.
      - NOT_FOUND: la cuenta objetivo no existe.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class ListingError:
    code: ListingErrorCode
    message: str
    resource: str | None = None


@dataclass
class ListResourcesResult:
    """
    Contrato:
      - Éxito: page != None y error == None
      - Falla: page == None y error != None
    """

    page: ResultPage[Any] | None = None
    error: ListingError | None = None
