"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por recurso.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.accounts

Notas:
  - Este router se incluye desde accounts_api/api/main.py con prefix="/api/v1".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.accounts import router as accounts_router


def build_router() -> APIRouter:
    """Construye el router raíz v1 (sin side-effects al importar submódulos)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(accounts_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
