"""
===============================================================================
TARJETA CRC — accounts_api/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones tipadas a respuestas HTTP RFC7807.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: AccountsAPIError y derivadas
  - crosscutting.config.get_settings (nivel de detalle)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    bad_request,
)
from ..crosscutting.exceptions import (
    AccountsAPIError,
    ForbiddenError,
    InvalidQueryError,
    ListingInvariantError,
    StoreUnavailableError,
    UnauthorizedError,
)
from ..crosscutting.logger import logger


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_service_error(
    request: Request,
    *,
    exc: AccountsAPIError,
    code: ErrorCode,
    status_code: int,
    detail: str | None = None,
) -> JSONResponse:
    """Helper común para errores tipados."""
    request_id = _request_id_from(request)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Error de servicio",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "message": exc.message,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=detail or exc.message,
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def invalid_query_handler(
    request: Request, exc: InvalidQueryError
) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.BAD_REQUEST, status_code=400
    )


async def unauthorized_handler(
    request: Request, exc: UnauthorizedError
) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.UNAUTHORIZED, status_code=401
    )


async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.FORBIDDEN, status_code=403
    )


async def store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    # R: El mensaje interno (driver, SQL) no se expone.
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.STORE_UNAVAILABLE,
        status_code=503,
        detail="El store de datos no está disponible",
    )


async def listing_invariant_handler(
    request: Request, exc: ListingInvariantError
) -> JSONResponse:
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.INTERNAL_ERROR,
        status_code=500,
        detail="Error interno.",
    )


async def accounts_api_error_handler(
    request: Request, exc: AccountsAPIError
) -> JSONResponse:
    return await _handle_service_error(
        request, exc=exc, code=ErrorCode.INTERNAL_ERROR, status_code=500
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Query params mal tipados (start=abc, count=1.5) -> 400, igual que el resto."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg"),
        }
        for err in exc.errors()
    ]
    logger.warning("Parámetros inválidos", extra={"validation_errors": errors})
    return await app_exception_handler(
        request, bad_request("Parámetros de consulta inválidos", errors)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica en producción.
    """
    request_id = _request_id_from(request)
    settings = get_settings()

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    detail = str(exc) if not settings.is_production() else "Error interno."

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Starlette resuelve por MRO: las subclases más específicas ganan sobre
    AccountsAPIError; Exception queda como fallback.
    """
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(InvalidQueryError, invalid_query_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(ForbiddenError, forbidden_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(ListingInvariantError, listing_invariant_handler)
    app.add_exception_handler(AccountsAPIError, accounts_api_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
