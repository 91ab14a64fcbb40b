"""
===============================================================================
TARJETA CRC — crosscutting/error_responses.py (Problem Details / RFC 7807)
===============================================================================

Responsabilidades:
  - Catálogo de códigos estables (ErrorCode) con su status, título y
    detalle por defecto (_PROBLEMS).
  - AppHTTPException: HTTPException + code + errors[].
  - problem(): factory única; bad_request / not_found / ... son atajos.
  - app_exception_handler(): serializa como application/problem+json,
    agregando instance (URL) y request_id.

Colaboradores:
  - api/exception_handlers.py (errores de dominio -> AppHTTPException)
  - interfaces/api/http/error_mapping.py (errores de casos de uso)
  - interfaces/api/http/router.py (OPENAPI_ERROR_RESPONSES)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class _Problem(NamedTuple):
    status: int
    title: str
    default_detail: str


_PROBLEMS: dict[ErrorCode, _Problem] = {
    ErrorCode.BAD_REQUEST: _Problem(400, "Bad Request", "Parámetros inválidos"),
    ErrorCode.UNAUTHORIZED: _Problem(401, "Unauthorized", "Autenticación requerida"),
    ErrorCode.FORBIDDEN: _Problem(403, "Forbidden", "Acceso denegado"),
    ErrorCode.NOT_FOUND: _Problem(404, "Not Found", "Recurso no encontrado"),
    ErrorCode.INTERNAL_ERROR: _Problem(
        500, "Internal Error", "Ocurrió un error inesperado"
    ),
    ErrorCode.STORE_UNAVAILABLE: _Problem(
        503, "Store Unavailable", "El store de datos no está disponible"
    ),
}


class ErrorDetail(BaseModel):
    """Problem Details + `code` estable y `errors` opcionales."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


class AppHTTPException(HTTPException):
    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


def problem(
    code: ErrorCode,
    detail: str | None = None,
    errors: list[dict[str, Any]] | None = None,
) -> AppHTTPException:
    entry = _PROBLEMS[code]
    return AppHTTPException(
        entry.status, code, detail or entry.default_detail, errors
    )


def bad_request(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return problem(ErrorCode.BAD_REQUEST, detail, errors)


def unauthorized(detail: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.FORBIDDEN, detail)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return problem(ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado")


def internal_error(detail: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.INTERNAL_ERROR, detail)


def store_unavailable(detail: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.STORE_UNAVAILABLE, detail)


# ---------------------------------------------------------------------------
# OpenAPI
# ---------------------------------------------------------------------------
def _openapi_error(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


OPENAPI_ERROR_RESPONSES = {
    str(p.status): _openapi_error(p.title)
    for code, p in _PROBLEMS.items()
    if code is not ErrorCode.INTERNAL_ERROR
}
OPENAPI_ERROR_RESPONSES["default"] = _openapi_error("Error")


# ---------------------------------------------------------------------------
# Handler FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    errors = list(exc.errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        errors.append({"request_id": request_id})

    body = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=_PROBLEMS[exc.code].title,
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
