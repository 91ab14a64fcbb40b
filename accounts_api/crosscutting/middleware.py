"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py (Contexto por request)
===============================================================================

Clase:
  RequestContextMiddleware

Responsabilidades:
  - Aceptar X-Request-Id entrante (acotado) o generar uno, y devolverlo.
  - Setear contextvars (request_id / method / path) para los logs.
  - Registrar métricas HTTP con el template de ruta como label
    (/api/v1/accounts/{account_name}/videos), no con el path crudo.
  - Loguear un evento por request (salvo /healthz y /metrics).
  - clear_context() siempre, también ante excepción.

Colaboradores:
  - accounts_api/context.py
  - crosscutting/metrics.record_request_metrics
  - crosscutting/logger
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger
from .metrics import record_request_metrics

_MAX_REQUEST_ID_LEN = 128
_QUIET_PATHS = frozenset({"/healthz", "/metrics"})


def _request_id_from(request: Request) -> str:
    incoming = (request.headers.get("x-request-id") or "").strip()
    if incoming and len(incoming) <= _MAX_REQUEST_ID_LEN:
        return incoming
    return str(uuid.uuid4())


def _route_template(request: Request) -> str:
    """Template de la ruta resuelta; "unmatched" si ninguna ruta matcheó."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _request_id_from(request)
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        except Exception:
            logger.exception("request falló", extra={"status_code": status_code})
            raise
        finally:
            latency = time.perf_counter() - start
            record_request_metrics(
                endpoint=_route_template(request),
                method=request.method,
                status_code=status_code,
                latency_seconds=latency,
            )
            if request.url.path not in _QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )
            clear_context()
