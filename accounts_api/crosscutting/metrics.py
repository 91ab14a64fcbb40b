"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO account names, NO URLs de actores).
    - Exponer helpers para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: registra latencia y conteo HTTP.
    - application/usecases/listing: cuenta listados por recurso/resultado.
    - application/freshness: cuenta jobs de refresh por resultado
      (submitted | failed). Los fallos tragados quedan visibles acá.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "accounts_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "accounts_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# ------------------------
# Listados
# ------------------------
_listings_total = Counter(
    "accounts_listings_total",
    "Listados ejecutados por tipo de recurso y resultado",
    ["resource", "outcome"],
    registry=_registry,
)

_listing_latency = Histogram(
    "accounts_listing_latency_seconds",
    "Latencia del query executor por tipo de recurso (segundos)",
    ["resource"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=_registry,
)

# ------------------------
# Freshness
# ------------------------
_refresh_jobs_total = Counter(
    "accounts_refresh_jobs_total",
    "Jobs de refresh de actores por resultado",
    ["outcome"],
    registry=_registry,
)


# -----------------------------------------------------------------------------
# API pública (helpers de registro)
# -----------------------------------------------------------------------------


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP.

    - endpoint se normaliza para no explotar cardinalidad.
    - status se agrupa por 2xx/4xx/5xx.
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_listing(resource: str, outcome: str) -> None:
    """Cuenta listados (outcome: ok | rejected | error)."""
    _listings_total.labels(resource=resource, outcome=outcome).inc()


def observe_listing_latency(resource: str, seconds: float) -> None:
    _listing_latency.labels(resource=resource).observe(seconds)


def record_refresh_job(outcome: str) -> None:
    """Cuenta jobs de refresh (outcome: submitted | failed)."""
    _refresh_jobs_total.labels(outcome=outcome).inc()


# -----------------------------------------------------------------------------
# Helpers internos
# -----------------------------------------------------------------------------


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta.

    Reemplaza el handle de la cuenta e IDs numéricos por placeholders.
    """
    path = re.sub(r"^/api/v1/accounts/[^/]+", "/api/v1/accounts/{account}", path)
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


# -----------------------------------------------------------------------------
# Exposición del endpoint /metrics
# -----------------------------------------------------------------------------


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
