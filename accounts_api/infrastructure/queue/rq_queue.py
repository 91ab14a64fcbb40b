"""
===============================================================================
ARCHIVO: infrastructure/queue/rq_queue.py
===============================================================================

CRC CARD (Class)
-------------------------------------------------------------------------------
Clase:
    RQJobQueue (Adapter)

Responsabilidades:
    - Implementar el puerto de dominio `JobQueue` usando RQ.
    - Encolar jobs por JobKind de forma observable.
    - Validar configuración (nombre de cola, rutas de jobs, timeouts).
    - Encapsular dependencias externas (rq/redis) para no "filtrarlas" al dominio.

Colaboradores:
    - domain.services.JobQueue / JobKind
    - job_paths.build_job_paths
    - errors.QueueConfigurationError / QueueEnqueueError
    - crosscutting.logger

Patrones:
    - Adapter: traduce el puerto del dominio a una implementación RQ.
    - Lazy Import: rq se importa al construir el adaptador.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ...crosscutting.logger import logger
from ...domain.services import JobKind
from .errors import QueueConfigurationError, QueueEnqueueError
from .job_paths import ACTOR_REFRESH_QUEUE_NAME, build_job_paths


@dataclass(frozen=True)
class RQQueueConfig:
    """Configuración del adaptador RQ.

    queue_name:
        Nombre de la cola en Redis.
    job_paths:
        Ruta importable (en el worker) por JobKind.
    retry_max_attempts:
        Número de reintentos automáticos si el worker falla.
    job_timeout_seconds:
        Timeout máximo de ejecución del job en el worker.
    result_ttl_seconds:
        Tiempo de vida del resultado del job en Redis.
    """

    queue_name: str = ACTOR_REFRESH_QUEUE_NAME
    job_paths: Mapping[JobKind, str] = field(default_factory=build_job_paths)
    retry_max_attempts: int = 3
    job_timeout_seconds: int = 300
    result_ttl_seconds: int = 0


class RQJobQueue:
    """Adapter RQ para jobs asíncronos (refresh de actores)."""

    def __init__(self, *, redis: Any, config: RQQueueConfig) -> None:
        """`redis` se inyecta desde el contenedor para compartir conexión."""
        self._config = _validate_config(config)
        self._rq = _lazy_import_rq()
        self._queue = self._rq.Queue(name=self._config.queue_name, connection=redis)

        self._retry = None
        if self._config.retry_max_attempts > 0:
            self._retry = self._rq.Retry(max=self._config.retry_max_attempts)

        logger.info(
            "RQ inicializada",
            extra={
                "queue": self._config.queue_name,
                "retry_max_attempts": self._config.retry_max_attempts,
                "job_timeout_seconds": self._config.job_timeout_seconds,
            },
        )

    def submit(self, kind: JobKind, payload: Mapping[str, Any]) -> str:
        """Encola el job de `kind`.

        Contrato de serialización:
          - El payload viaja como dict plano de strings (sin objetos de dominio).
        """
        job_path = self._config.job_paths[kind]
        try:
            job = self._queue.enqueue(
                job_path,
                args=(dict(payload),),
                retry=self._retry,
                job_timeout=self._config.job_timeout_seconds,
                result_ttl=self._config.result_ttl_seconds,
                description=f"{kind.value}:{payload.get('url', '')}",
            )
            job_id = str(getattr(job, "id", "") or "")

            logger.info(
                "Job encolado",
                extra={
                    "job_kind": kind.value,
                    "job_id": job_id,
                    "queue": self._config.queue_name,
                },
            )
            return job_id

        except Exception as exc:
            # el traceback lo loguea FreshnessMonitor
            logger.error(
                "Error al encolar job",
                extra={
                    "job_kind": kind.value,
                    "queue": self._config.queue_name,
                    "error": str(exc),
                },
            )
            raise QueueEnqueueError(
                f"No se pudo encolar el job {kind.value}", original_error=exc
            ) from exc


# -----------------------------------------------------------------------------
# Helpers privados (módulo)
# -----------------------------------------------------------------------------


def _validate_config(config: RQQueueConfig) -> RQQueueConfig:
    """Valida y normaliza configuración (errores de config explotan temprano)."""
    queue_name = (config.queue_name or "").strip() or ACTOR_REFRESH_QUEUE_NAME
    retry_max_attempts = int(config.retry_max_attempts)
    job_timeout_seconds = int(config.job_timeout_seconds)
    result_ttl_seconds = int(config.result_ttl_seconds)

    if retry_max_attempts < 0:
        raise QueueConfigurationError("retry_max_attempts no puede ser negativo")
    if job_timeout_seconds <= 0:
        raise QueueConfigurationError("job_timeout_seconds debe ser > 0")
    if result_ttl_seconds < 0:
        raise QueueConfigurationError("result_ttl_seconds no puede ser negativo")

    job_paths = {kind: (path or "").strip() for kind, path in config.job_paths.items()}
    missing = [kind.value for kind in JobKind if not job_paths.get(kind)]
    if missing:
        raise QueueConfigurationError(f"Falta job path para: {', '.join(missing)}")

    return RQQueueConfig(
        queue_name=queue_name,
        job_paths=job_paths,
        retry_max_attempts=retry_max_attempts,
        job_timeout_seconds=job_timeout_seconds,
        result_ttl_seconds=result_ttl_seconds,
    )


def _lazy_import_rq():
    """Importa RQ de forma lazy; el error queda acotado a la funcionalidad de cola."""
    try:
        import rq  # type: ignore

        _ = rq.Queue
        _ = rq.Retry
        return rq
    except Exception as exc:
        raise QueueConfigurationError(
            "RQ no está disponible. Instalar dependencia 'rq' para usar colas."
        ) from exc
