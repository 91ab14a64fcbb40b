"""
===============================================================================
SUBSISTEMA: Infraestructura / Queue
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Errores Tipados de Cola

Responsabilidades:
    - Definir excepciones explícitas para los adaptadores de cola.
    - Habilitar un manejo consistente (logs / métricas) sin depender de
      excepciones genéricas.

Colaboradores:
    - rq_queue.RQJobQueue
    - application.freshness.FreshnessMonitor (loguea y traga QueueEnqueueError)
===============================================================================
"""

from __future__ import annotations


class QueueError(Exception):
    """Error base del subsistema de colas."""

    code: str = "QUEUE_ERROR"


class QueueConfigurationError(QueueError):
    """Cola mal configurada (ej: job path vacío, kind sin ruta)."""

    code = "QUEUE_CONFIGURATION_ERROR"


class QueueEnqueueError(QueueError):
    """Falló la operación de encolar un job."""

    code = "QUEUE_ENQUEUE_ERROR"

    def __init__(
        self, message: str, *, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error
