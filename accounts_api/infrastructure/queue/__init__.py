"""
===============================================================================
SUBSISTEMA: Infraestructura / Queue
===============================================================================

CRC CARD (Package)
-------------------------------------------------------------------------------
Nombre:
    infrastructure.queue

Responsabilidades:
    - Exponer los adaptadores de cola utilizados por DI (RQ / in-memory).
    - Exponer el contrato de configuración (RQQueueConfig).
===============================================================================
"""

from .errors import QueueConfigurationError, QueueEnqueueError, QueueError
from .in_memory import InMemoryJobQueue
from .rq_queue import RQJobQueue, RQQueueConfig

__all__ = [
    "InMemoryJobQueue",
    "QueueConfigurationError",
    "QueueEnqueueError",
    "QueueError",
    "RQJobQueue",
    "RQQueueConfig",
]
