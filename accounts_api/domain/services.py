"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para el query executor y la cola de jobs.
    - Mantener el dominio independiente de psycopg / rq / redis.

Colaboradores:
    - infrastructure/repositories/*: QueryExecutor (Postgres / in-memory)
    - infrastructure/queue/*: JobQueue (RQ / in-memory)
    - application: List Service y Freshness Monitor consumen estos puertos.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol, Sequence

from ..crosscutting.pagination import ListQuery
from .filters import FilterDescriptor
from .value_objects import ResourceType


class JobKind(str, Enum):
    """Tipos de job que este servicio encola (el valor es el nombre de la cola)."""

    ACTOR_REFRESH = "activitypub-refresher"


class JobQueue(Protocol):
    """Contrato de encolado de jobs (fire-and-forget)."""

    def submit(self, kind: JobKind, payload: Mapping[str, Any]) -> str:
        """
        Encola un job y devuelve su id.

        Raises:
            QueueEnqueueError: si no se pudo encolar.
        """
        ...


class QueryExecutor(Protocol):
    """
    Contrato del store para listados.

    Debe soportar offset/count, la whitelist de sort del recurso y los filtros
    del descriptor. `total` cuenta el conjunto filtrado completo.
    """

    def execute_list(
        self,
        resource_type: ResourceType,
        scope_id: int | None,
        query: ListQuery,
        filters: FilterDescriptor,
    ) -> tuple[Sequence[Any], int]:
        """
        Raises:
            StoreUnavailableError: errores de conexión / query / timeout.
        """
        ...
