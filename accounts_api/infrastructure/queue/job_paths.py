"""
===============================================================================
SUBSISTEMA: Infraestructura / Queue
===============================================================================

Nombre:
    Rutas y Constantes de Jobs

Responsabilidades:
    - Centralizar nombres de colas y rutas de jobs por JobKind.

Notas:
    - Los jobs los ejecuta un worker externo: la ruta debe ser importable
      en ESE proceso, no en este servicio.
    - La ruta real se puede sobreescribir con REFRESH_JOB_PATH.
===============================================================================
"""

from __future__ import annotations

from typing import Mapping

from ...domain.services import JobKind

# Cola del refresher de actores federados.
ACTOR_REFRESH_QUEUE_NAME: str = JobKind.ACTOR_REFRESH.value

# Job del worker que re-descarga el actor y actualiza la cuenta.
ACTOR_REFRESH_JOB_PATH: str = "workers.activitypub.refresh_actor_job"


def build_job_paths(*, actor_refresh_job_path: str | None = None) -> Mapping[JobKind, str]:
    return {JobKind.ACTOR_REFRESH: actor_refresh_job_path or ACTOR_REFRESH_JOB_PATH}
