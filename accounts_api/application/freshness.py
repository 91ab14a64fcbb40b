"""
===============================================================================
TARJETA CRC — application/freshness.py
===============================================================================

Clase:
    FreshnessMonitor

Responsabilidades:
    - Detectar si el actor federado de una cuenta está desactualizado.
    - Encolar un job de refresh (kind: actor refresh, payload: URL del actor).
    - Loguear y tragar fallas de encolado: nunca afectan la lectura.

Colaboradores:
    - domain.services.JobQueue (inyectada; sin singleton global)
    - domain.entities.Account
    - crosscutting.metrics: refresh_jobs_total{outcome}

Reglas:
    - A lo sumo un intento de encolado por lectura.
    - Sin retry inline y sin dedup contra jobs en vuelo.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_refresh_job
from ..domain.entities import Account
from ..domain.services import JobKind, JobQueue


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FreshnessMonitor:
    def __init__(
        self,
        queue: JobQueue,
        refresh_interval: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._queue = queue
        self._refresh_interval = refresh_interval
        self._clock = clock

    def maybe_refresh(self, account: Account) -> None:
        """Fire-and-forget: nunca lanza."""
        if not account.is_outdated(self._refresh_interval, now=self._clock()):
            return

        actor_url = account.actor.url
        try:
            job_id = self._queue.submit(
                JobKind.ACTOR_REFRESH, {"type": "actor", "url": actor_url}
            )
        except Exception:
            # best-effort: la respuesta de lectura no depende del job.
            logger.exception(
                "Cannot create AP refresher job for actor %s.",
                actor_url,
                extra={"actor_url": actor_url, "account_id": account.id},
            )
            record_refresh_job("failed")
            return

        record_refresh_job("submitted")
        logger.info(
            "actor refresh job enqueued",
            extra={"actor_url": actor_url, "job_id": job_id},
        )
