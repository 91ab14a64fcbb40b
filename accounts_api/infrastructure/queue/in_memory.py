"""
===============================================================================
ARCHIVO: infrastructure/queue/in_memory.py
===============================================================================

Clase:
    InMemoryJobQueue

Responsabilidades:
    - Implementar `JobQueue` sin Redis (tests / desarrollo local).
    - Registrar los últimos `max_jobs` submits para inspección (deque
      acotada: en desarrollo sin Redis nadie consume los jobs).

Notas:
    - Thread-safe (Lock): los background tasks corren en el threadpool.
===============================================================================
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from threading import Lock
from typing import Any, Mapping
from uuid import uuid4

from ...domain.services import JobKind


@dataclass(frozen=True)
class SubmittedJob:
    job_id: str
    kind: JobKind
    payload: Mapping[str, Any]


class InMemoryJobQueue:
    def __init__(self, max_jobs: int = 1000) -> None:
        self._jobs: deque[SubmittedJob] = deque(maxlen=max_jobs)
        self._lock = Lock()

    def submit(self, kind: JobKind, payload: Mapping[str, Any]) -> str:
        job = SubmittedJob(job_id=str(uuid4()), kind=kind, payload=dict(payload))
        with self._lock:
            self._jobs.append(job)
        return job.job_id

    @property
    def submitted(self) -> list[SubmittedJob]:
        with self._lock:
            return list(self._jobs)

    def clear(self) -> None:
        with self._lock:
            self._jobs.clear()
