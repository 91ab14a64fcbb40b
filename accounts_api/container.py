"""
===============================================================================
TARJETA CRC — accounts_api/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, executor, cola, casos de uso).
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos pesados.
  - Elegir adapters según Settings: in-memory en test/ci, Postgres/RQ en runtime.

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories / domain.services (puertos)
  - infrastructure.* (implementaciones)
  - application.* (casos de uso + FreshnessMonitor)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from redis import Redis

from .application.freshness import FreshnessMonitor
from .application.usecases.accounts.get_account import GetAccountUseCase
from .application.usecases.listing.list_account_resources import (
    ListAccountResourcesUseCase,
)
from .application.usecases.listing.list_resources import ListResourcesUseCase
from .crosscutting.config import get_settings
from .crosscutting.logger import logger
from .crosscutting.pagination import PaginationDefaults
from .domain.repositories import AccountRepository
from .domain.services import JobQueue, QueryExecutor
from .infrastructure.queue import InMemoryJobQueue, RQJobQueue, RQQueueConfig
from .infrastructure.queue.job_paths import build_job_paths
from .infrastructure.repositories.in_memory import (
    InMemoryAccountRepository,
    InMemoryCatalog,
    InMemoryQueryExecutor,
)
from .infrastructure.repositories.postgres import (
    PostgresAccountRepository,
    PostgresQueryExecutor,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """app_env ∈ {"test", "testing", "ci"} => in-memory adapters."""
    return get_settings().is_test()


# =============================================================================
# Store (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_in_memory_catalog() -> InMemoryCatalog:
    """Catálogo compartido por los adapters in-memory."""
    return InMemoryCatalog()


@lru_cache(maxsize=1)
def get_account_repository() -> AccountRepository:
    if _is_test_env():
        return InMemoryAccountRepository(get_in_memory_catalog())
    return PostgresAccountRepository()


@lru_cache(maxsize=1)
def get_query_executor() -> QueryExecutor:
    if _is_test_env():
        return InMemoryQueryExecutor(get_in_memory_catalog())
    return PostgresQueryExecutor()


# =============================================================================
# Cola de jobs
# =============================================================================


@lru_cache(maxsize=1)
def get_job_queue() -> JobQueue:
    """
    Cola de refresh de actores.

    Sin REDIS_URL (test / dev local) se usa una cola in-memory: los jobs
    quedan registrados pero nadie los ejecuta.
    """
    settings = get_settings()
    if _is_test_env() or not settings.redis_url.strip():
        if not _is_test_env():
            logger.warning("REDIS_URL no configurada: refresh de actores deshabilitado")
        return InMemoryJobQueue()

    redis_conn = Redis.from_url(
        settings.redis_url,
        socket_connect_timeout=2,
        socket_timeout=5,
        health_check_interval=30,
    )
    config = RQQueueConfig(
        queue_name=settings.refresh_queue_name,
        job_paths=build_job_paths(actor_refresh_job_path=settings.refresh_job_path),
        retry_max_attempts=settings.refresh_retry_max_attempts,
        job_timeout_seconds=settings.refresh_job_timeout_seconds,
        result_ttl_seconds=settings.refresh_result_ttl_seconds,
    )
    return RQJobQueue(redis=redis_conn, config=config)


@lru_cache(maxsize=1)
def get_freshness_monitor() -> FreshnessMonitor:
    return FreshnessMonitor(
        queue=get_job_queue(),
        refresh_interval=get_settings().actor_refresh_interval,
    )


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_pagination_defaults() -> PaginationDefaults:
    settings = get_settings()
    return PaginationDefaults(
        default_count=settings.default_page_size,
        max_count=settings.max_page_size,
    )


def get_list_resources_use_case() -> ListResourcesUseCase:
    return ListResourcesUseCase(executor=get_query_executor())


def get_list_account_resources_use_case() -> ListAccountResourcesUseCase:
    return ListAccountResourcesUseCase(
        list_resources=get_list_resources_use_case(),
        account_repository=get_account_repository(),
        defaults=get_pagination_defaults(),
        local_host=get_settings().local_host,
    )


def get_get_account_use_case() -> GetAccountUseCase:
    return GetAccountUseCase(
        account_repository=get_account_repository(),
        local_host=get_settings().local_host,
    )
