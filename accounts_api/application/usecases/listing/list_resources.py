"""
===============================================================================
USE CASE: List Resources (List Service genérico)
===============================================================================

Name:
    List Resources Use Case

Business Goal:
    Un único servicio de listado para todos los recursos, parametrizado por
    ResourceConfig (whitelist de sort, tipo de descriptor, scoping por cuenta).

Why (Context / Intención):
    - Evita un handler casi idéntico por recurso.
    - El servicio solo arma y valida lo que le pasa al executor: matching,
      orden y paginado son responsabilidad del store.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ListResourcesUseCase

Responsibilities:
    - Verificar invariantes internos (descriptor y sort acordes al recurso).
    - Delegar en QueryExecutor.execute_list.
    - Devolver ResultPage (total = conjunto filtrado completo).

Collaborators:
    - domain.resources.RESOURCE_CONFIGS
    - domain.services.QueryExecutor
    - crosscutting.metrics (listados por recurso / latencia)

Failure:
    - FilterDescriptorMismatchError / ListingInvariantError: bug interno (500).
    - StoreUnavailableError: se propaga sin retry.
===============================================================================
"""

from __future__ import annotations

import time
from typing import Any, Mapping

from ....crosscutting.exceptions import (
    FilterDescriptorMismatchError,
    ListingInvariantError,
    StoreUnavailableError,
)
from ....crosscutting.metrics import observe_listing_latency, record_listing
from ....crosscutting.pagination import ListQuery, ResultPage
from ....domain.filters import FilterDescriptor
from ....domain.resources import RESOURCE_CONFIGS, ResourceConfig
from ....domain.services import QueryExecutor
from ....domain.value_objects import ResourceType


class ListResourcesUseCase:
    def __init__(
        self,
        executor: QueryExecutor,
        registry: Mapping[ResourceType, ResourceConfig] = RESOURCE_CONFIGS,
    ) -> None:
        self._executor = executor
        self._registry = registry

    def execute(
        self,
        resource_type: ResourceType,
        scope_id: int | None,
        query: ListQuery,
        filters: FilterDescriptor,
    ) -> ResultPage[Any]:
        config = self._registry[resource_type]
        self._check_invariants(config, scope_id, query, filters)

        started = time.perf_counter()
        try:
            items, total = self._executor.execute_list(
                resource_type, scope_id, query, filters
            )
        except StoreUnavailableError:
            record_listing(resource_type.value, "error")
            raise
        observe_listing_latency(resource_type.value, time.perf_counter() - started)
        record_listing(resource_type.value, "ok")

        if total == 0 and not items:
            return ResultPage.empty()
        return ResultPage(items=items, total=total)

    @staticmethod
    def _check_invariants(
        config: ResourceConfig,
        scope_id: int | None,
        query: ListQuery,
        filters: FilterDescriptor,
    ) -> None:
        if type(filters) is not config.descriptor_type:
            raise FilterDescriptorMismatchError(
                f"{config.resource_type.value} espera "
                f"{config.descriptor_type.__name__}, recibió {type(filters).__name__}"
            )
        if query.sort.field not in config.sort_whitelist:
            raise ListingInvariantError(
                f"sort '{query.sort.field}' fuera de la whitelist de "
                f"{config.resource_type.value}"
            )
        if config.account_scoped and scope_id is None:
            raise ListingInvariantError(
                f"{config.resource_type.value} requiere scope_id de cuenta"
            )
