"""
===============================================================================
USE CASE: List Account Resources (pipeline completo de un listado)
===============================================================================

Name:
    List Account Resources Use Case

Business Goal:
    Convertir parámetros no confiables de un request en un listado acotado,
    ordenado y con el scope de visibilidad correcto.

Pipeline:
    0) Recursos owner-only: caller anónimo => 401 antes de buscar la cuenta.
    1) Resolver la cuenta objetivo (si el recurso está acotado a una cuenta).
    2) Normalizar paginación/sort contra la whitelist del recurso.
    3) Guard de ownership para recursos owner-only (ratings).
    4) Resolver VisibilityScope (por request, nunca cacheado).
    5) Componer el FilterDescriptor.
    6) Delegar en el List Service.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ListAccountResourcesUseCase

Responsibilities:
    - Orquestar normalizer + visibility policy + filter composer + list service.
    - Traducir errores de input/acceso a ListingError tipado.

Collaborators:
    - crosscutting.pagination.normalize
    - domain.visibility_policy / domain.filters / domain.resources
    - ListResourcesUseCase
    - AccountRepository (vía find_account)
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ....crosscutting.exceptions import (
    ForbiddenError,
    InvalidQueryError,
    UnauthorizedError,
)
from ....crosscutting.metrics import record_listing
from ....crosscutting.pagination import PaginationDefaults, normalize
from ....domain.filters import CallerCapabilities, RawListFilters, compose_filters
from ....domain.repositories import AccountRepository
from ....domain.resources import get_resource_config
from ....domain.value_objects import ResourceType
from ....domain.visibility_policy import (
    VisibilityScope,
    ensure_account_owner,
    resolve_visibility,
)
from ..accounts.get_account import find_account
from .list_resources import ListResourcesUseCase
from .listing_results import ListingError, ListingErrorCode, ListResourcesResult


class ListAccountResourcesUseCase:
    def __init__(
        self,
        list_resources: ListResourcesUseCase,
        account_repository: AccountRepository,
        *,
        defaults: PaginationDefaults,
        local_host: str,
    ) -> None:
        self._list_resources = list_resources
        self._accounts = account_repository
        self._defaults = defaults
        self._local_host = local_host

    def execute(
        self,
        *,
        resource_type: ResourceType,
        account_handle: Optional[str] = None,
        requester_account_id: Optional[int] = None,
        capabilities: CallerCapabilities = CallerCapabilities(),
        start: Optional[int] = None,
        count: Optional[int] = None,
        sort: Optional[str] = None,
        raw_filters: RawListFilters = RawListFilters(),
    ) -> ListResourcesResult:
        config = get_resource_config(resource_type)

        if config.owner_only and requester_account_id is None:
            return self._error(
                resource_type,
                ListingErrorCode.UNAUTHORIZED,
                "se requiere autenticación para este recurso",
            )

        scope_id: Optional[int] = None
        if config.account_scoped:
            account = (
                find_account(account_handle, self._accounts, local_host=self._local_host)
                if account_handle
                else None
            )
            if account is None:
                return self._error(
                    resource_type,
                    ListingErrorCode.NOT_FOUND,
                    f"Account '{account_handle}' not found",
                )
            scope_id = account.id

        try:
            query = normalize(
                start,
                count,
                sort,
                config.sort_whitelist,
                replace(self._defaults, default_sort=config.default_sort),
            )
            if config.owner_only:
                ensure_account_owner(scope_id, requester_account_id)
            scope = (
                resolve_visibility(scope_id, requester_account_id)
                if scope_id is not None
                else VisibilityScope.PUBLIC_ONLY
            )
            filters = compose_filters(resource_type, raw_filters, scope, capabilities)
        except InvalidQueryError as exc:
            return self._error(
                resource_type, ListingErrorCode.VALIDATION_ERROR, exc.message
            )
        except UnauthorizedError as exc:
            return self._error(resource_type, ListingErrorCode.UNAUTHORIZED, exc.message)
        except ForbiddenError as exc:
            return self._error(resource_type, ListingErrorCode.FORBIDDEN, exc.message)

        page = self._list_resources.execute(resource_type, scope_id, query, filters)
        return ListResourcesResult(page=page)

    @staticmethod
    def _error(
        resource_type: ResourceType, code: ListingErrorCode, message: str
    ) -> ListResourcesResult:
        record_listing(resource_type.value, "rejected")
        return ListResourcesResult(
            error=ListingError(code=code, message=message, resource=resource_type.value)
        )
