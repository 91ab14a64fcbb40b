"""
===============================================================================
TARJETA CRC — domain/resources.py
===============================================================================

Módulo:
    Registry de recursos listables

Responsabilidades:
    - Declarar, por recurso, la whitelist de sort, el sort por defecto,
      el tipo de descriptor esperado y si el recurso es owner-only.
    - Ser la única configuración que parametriza el List Service genérico.

Colaboradores:
    - domain.filters: tipos de descriptor
    - application/usecases/listing: ListResourcesUseCase
    - infrastructure/repositories: executors (mapean sort -> columna)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Type

from .filters import (
    AccountFilters,
    ChannelFilters,
    FilterDescriptor,
    PlaylistFilters,
    RatingFilters,
    VideoFilters,
)
from .value_objects import ResourceType

DEFAULT_SORT = "-createdAt"


@dataclass(frozen=True, slots=True)
class ResourceConfig:
    resource_type: ResourceType
    sort_whitelist: frozenset[str]
    descriptor_type: Type[FilterDescriptor]
    default_sort: str = DEFAULT_SORT
    # Recurso visible solo para el dueño (guard explícito, no se achica el scope)
    owner_only: bool = False
    # Listado acotado a una cuenta (scope_id requerido)
    account_scoped: bool = True


RESOURCE_CONFIGS: Mapping[ResourceType, ResourceConfig] = {
    ResourceType.ACCOUNTS: ResourceConfig(
        resource_type=ResourceType.ACCOUNTS,
        sort_whitelist=frozenset({"createdAt"}),
        descriptor_type=AccountFilters,
        account_scoped=False,
    ),
    ResourceType.VIDEOS: ResourceConfig(
        resource_type=ResourceType.VIDEOS,
        sort_whitelist=frozenset(
            {
                "name",
                "duration",
                "createdAt",
                "publishedAt",
                "views",
                "likes",
                "trending",
            }
        ),
        descriptor_type=VideoFilters,
    ),
    ResourceType.VIDEO_CHANNELS: ResourceConfig(
        resource_type=ResourceType.VIDEO_CHANNELS,
        sort_whitelist=frozenset({"id", "name", "updatedAt", "createdAt"}),
        descriptor_type=ChannelFilters,
    ),
    ResourceType.VIDEO_PLAYLISTS: ResourceConfig(
        resource_type=ResourceType.VIDEO_PLAYLISTS,
        sort_whitelist=frozenset({"displayName", "createdAt", "updatedAt"}),
        descriptor_type=PlaylistFilters,
    ),
    ResourceType.RATINGS: ResourceConfig(
        resource_type=ResourceType.RATINGS,
        sort_whitelist=frozenset({"createdAt"}),
        descriptor_type=RatingFilters,
        owner_only=True,
    ),
}


def get_resource_config(resource_type: ResourceType) -> ResourceConfig:
    return RESOURCE_CONFIGS[resource_type]
