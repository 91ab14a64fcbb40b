"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar parámetros de query que se repiten en routers:
      * paginación / sort (start, count, sort)
      * filtros de listado (categoryOneOf, tagsOneOf, nsfw, ...)
  - Derivar CallerCapabilities del principal opcional + settings.

Colaboradores:
  - crosscutting.config.get_settings
  - identity.principal (Principal opcional, resolve_capabilities)
  - domain.filters (RawListFilters, CallerCapabilities)

Notas:
  - Acá NO se valida semántica (rangos, whitelists, valores de enums):
    eso lo hacen normalize() y compose_filters() para responder 400 uniforme.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Query

from ....crosscutting.config import get_settings
from ....domain.filters import CallerCapabilities, RawListFilters
from ....identity.principal import (
    Principal,
    get_optional_principal,
    resolve_capabilities,
)


@dataclass(frozen=True)
class PageParams:
    start: Optional[int] = None
    count: Optional[int] = None
    sort: Optional[str] = None


def get_page_params(
    start: Optional[int] = Query(None, description="Offset (>= 0)"),
    count: Optional[int] = Query(None, description="Tamaño de página"),
    sort: Optional[str] = Query(
        None, description="Campo de orden; prefijo '-' = descendente"
    ),
) -> PageParams:
    return PageParams(start=start, count=count, sort=sort)


def get_raw_filters(
    category_one_of: Optional[list[int]] = Query(None, alias="categoryOneOf"),
    licence_one_of: Optional[list[int]] = Query(None, alias="licenceOneOf"),
    language_one_of: Optional[list[str]] = Query(None, alias="languageOneOf"),
    tags_one_of: Optional[list[str]] = Query(None, alias="tagsOneOf"),
    tags_all_of: Optional[list[str]] = Query(None, alias="tagsAllOf"),
    nsfw: Optional[str] = Query(None, description="true | false | both"),
    filter_: Optional[str] = Query(None, alias="filter", description="local | all-local"),
    playlist_type: Optional[int] = Query(None, alias="playlistType"),
    rating: Optional[str] = Query(None, description="like | dislike"),
) -> RawListFilters:
    """Filtros crudos del request (listas repetibles: ?tagsOneOf=a&tagsOneOf=b)."""
    return RawListFilters(
        category_one_of=tuple(category_one_of or ()),
        licence_one_of=tuple(licence_one_of or ()),
        language_one_of=tuple(language_one_of or ()),
        tags_one_of=tuple(tags_one_of or ()),
        tags_all_of=tuple(tags_all_of or ()),
        nsfw=nsfw,
        filter=filter_,
        playlist_type=playlist_type,
        rating=rating,
    )


def get_caller_capabilities(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> CallerCapabilities:
    """Capacidades del caller para este request (nunca cacheadas)."""
    return resolve_capabilities(principal, get_settings())
