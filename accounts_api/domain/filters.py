"""
===============================================================================
TARJETA CRC — domain/filters.py
===============================================================================

Módulo:
    Filter Composer (parámetros crudos -> FilterDescriptor inmutable)

Responsabilidades:
    - Traducir filtros de request por tipo de recurso a un descriptor tipado.
    - Resolver NSFW cuando el caller no lo especifica (usuario -> instancia).
    - Restringir por follow graph salvo capacidad probada de búsqueda remota.
    - Restringir `filter=all-local` al right SEE_ALL_VIDEOS.

Colaboradores:
    - domain.visibility_policy.VisibilityScope
    - identity.users.UserRight
    - domain.resources: registry que asocia recurso -> tipo de descriptor
    - infrastructure/repositories: executors que consumen los descriptores

Restricciones:
    - Nunca ejecuta queries.
    - Capacidad no probada => RESTRICTED (nunca se escala por omisión).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple

from ..crosscutting.exceptions import (
    ForbiddenError,
    InvalidFilterError,
    UnauthorizedError,
)
from ..identity.users import UserRight
from .entities import NSFWPolicy, PlaylistType, RateType, VideoFilter
from .value_objects import ResourceType
from .visibility_policy import VisibilityScope


class FollowerRestriction(str, Enum):
    """
    Restricción por follow graph del servidor.

    UNSPECIFIED es un estado legal que se comporta como RESTRICTED.
    """

    UNRESTRICTED = "unrestricted"
    RESTRICTED = "restricted"
    UNSPECIFIED = "unspecified"

    @property
    def is_restricted(self) -> bool:
        return self is not FollowerRestriction.UNRESTRICTED


@dataclass(frozen=True, slots=True)
class CallerCapabilities:
    """Capacidades del caller para este request (derivadas de identidad + config)."""

    authenticated: bool = False
    can_search_remote_uri: bool = False
    rights: frozenset[UserRight] = frozenset()
    user_nsfw_policy: Optional[NSFWPolicy] = None
    instance_nsfw_policy: NSFWPolicy = NSFWPolicy.DO_NOT_LIST

    def has_right(self, right: UserRight) -> bool:
        return right in self.rights


@dataclass(frozen=True, slots=True)
class RawListFilters:
    """Filtros tal como llegan del request (sin validar)."""

    category_one_of: Tuple[int, ...] = ()
    licence_one_of: Tuple[int, ...] = ()
    language_one_of: Tuple[str, ...] = ()
    tags_one_of: Tuple[str, ...] = ()
    tags_all_of: Tuple[str, ...] = ()
    nsfw: Optional[str] = None
    filter: Optional[str] = None
    playlist_type: Optional[int] = None
    rating: Optional[str] = None


# ---------------------------------------------------------------------------
# Descriptores
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FilterDescriptor:
    visibility: VisibilityScope = VisibilityScope.PUBLIC_ONLY


@dataclass(frozen=True)
class AccountFilters(FilterDescriptor):
    pass


@dataclass(frozen=True)
class ChannelFilters(FilterDescriptor):
    pass


@dataclass(frozen=True)
class VideoFilters(FilterDescriptor):
    follower_restriction: FollowerRestriction = FollowerRestriction.UNSPECIFIED
    category_one_of: frozenset[int] = field(default_factory=frozenset)
    licence_one_of: frozenset[int] = field(default_factory=frozenset)
    language_one_of: frozenset[str] = field(default_factory=frozenset)
    tags_one_of: frozenset[str] = field(default_factory=frozenset)
    tags_all_of: frozenset[str] = field(default_factory=frozenset)
    # True: solo NSFW, False: sin NSFW, None: ambos
    nsfw: Optional[bool] = None
    filter: Optional[VideoFilter] = None


@dataclass(frozen=True)
class PlaylistFilters(FilterDescriptor):
    follower_restriction: FollowerRestriction = FollowerRestriction.RESTRICTED
    playlist_type: Optional[PlaylistType] = None

    @property
    def include_private_and_unlisted(self) -> bool:
        return self.visibility.includes_private_and_unlisted


@dataclass(frozen=True)
class RatingFilters(FilterDescriptor):
    rating_type: Optional[RateType] = None


# ---------------------------------------------------------------------------
# Resolución de filtros
# ---------------------------------------------------------------------------

_NSFW_PARAM = {"true": True, "false": False, "both": None}


def build_nsfw_filter(
    raw: Optional[str],
    *,
    user_policy: Optional[NSFWPolicy] = None,
    instance_policy: NSFWPolicy = NSFWPolicy.DO_NOT_LIST,
) -> Optional[bool]:
    """
    Resuelve el filtro NSFW.

    Explícito ("true"/"false"/"both") gana. Si no, manda la política del
    usuario y, sin usuario, la de la instancia: do_not_list excluye NSFW,
    cualquier otra política lista ambos.
    """
    if raw is not None:
        key = raw.strip().lower()
        if key not in _NSFW_PARAM:
            raise InvalidFilterError(f"nsfw inválido: '{raw}'")
        return _NSFW_PARAM[key]

    policy = user_policy if user_policy is not None else instance_policy
    return False if policy == NSFWPolicy.DO_NOT_LIST else None


def _normalize_tags(tags: Iterable[str]) -> frozenset[str]:
    return frozenset(t.strip().lower() for t in tags if t and t.strip())


def _parse_video_filter(
    raw: Optional[str], capabilities: CallerCapabilities
) -> Optional[VideoFilter]:
    if raw is None:
        return None
    try:
        mode = VideoFilter(raw)
    except ValueError:
        raise InvalidFilterError(f"filter inválido: '{raw}'") from None
    if mode is VideoFilter.ALL_LOCAL:
        if not capabilities.authenticated:
            raise UnauthorizedError("filter=all-local requiere autenticación")
        if not capabilities.has_right(UserRight.SEE_ALL_VIDEOS):
            raise ForbiddenError(
                "filter=all-local requiere el permiso SEE_ALL_VIDEOS"
            )
    return mode


def _compose_videos(
    raw: RawListFilters, scope: VisibilityScope, capabilities: CallerCapabilities
) -> VideoFilters:
    mode = _parse_video_filter(raw.filter, capabilities)
    restriction = (
        FollowerRestriction.UNRESTRICTED
        if capabilities.can_search_remote_uri
        else FollowerRestriction.RESTRICTED
    )
    return VideoFilters(
        # all-local ya exige SEE_ALL_VIDEOS: incluye videos locales de cualquier privacidad
        visibility=VisibilityScope.ALL if mode is VideoFilter.ALL_LOCAL else scope,
        follower_restriction=restriction,
        category_one_of=frozenset(raw.category_one_of),
        licence_one_of=frozenset(raw.licence_one_of),
        language_one_of=frozenset(raw.language_one_of),
        tags_one_of=_normalize_tags(raw.tags_one_of),
        tags_all_of=_normalize_tags(raw.tags_all_of),
        nsfw=build_nsfw_filter(
            raw.nsfw,
            user_policy=capabilities.user_nsfw_policy,
            instance_policy=capabilities.instance_nsfw_policy,
        ),
        filter=mode,
    )


def _compose_playlists(
    raw: RawListFilters, scope: VisibilityScope, capabilities: CallerCapabilities
) -> PlaylistFilters:
    playlist_type = None
    if raw.playlist_type is not None:
        try:
            playlist_type = PlaylistType(raw.playlist_type)
        except ValueError:
            raise InvalidFilterError(
                f"playlistType inválido: {raw.playlist_type}"
            ) from None
    return PlaylistFilters(
        visibility=scope,
        follower_restriction=FollowerRestriction.RESTRICTED,
        playlist_type=playlist_type,
    )


def _compose_ratings(
    raw: RawListFilters, scope: VisibilityScope, capabilities: CallerCapabilities
) -> RatingFilters:
    rating_type = None
    if raw.rating is not None:
        try:
            rating_type = RateType(raw.rating)
        except ValueError:
            raise InvalidFilterError(f"rating inválido: '{raw.rating}'") from None
    return RatingFilters(visibility=scope, rating_type=rating_type)


_COMPOSERS: Dict[
    ResourceType,
    Callable[[RawListFilters, VisibilityScope, CallerCapabilities], FilterDescriptor],
] = {
    ResourceType.ACCOUNTS: lambda raw, scope, caps: AccountFilters(visibility=scope),
    ResourceType.VIDEO_CHANNELS: lambda raw, scope, caps: ChannelFilters(
        visibility=scope
    ),
    ResourceType.VIDEOS: _compose_videos,
    ResourceType.VIDEO_PLAYLISTS: _compose_playlists,
    ResourceType.RATINGS: _compose_ratings,
}


def compose_filters(
    resource_type: ResourceType,
    raw: RawListFilters,
    scope: VisibilityScope,
    capabilities: CallerCapabilities,
) -> FilterDescriptor:
    """
    Construye el descriptor del recurso.

    Raises:
        InvalidFilterError: valor de filtro desconocido
        ForbiddenError: modo de filtro que excede los rights del caller
    """
    return _COMPOSERS[resource_type](raw, scope, capabilities)

