"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/accounts.py
===============================================================================

Class/Module:
    Accounts Router (vistas de solo lectura de una cuenta federada)

Responsibilities:
    - Exponer GET /accounts, /accounts/{name} y los listados por cuenta
      (videos, video-channels, video-playlists, ratings).
    - Convertir query params -> inputs del caso de uso de listado.
    - Agendar el refresh del actor (best-effort) al leer una cuenta.
    - Traducir ListingError / AccountError -> RFC7807.

Collaborators:
    - application.usecases (ListAccountResourcesUseCase, GetAccountUseCase)
    - application.freshness.FreshnessMonitor
    - container (factories DI)
    - dependencies (page params, filtros crudos, capacidades)
    - schemas.accounts (DTOs Pydantic)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
    - Error Mapping

Notes:
    - El refresh corre como BackgroundTask: se ejecuta después de enviar la
      respuesta y nunca la modifica (ni siquiera si la cola falla).
===============================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from fastapi import APIRouter, BackgroundTasks, Depends

from .....application.freshness import FreshnessMonitor
from .....application.usecases.accounts.get_account import GetAccountUseCase
from .....application.usecases.listing.list_account_resources import (
    ListAccountResourcesUseCase,
)
from .....container import (
    get_freshness_monitor,
    get_get_account_use_case,
    get_list_account_resources_use_case,
)
from .....crosscutting.config import get_settings
from .....crosscutting.pagination import format_page
from .....domain.entities import (
    Account,
    AccountVideoRate,
    Video,
    VideoChannel,
    VideoPlaylist,
)
from .....domain.filters import CallerCapabilities, RawListFilters
from .....domain.value_objects import ResourceType
from .....identity.principal import Principal, get_optional_principal
from ..dependencies import (
    PageParams,
    get_caller_capabilities,
    get_page_params,
    get_raw_filters,
)
from ..error_mapping import raise_account_error, raise_listing_error
from ..schemas.accounts import (
    AccountRes,
    AccountVideoRateRes,
    ResultListRes,
    VideoChannelRes,
    VideoPlaylistRes,
    VideoRes,
)

router = APIRouter(prefix="/accounts")


# =============================================================================
# Helpers internos (mapeo entidad -> DTO)
# =============================================================================


def _to_account_res(account: Account) -> AccountRes:
    local_host = get_settings().local_host
    return AccountRes(
        id=account.id,
        name=account.name,
        display_name=account.display_name,
        description=account.description,
        host=account.host or local_host,
        name_with_host=account.name_with_host(local_host),
        url=account.actor.url,
        is_local=account.is_local,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def _to_video_res(video: Video) -> VideoRes:
    return VideoRes(
        id=video.id,
        name=video.name,
        account_id=video.account_id,
        channel_id=video.channel_id,
        privacy=int(video.privacy),
        nsfw=video.nsfw,
        is_local=video.is_local,
        category=video.category,
        licence=video.licence,
        language=video.language,
        tags=list(video.tags),
        duration=video.duration,
        views=video.views,
        likes=video.likes,
        created_at=video.created_at,
        published_at=video.published_at,
        updated_at=video.updated_at,
    )


def _to_channel_res(channel: VideoChannel) -> VideoChannelRes:
    return VideoChannelRes(
        id=channel.id,
        name=channel.name,
        account_id=channel.account_id,
        display_name=channel.display_name,
        description=channel.description,
        is_local=channel.is_local,
        created_at=channel.created_at,
        updated_at=channel.updated_at,
    )


def _to_playlist_res(playlist: VideoPlaylist) -> VideoPlaylistRes:
    return VideoPlaylistRes(
        id=playlist.id,
        display_name=playlist.display_name,
        account_id=playlist.account_id,
        channel_id=playlist.channel_id,
        description=playlist.description,
        privacy=int(playlist.privacy),
        type=int(playlist.type),
        is_local=playlist.is_local,
        videos_length=playlist.videos_length,
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


def _to_rate_res(rate: AccountVideoRate) -> AccountVideoRateRes:
    return AccountVideoRateRes(video=_to_video_res(rate.video), rating=rate.type.value)


def _list_account_resources(
    use_case: ListAccountResourcesUseCase,
    *,
    resource_type: ResourceType,
    account_name: Optional[str],
    principal: Optional[Principal],
    capabilities: CallerCapabilities,
    page: PageParams,
    raw_filters: RawListFilters,
    serializer: Callable[[Any], Any],
) -> dict[str, Any]:
    result = use_case.execute(
        resource_type=resource_type,
        account_handle=account_name,
        requester_account_id=principal.account_id if principal else None,
        capabilities=capabilities,
        start=page.start,
        count=page.count,
        sort=page.sort,
        raw_filters=raw_filters,
    )
    if result.error is not None:
        raise_listing_error(
            result.error.code, result.error.message, account_handle=account_name
        )
    return format_page(result.page, serializer)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=ResultListRes[AccountRes], tags=["accounts"])
def list_accounts(
    page: PageParams = Depends(get_page_params),
    use_case: ListAccountResourcesUseCase = Depends(
        get_list_account_resources_use_case
    ),
):
    return _list_account_resources(
        use_case,
        resource_type=ResourceType.ACCOUNTS,
        account_name=None,
        principal=None,
        capabilities=CallerCapabilities(),
        page=page,
        raw_filters=RawListFilters(),
        serializer=_to_account_res,
    )


@router.get("/{account_name}", response_model=AccountRes, tags=["accounts"])
def get_account(
    account_name: str,
    background_tasks: BackgroundTasks,
    use_case: GetAccountUseCase = Depends(get_get_account_use_case),
    monitor: FreshnessMonitor = Depends(get_freshness_monitor),
):
    result = use_case.execute(account_name)
    if result.error is not None:
        raise_account_error(
            result.error.code, result.error.message, account_handle=account_name
        )

    background_tasks.add_task(monitor.maybe_refresh, result.account)
    return _to_account_res(result.account)


@router.get(
    "/{account_name}/videos",
    response_model=ResultListRes[VideoRes],
    tags=["videos"],
)
def list_account_videos(
    account_name: str,
    page: PageParams = Depends(get_page_params),
    raw_filters: RawListFilters = Depends(get_raw_filters),
    principal: Optional[Principal] = Depends(get_optional_principal),
    capabilities: CallerCapabilities = Depends(get_caller_capabilities),
    use_case: ListAccountResourcesUseCase = Depends(
        get_list_account_resources_use_case
    ),
):
    return _list_account_resources(
        use_case,
        resource_type=ResourceType.VIDEOS,
        account_name=account_name,
        principal=principal,
        capabilities=capabilities,
        page=page,
        raw_filters=raw_filters,
        serializer=_to_video_res,
    )


@router.get(
    "/{account_name}/video-channels",
    response_model=ResultListRes[VideoChannelRes],
    tags=["video-channels"],
)
def list_account_video_channels(
    account_name: str,
    page: PageParams = Depends(get_page_params),
    principal: Optional[Principal] = Depends(get_optional_principal),
    capabilities: CallerCapabilities = Depends(get_caller_capabilities),
    use_case: ListAccountResourcesUseCase = Depends(
        get_list_account_resources_use_case
    ),
):
    return _list_account_resources(
        use_case,
        resource_type=ResourceType.VIDEO_CHANNELS,
        account_name=account_name,
        principal=principal,
        capabilities=capabilities,
        page=page,
        raw_filters=RawListFilters(),
        serializer=_to_channel_res,
    )


@router.get(
    "/{account_name}/video-playlists",
    response_model=ResultListRes[VideoPlaylistRes],
    tags=["video-playlists"],
)
def list_account_video_playlists(
    account_name: str,
    page: PageParams = Depends(get_page_params),
    raw_filters: RawListFilters = Depends(get_raw_filters),
    principal: Optional[Principal] = Depends(get_optional_principal),
    capabilities: CallerCapabilities = Depends(get_caller_capabilities),
    use_case: ListAccountResourcesUseCase = Depends(
        get_list_account_resources_use_case
    ),
):
    return _list_account_resources(
        use_case,
        resource_type=ResourceType.VIDEO_PLAYLISTS,
        account_name=account_name,
        principal=principal,
        capabilities=capabilities,
        page=page,
        raw_filters=RawListFilters(playlist_type=raw_filters.playlist_type),
        serializer=_to_playlist_res,
    )


@router.get(
    "/{account_name}/ratings",
    response_model=ResultListRes[AccountVideoRateRes],
    tags=["ratings"],
)
def list_account_ratings(
    account_name: str,
    page: PageParams = Depends(get_page_params),
    raw_filters: RawListFilters = Depends(get_raw_filters),
    principal: Optional[Principal] = Depends(get_optional_principal),
    capabilities: CallerCapabilities = Depends(get_caller_capabilities),
    use_case: ListAccountResourcesUseCase = Depends(
        get_list_account_resources_use_case
    ),
):
    """Ratings de la cuenta: solo visibles para su dueño."""
    return _list_account_resources(
        use_case,
        resource_type=ResourceType.RATINGS,
        account_name=account_name,
        principal=principal,
        capabilities=capabilities,
        page=page,
        raw_filters=RawListFilters(rating=raw_filters.rating),
        serializer=_to_rate_res,
    )
