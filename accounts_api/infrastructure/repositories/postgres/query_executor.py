"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/query_executor.py
============================================================
Class: PostgresQueryExecutor

Responsibilities:
- Implementar QueryExecutor en PostgreSQL (SQL crudo, parametrizado).
- Traducir FilterDescriptor -> WHERE y SortKey -> ORDER BY (allowlist).
- Devolver (items, total) con un COUNT(*) sobre el mismo WHERE.

Collaborators:
- domain.filters (descriptores), domain.value_objects.ResourceType
- rows.PostgresRepositoryBase (pool + errores -> StoreUnavailableError)

Constraints / Notes:
- El nombre de columna del ORDER BY sale SOLO de _SORT_COLUMNS
  (nunca del input del usuario).
- Orden determinístico: columna + NULLS LAST + id ASC.
- Tags se guardan en minúsculas: `&&` = tagsOneOf (OR), `@>` = tagsAllOf (AND).
============================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Tuple

from ....crosscutting.pagination import ListQuery
from ....domain.entities import VideoFilter
from ....domain.filters import (
    FilterDescriptor,
    PlaylistFilters,
    RatingFilters,
    VideoFilters,
)
from ....domain.value_objects import ResourceType
from .rows import (
    ACCOUNT_COLUMNS,
    ACCOUNT_FROM,
    CHANNEL_COLUMNS,
    PLAYLIST_COLUMNS,
    RATE_COLUMNS,
    VIDEO_COLUMNS,
    PostgresRepositoryBase,
    row_to_account,
    row_to_channel,
    row_to_playlist,
    row_to_rate,
    row_to_video,
)

# R: sort público -> columna SQL (allowlist)
_SORT_COLUMNS: Dict[ResourceType, Dict[str, str]] = {
    ResourceType.ACCOUNTS: {"createdAt": "a.created_at"},
    ResourceType.VIDEOS: {
        "name": "v.name",
        "duration": "v.duration",
        "createdAt": "v.created_at",
        "publishedAt": "v.published_at",
        "views": "v.views",
        "likes": "v.likes",
        "trending": "v.views",
    },
    ResourceType.VIDEO_CHANNELS: {
        "id": "c.id",
        "name": "c.name",
        "updatedAt": "c.updated_at",
        "createdAt": "c.created_at",
    },
    ResourceType.VIDEO_PLAYLISTS: {
        "displayName": "p.display_name",
        "createdAt": "p.created_at",
        "updatedAt": "p.updated_at",
    },
    ResourceType.RATINGS: {"createdAt": "r.created_at"},
}

_FOLLOWED_ACCOUNTS = "SELECT account_id FROM server_followed_accounts"
_FOLLOWED_CHANNELS = "SELECT channel_id FROM server_followed_channels"


@dataclass
class _SelectSpec:
    columns: str
    from_sql: str
    id_column: str
    mapper: Callable[[tuple], Any]
    conditions: List[str] = field(default_factory=list)
    params: List[object] = field(default_factory=list)

    def where(self, condition: str, *params: object) -> None:
        self.conditions.append(condition)
        self.params.extend(params)

    @property
    def where_sql(self) -> str:
        return f"WHERE {' AND '.join(self.conditions)}" if self.conditions else ""


def _video_spec(scope_id: int | None, f: VideoFilters) -> _SelectSpec:
    spec = _SelectSpec(VIDEO_COLUMNS, "FROM video v", "v.id", row_to_video)
    spec.where("v.account_id = %s", scope_id)
    spec.where(
        "v.privacy = ANY(%s)", sorted(int(p) for p in f.visibility.allowed_privacies())
    )
    if f.filter in (VideoFilter.LOCAL, VideoFilter.ALL_LOCAL):
        spec.where("v.is_local")
    if f.follower_restriction.is_restricted:
        spec.where(
            "(v.is_local"
            f" OR v.account_id IN ({_FOLLOWED_ACCOUNTS})"
            f" OR v.channel_id IN ({_FOLLOWED_CHANNELS}))"
        )
    if f.category_one_of:
        spec.where("v.category = ANY(%s)", sorted(f.category_one_of))
    if f.licence_one_of:
        spec.where("v.licence = ANY(%s)", sorted(f.licence_one_of))
    if f.language_one_of:
        spec.where("v.language = ANY(%s)", sorted(f.language_one_of))
    if f.tags_one_of:
        spec.where("v.tags && %s::text[]", sorted(f.tags_one_of))
    if f.tags_all_of:
        spec.where("v.tags @> %s::text[]", sorted(f.tags_all_of))
    if f.nsfw is not None:
        spec.where("v.nsfw = %s", f.nsfw)
    return spec


def _playlist_spec(scope_id: int | None, f: PlaylistFilters) -> _SelectSpec:
    spec = _SelectSpec(PLAYLIST_COLUMNS, "FROM video_playlist p", "p.id", row_to_playlist)
    spec.where("p.account_id = %s", scope_id)
    spec.where(
        "p.privacy = ANY(%s)", sorted(int(p) for p in f.visibility.allowed_privacies())
    )
    if f.playlist_type is not None:
        spec.where("p.type = %s", int(f.playlist_type))
    if f.follower_restriction.is_restricted:
        spec.where(f"(p.is_local OR p.account_id IN ({_FOLLOWED_ACCOUNTS}))")
    return spec


def _rating_spec(scope_id: int | None, f: RatingFilters) -> _SelectSpec:
    spec = _SelectSpec(
        RATE_COLUMNS,
        "FROM account_video_rate r JOIN video v ON v.id = r.video_id",
        "r.id",
        row_to_rate,
    )
    spec.where("r.account_id = %s", scope_id)
    if f.rating_type is not None:
        spec.where("r.type = %s", f.rating_type.value)
    return spec


def _build_spec(
    resource_type: ResourceType, scope_id: int | None, filters: FilterDescriptor
) -> _SelectSpec:
    if resource_type is ResourceType.ACCOUNTS:
        return _SelectSpec(ACCOUNT_COLUMNS, ACCOUNT_FROM, "a.id", row_to_account)
    if resource_type is ResourceType.VIDEO_CHANNELS:
        spec = _SelectSpec(
            CHANNEL_COLUMNS, "FROM video_channel c", "c.id", row_to_channel
        )
        spec.where("c.account_id = %s", scope_id)
        return spec
    if resource_type is ResourceType.VIDEOS:
        assert isinstance(filters, VideoFilters)
        return _video_spec(scope_id, filters)
    if resource_type is ResourceType.VIDEO_PLAYLISTS:
        assert isinstance(filters, PlaylistFilters)
        return _playlist_spec(scope_id, filters)
    assert isinstance(filters, RatingFilters)
    return _rating_spec(scope_id, filters)


class PostgresQueryExecutor(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del QueryExecutor."""

    def execute_list(
        self,
        resource_type: ResourceType,
        scope_id: int | None,
        query: ListQuery,
        filters: FilterDescriptor,
    ) -> Tuple[Sequence[Any], int]:
        spec = _build_spec(resource_type, scope_id, filters)
        sort_column = _SORT_COLUMNS[resource_type][query.sort.field]
        direction = "DESC" if query.sort.descending else "ASC"

        page_query = f"""
            SELECT {spec.columns}
            {spec.from_sql}
            {spec.where_sql}
            ORDER BY {sort_column} {direction} NULLS LAST, {spec.id_column} ASC
            LIMIT %s OFFSET %s
        """
        count_query = f"""
            SELECT COUNT(*)
            {spec.from_sql}
            {spec.where_sql}
        """

        rows, total = self._fetch_page(
            page_query=page_query,
            count_query=count_query,
            params=spec.params,
            page_params=(query.count, query.start),
            context_msg="PostgresQueryExecutor: Failed to list resources",
            extra={"resource": resource_type.value, "scope_id": scope_id},
        )
        return [spec.mapper(row) for row in rows], total
