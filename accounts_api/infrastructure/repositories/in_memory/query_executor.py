"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/query_executor.py
============================================================
Class: InMemoryQueryExecutor

Responsibilities:
  - Implementar QueryExecutor sobre InMemoryCatalog (tests / local dev).
  - Replicar la semántica de filtros del executor Postgres:
      * privacidad según VisibilityScope
      * follow graph (local o seguido) cuando la restricción aplica
      * tagsOneOf = OR, tagsAllOf = AND, OR dentro de cada campo
      * nsfw True/False/None
  - Ordenar por el SortKey validado (NULLS LAST, desempate por id ASC).
  - Calcular total sobre el conjunto filtrado completo, antes de paginar.

Collaborators:
  - domain.filters (descriptores)
  - domain.value_objects.ResourceType
  - crosscutting.pagination.ListQuery
============================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

from ....crosscutting.pagination import ListQuery
from ....domain.entities import Video, VideoFilter, VideoPlaylist
from ....domain.filters import (
    FilterDescriptor,
    PlaylistFilters,
    RatingFilters,
    VideoFilters,
)
from ....domain.value_objects import ResourceType
from .catalog import CatalogSnapshot, InMemoryCatalog

# R: campo público de sort -> atributo de la entidad
_SORT_ATTRS: Dict[ResourceType, Dict[str, Callable[[Any], Any]]] = {
    ResourceType.ACCOUNTS: {"createdAt": lambda a: a.created_at},
    ResourceType.VIDEOS: {
        "name": lambda v: v.name,
        "duration": lambda v: v.duration,
        "createdAt": lambda v: v.created_at,
        "publishedAt": lambda v: v.published_at,
        "views": lambda v: v.views,
        "likes": lambda v: v.likes,
        "trending": lambda v: v.views,
    },
    ResourceType.VIDEO_CHANNELS: {
        "id": lambda c: c.id,
        "name": lambda c: c.name,
        "updatedAt": lambda c: c.updated_at,
        "createdAt": lambda c: c.created_at,
    },
    ResourceType.VIDEO_PLAYLISTS: {
        "displayName": lambda p: p.display_name,
        "createdAt": lambda p: p.created_at,
        "updatedAt": lambda p: p.updated_at,
    },
    ResourceType.RATINGS: {"createdAt": lambda r: r.created_at},
}


def _video_matches(video: Video, f: VideoFilters, snap: CatalogSnapshot) -> bool:
    if video.privacy not in f.visibility.allowed_privacies():
        return False
    if f.filter in (VideoFilter.LOCAL, VideoFilter.ALL_LOCAL) and not video.is_local:
        return False
    if f.follower_restriction.is_restricted and not (
        video.is_local
        or video.account_id in snap.followed_account_ids
        or video.channel_id in snap.followed_channel_ids
    ):
        return False
    if f.category_one_of and video.category not in f.category_one_of:
        return False
    if f.licence_one_of and video.licence not in f.licence_one_of:
        return False
    if f.language_one_of and video.language not in f.language_one_of:
        return False

    tags = {t.lower() for t in video.tags}
    if f.tags_one_of and not (tags & f.tags_one_of):
        return False
    if f.tags_all_of and not f.tags_all_of <= tags:
        return False

    if f.nsfw is not None and video.nsfw != f.nsfw:
        return False
    return True


def _playlist_matches(
    playlist: VideoPlaylist, f: PlaylistFilters, snap: CatalogSnapshot
) -> bool:
    if playlist.privacy not in f.visibility.allowed_privacies():
        return False
    if f.playlist_type is not None and playlist.type != f.playlist_type:
        return False
    if f.follower_restriction.is_restricted and not (
        playlist.is_local or playlist.account_id in snap.followed_account_ids
    ):
        return False
    return True


def _sorted(
    items: Iterable[Any], key: Callable[[Any], Any], descending: bool
) -> List[Any]:
    """Orden estable: valor (ASC/DESC) con NULLS LAST, desempate por id ASC."""
    by_id = sorted(items, key=lambda item: item.id)
    present = [item for item in by_id if key(item) is not None]
    missing = [item for item in by_id if key(item) is None]
    return sorted(present, key=key, reverse=descending) + missing


class InMemoryQueryExecutor:
    def __init__(self, catalog: InMemoryCatalog) -> None:
        self._catalog = catalog

    def execute_list(
        self,
        resource_type: ResourceType,
        scope_id: int | None,
        query: ListQuery,
        filters: FilterDescriptor,
    ) -> Tuple[Sequence[Any], int]:
        snap = self._catalog.snapshot()
        matching = self._select(resource_type, scope_id, filters, snap)

        key = _SORT_ATTRS[resource_type][query.sort.field]
        ordered = _sorted(matching, key, query.sort.descending)

        total = len(ordered)
        return ordered[query.start : query.start + query.count], total

    @staticmethod
    def _select(
        resource_type: ResourceType,
        scope_id: int | None,
        filters: FilterDescriptor,
        snap: CatalogSnapshot,
    ) -> List[Any]:
        if resource_type is ResourceType.ACCOUNTS:
            return list(snap.accounts)

        if resource_type is ResourceType.VIDEO_CHANNELS:
            return [c for c in snap.channels if c.account_id == scope_id]

        if resource_type is ResourceType.VIDEOS:
            assert isinstance(filters, VideoFilters)
            return [
                v
                for v in snap.videos
                if v.account_id == scope_id and _video_matches(v, filters, snap)
            ]

        if resource_type is ResourceType.VIDEO_PLAYLISTS:
            assert isinstance(filters, PlaylistFilters)
            return [
                p
                for p in snap.playlists
                if p.account_id == scope_id and _playlist_matches(p, filters, snap)
            ]

        assert isinstance(filters, RatingFilters)
        return [
            r
            for r in snap.rates
            if r.account_id == scope_id
            and (filters.rating_type is None or r.type == filters.rating_type)
        ]
