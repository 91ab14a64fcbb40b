"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/rows.py
============================================================
Responsibilities:
- Centralizar columnas SELECT y mapping fila -> entidad para los
  repositorios Postgres (mismo orden de columnas = mapping consistente).
- Ejecutar queries con manejo de errores uniforme (StoreUnavailableError).

Tablas (esquema administrado fuera de este servicio):
- account, actor, video, video_channel, video_playlist,
  account_video_rate, server_followed_accounts, server_followed_channels
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import StoreUnavailableError
from ....crosscutting.logger import logger
from ....domain.entities import (
    Account,
    AccountVideoRate,
    Actor,
    PlaylistType,
    Privacy,
    RateType,
    Video,
    VideoChannel,
    VideoPlaylist,
)

ACCOUNT_COLUMNS = """
    a.id, a.name, a.display_name, a.description, a.user_id,
    a.created_at, a.updated_at,
    ac.id, ac.url, ac.preferred_username, ac.host, ac.created_at, ac.updated_at
"""
ACCOUNT_FROM = "FROM account a JOIN actor ac ON ac.id = a.actor_id"

VIDEO_COLUMNS = """
    v.id, v.name, v.account_id, v.channel_id, v.privacy, v.nsfw, v.is_local,
    v.category, v.licence, v.language, v.tags, v.duration, v.views, v.likes,
    v.created_at, v.published_at, v.updated_at
"""

CHANNEL_COLUMNS = """
    c.id, c.name, c.account_id, c.display_name, c.description, c.is_local,
    c.created_at, c.updated_at
"""

PLAYLIST_COLUMNS = """
    p.id, p.display_name, p.account_id, p.privacy, p.type, p.channel_id,
    p.description, p.is_local, p.videos_length, p.created_at, p.updated_at
"""

RATE_COLUMNS = "r.id, r.account_id, r.type, r.created_at, " + VIDEO_COLUMNS

_VIDEO_WIDTH = 17


def row_to_account(row: tuple) -> Account:
    (
        account_id,
        name,
        display_name,
        description,
        user_id,
        created_at,
        updated_at,
        actor_id,
        actor_url,
        preferred_username,
        host,
        actor_created_at,
        actor_updated_at,
    ) = row
    return Account(
        id=account_id,
        name=name,
        display_name=display_name or "",
        description=description,
        user_id=user_id,
        created_at=created_at,
        updated_at=updated_at,
        actor=Actor(
            id=actor_id,
            url=actor_url,
            preferred_username=preferred_username,
            host=host,
            created_at=actor_created_at,
            updated_at=actor_updated_at,
        ),
    )


def row_to_video(row: tuple) -> Video:
    (
        video_id,
        name,
        account_id,
        channel_id,
        privacy,
        nsfw,
        is_local,
        category,
        licence,
        language,
        tags,
        duration,
        views,
        likes,
        created_at,
        published_at,
        updated_at,
    ) = row
    return Video(
        id=video_id,
        name=name,
        account_id=account_id,
        channel_id=channel_id,
        privacy=Privacy(privacy),
        nsfw=bool(nsfw),
        is_local=bool(is_local),
        category=category,
        licence=licence,
        language=language,
        tags=tuple(tags or ()),
        duration=duration or 0,
        views=views or 0,
        likes=likes or 0,
        created_at=created_at,
        published_at=published_at,
        updated_at=updated_at,
    )


def row_to_channel(row: tuple) -> VideoChannel:
    (
        channel_id,
        name,
        account_id,
        display_name,
        description,
        is_local,
        created_at,
        updated_at,
    ) = row
    return VideoChannel(
        id=channel_id,
        name=name,
        account_id=account_id,
        display_name=display_name or "",
        description=description,
        is_local=bool(is_local),
        created_at=created_at,
        updated_at=updated_at,
    )


def row_to_playlist(row: tuple) -> VideoPlaylist:
    (
        playlist_id,
        display_name,
        account_id,
        privacy,
        playlist_type,
        channel_id,
        description,
        is_local,
        videos_length,
        created_at,
        updated_at,
    ) = row
    return VideoPlaylist(
        id=playlist_id,
        display_name=display_name,
        account_id=account_id,
        privacy=Privacy(privacy),
        type=PlaylistType(playlist_type),
        channel_id=channel_id,
        description=description,
        is_local=bool(is_local),
        videos_length=videos_length or 0,
        created_at=created_at,
        updated_at=updated_at,
    )


def row_to_rate(row: tuple) -> AccountVideoRate:
    rate_id, account_id, rate_type, created_at = row[:4]
    return AccountVideoRate(
        id=rate_id,
        account_id=account_id,
        type=RateType(rate_type),
        created_at=created_at,
        video=row_to_video(tuple(row[4 : 4 + _VIDEO_WIDTH])),
    )


class PostgresRepositoryBase:
    """R: Pool inyectable + helpers de ejecución con errores consistentes."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _store_error(
        self, context_msg: str, extra: dict, exc: Exception
    ) -> StoreUnavailableError:
        logger.exception(context_msg, extra={**extra, "error": str(exc)})
        return StoreUnavailableError(f"{context_msg}: {exc}", original_error=exc)

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            raise self._store_error(context_msg, extra, exc) from exc

    def _fetch_page(
        self,
        *,
        page_query: str,
        count_query: str,
        params: Iterable[object],
        page_params: Iterable[object],
        context_msg: str,
        extra: dict,
    ) -> tuple[list[tuple], int]:
        """
        R: Página + COUNT(*) sobre el mismo WHERE.

        Ambas queries comparten un snapshot (REPEATABLE READ): `total` es
        consistente con la página aun con escrituras concurrentes.
        """
        params = tuple(params)
        try:
            with self._get_pool().connection() as conn, conn.transaction():
                conn.execute("SET TRANSACTION ISOLATION LEVEL REPEATABLE READ")
                rows = conn.execute(page_query, params + tuple(page_params)).fetchall()
                count_row = conn.execute(count_query, params).fetchone()
        except Exception as exc:
            raise self._store_error(context_msg, extra, exc) from exc
        return rows, int(count_row[0]) if count_row else 0
