"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Actor, Account, Video, VideoChannel, VideoPlaylist,
    AccountVideoRate) y enumeraciones de visibilidad/filtros.

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Calcular staleness del actor federado (no se persiste como booleano).
    - Mantener tipos claros para casos de uso, executors y serializers.

Colaboradores:
    - domain.filters / domain.visibility_policy: consumen enums.
    - application.freshness: consulta Account.is_outdated().
    - infrastructure/repositories: construyen estas entidades.

Principios:
    - Sin dependencias a DB/Redis/FastAPI.
    - Inmutables: los listados son de solo lectura.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum
from typing import Optional, Tuple


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enumeraciones
# ---------------------------------------------------------------------------


class Privacy(IntEnum):
    """Privacidad de videos y playlists (valores del wire format)."""

    PUBLIC = 1
    UNLISTED = 2
    PRIVATE = 3


class PlaylistType(IntEnum):
    REGULAR = 1
    WATCH_LATER = 2


class RateType(str, Enum):
    LIKE = "like"
    DISLIKE = "dislike"


class NSFWPolicy(str, Enum):
    """Preferencia de contenido sensible (usuario o default de instancia)."""

    DISPLAY = "display"
    BLUR = "blur"
    DO_NOT_LIST = "do_not_list"


class VideoFilter(str, Enum):
    """Modo `filter` del listado de videos."""

    LOCAL = "local"
    ALL_LOCAL = "all-local"


# ---------------------------------------------------------------------------
# Actor / Account
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Actor:
    """
    Identidad federada que respalda una cuenta.

    host=None significa actor local (nunca queda desactualizado).
    """

    id: int
    url: str
    preferred_username: str
    host: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_local(self) -> bool:
        return self.host is None

    def is_outdated(
        self, refresh_interval: timedelta, *, now: datetime | None = None
    ) -> bool:
        """
        True si la metadata cacheada superó el intervalo de refresh.

        Se exige que tanto el alta como la última actualización sean más
        viejas que el intervalo: un actor recién descubierto no se refresca.
        """
        if self.is_local:
            return False
        current = now or _utcnow()
        return (
            current - self.created_at > refresh_interval
            and current - self.updated_at > refresh_interval
        )


@dataclass(frozen=True)
class Account:
    """Cuenta (local o remota) dueña de videos, canales, playlists y ratings."""

    id: int
    name: str
    actor: Actor
    display_name: str = ""
    description: Optional[str] = None
    user_id: Optional[int] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def host(self) -> Optional[str]:
        return self.actor.host

    @property
    def is_local(self) -> bool:
        return self.actor.is_local

    def is_outdated(
        self, refresh_interval: timedelta, *, now: datetime | None = None
    ) -> bool:
        return self.actor.is_outdated(refresh_interval, now=now)

    def name_with_host(self, local_host: str) -> str:
        """Handle federado `name@host` (el host local se completa)."""
        return f"{self.name}@{self.host or local_host}"


# ---------------------------------------------------------------------------
# Recursos de la cuenta
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Video:
    id: int
    name: str
    account_id: int
    channel_id: Optional[int] = None
    privacy: Privacy = Privacy.PUBLIC
    nsfw: bool = False
    is_local: bool = True
    category: Optional[int] = None
    licence: Optional[int] = None
    language: Optional[str] = None
    tags: Tuple[str, ...] = ()
    duration: int = 0
    views: int = 0
    likes: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    published_at: Optional[datetime] = None
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class VideoChannel:
    id: int
    name: str
    account_id: int
    display_name: str = ""
    description: Optional[str] = None
    is_local: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class VideoPlaylist:
    id: int
    display_name: str
    account_id: int
    privacy: Privacy = Privacy.PUBLIC
    type: PlaylistType = PlaylistType.REGULAR
    channel_id: Optional[int] = None
    description: Optional[str] = None
    is_local: bool = True
    videos_length: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class AccountVideoRate:
    """Rating (like/dislike) de una cuenta sobre un video."""

    id: int
    account_id: int
    video: Video
    type: RateType
    created_at: datetime = field(default_factory=_utcnow)
