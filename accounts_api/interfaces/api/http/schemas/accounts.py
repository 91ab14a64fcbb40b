"""
===============================================================================
TARJETA CRC — schemas/accounts.py
===============================================================================

Módulo:
    Schemas HTTP (responses) para cuentas y sus recursos

Responsabilidades:
    - Definir DTOs de respuesta para cuentas, videos, canales, playlists y ratings.
    - Envelope genérico de listados: {"data": [...], "total": n}.
    - Serializar en camelCase (contrato público de la API federada).

Colaboradores:
    - domain.entities (Account, Video, VideoChannel, VideoPlaylist, AccountVideoRate)
    - routers/accounts.py (mapeo entidad -> DTO)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountRes(_CamelModel):
    id: int
    name: str
    display_name: str
    description: Optional[str] = None
    host: str
    name_with_host: str
    url: str
    is_local: bool
    created_at: datetime
    updated_at: datetime


class VideoRes(_CamelModel):
    id: int
    name: str
    account_id: int
    channel_id: Optional[int] = None
    privacy: int = Field(..., description="1=public, 2=unlisted, 3=private")
    nsfw: bool
    is_local: bool
    category: Optional[int] = None
    licence: Optional[int] = None
    language: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    duration: int
    views: int
    likes: int
    created_at: datetime
    published_at: Optional[datetime] = None
    updated_at: datetime


class VideoChannelRes(_CamelModel):
    id: int
    name: str
    account_id: int
    display_name: str
    description: Optional[str] = None
    is_local: bool
    created_at: datetime
    updated_at: datetime


class VideoPlaylistRes(_CamelModel):
    id: int
    display_name: str
    account_id: int
    channel_id: Optional[int] = None
    description: Optional[str] = None
    privacy: int
    type: int = Field(..., description="1=regular, 2=watch later")
    is_local: bool
    videos_length: int
    created_at: datetime
    updated_at: datetime


class AccountVideoRateRes(_CamelModel):
    video: VideoRes
    rating: str = Field(..., description="like | dislike")


class ResultListRes(BaseModel, Generic[T]):
    """Envelope de listados: total cuenta el conjunto filtrado completo."""

    data: list[T]
    total: int = Field(..., ge=0)
