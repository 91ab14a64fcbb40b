"""
===============================================================================
DOMAIN: Value Objects (Immutable Domain Primitives)
===============================================================================

Contenido:
    - ResourceType: recursos listables de una cuenta
    - AccountHandle: `name` o `name@host` ya parseado

Principios:
    - Inmutabilidad (frozen dataclasses / enums)
    - Validación en constructor
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResourceType(str, Enum):
    """Recursos listables (el valor coincide con el segmento de URL)."""

    ACCOUNTS = "accounts"
    VIDEOS = "videos"
    VIDEO_CHANNELS = "video-channels"
    VIDEO_PLAYLISTS = "video-playlists"
    RATINGS = "ratings"


@dataclass(frozen=True, slots=True)
class AccountHandle:
    """
    Handle de cuenta: `name` (local) o `name@host`.

    host=None significa "local". Si el host coincide con el de la instancia,
    se normaliza a None para que la búsqueda sea de una cuenta local.
    """

    name: str
    host: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("account name requerido")

    @classmethod
    def parse(cls, raw: str, *, local_host: str) -> "AccountHandle":
        value = (raw or "").strip()
        name, sep, host = value.partition("@")
        if not sep:
            return cls(name=name)
        if not host:
            raise ValueError(f"handle inválido: '{raw}'")
        host = host.lower()
        return cls(name=name, host=None if host == local_host.lower() else host)

    def __str__(self) -> str:
        return f"{self.name}@{self.host}" if self.host else self.name
