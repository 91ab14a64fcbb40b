"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    Account,
    AccountVideoRate,
    Actor,
    NSFWPolicy,
    PlaylistType,
    Privacy,
    RateType,
    Video,
    VideoChannel,
    VideoFilter,
    VideoPlaylist,
)
from .repositories import AccountRepository
from .value_objects import AccountHandle, ResourceType

__all__ = [
    "Account",
    "AccountVideoRate",
    "Actor",
    "NSFWPolicy",
    "PlaylistType",
    "Privacy",
    "RateType",
    "Video",
    "VideoChannel",
    "VideoFilter",
    "VideoPlaylist",
    "AccountRepository",
    "AccountHandle",
    "ResourceType",
]
