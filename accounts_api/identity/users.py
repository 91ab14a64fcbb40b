"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Roles y rights de usuario

Responsabilidades:
    - Definir el enum de roles de usuario.
    - Definir el catálogo de rights que consulta la capa de listados.
    - Mapear rol -> rights (fuente única de verdad).

Colaboradores:
    - identity/principal.py: Principal.has_right()
    - domain/filters.py: `filter=all-local` exige SEE_ALL_VIDEOS

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping


class UserRole(str, Enum):
    """Roles de usuario de la instancia."""

    ADMINISTRATOR = "administrator"
    MODERATOR = "moderator"
    USER = "user"


class UserRight(str, Enum):
    """Rights relevantes para vistas de solo lectura."""

    SEE_ALL_VIDEOS = "see_all_videos"


ROLE_RIGHTS: Mapping[UserRole, frozenset[UserRight]] = {
    UserRole.ADMINISTRATOR: frozenset(UserRight),
    UserRole.MODERATOR: frozenset({UserRight.SEE_ALL_VIDEOS}),
    UserRole.USER: frozenset(),
}


def rights_for(role: UserRole) -> frozenset[UserRight]:
    return ROLE_RIGHTS.get(role, frozenset())
