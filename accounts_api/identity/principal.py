"""
===============================================================================
TARJETA CRC — identity/principal.py
===============================================================================

Módulo:
    Identidad del caller (Principal) y capacidades derivadas

Responsabilidades:
    - Representar la identidad autenticada que deja la capa de auth upstream
      en `request.state.principal`.
    - Exponer la dependencia FastAPI del principal opcional.
    - Derivar CallerCapabilities (búsqueda remota, rights, política NSFW).

Colaboradores:
    - identity/users.py: roles y rights
    - crosscutting/config.py: flags de búsqueda remota y NSFW por defecto
    - interfaces/api/http/routers/accounts.py

Notas de diseño:
    - La verificación de credenciales vive fuera de este servicio; acá solo
      se consume el resultado.
    - Sin principal => capacidades mínimas (fail closed).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ..crosscutting.config import Settings
from ..domain.entities import NSFWPolicy
from ..domain.filters import CallerCapabilities
from .users import UserRight, UserRole, rights_for


@dataclass(frozen=True, slots=True)
class Principal:
    """Usuario autenticado y la cuenta que lo respalda."""

    account_id: int
    user_id: int
    role: UserRole = UserRole.USER
    nsfw_policy: NSFWPolicy = NSFWPolicy.DO_NOT_LIST

    @property
    def rights(self) -> frozenset[UserRight]:
        return rights_for(self.role)

    def has_right(self, right: UserRight) -> bool:
        return right in self.rights


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def get_optional_principal(request: Request) -> Optional[Principal]:
    """Principal del request o None (caller anónimo)."""
    principal = getattr(request.state, "principal", None)
    return principal if isinstance(principal, Principal) else None


# ---------------------------------------------------------------------------
# Capacidades
# ---------------------------------------------------------------------------


def can_search_remote_uri(principal: Optional[Principal], settings: Settings) -> bool:
    """
    Abierta a anónimos => abierta a todos; si no, solo usuarios
    autenticados con el flag de usuarios activo.
    """
    if settings.search_remote_uri_anonymous:
        return True
    return principal is not None and settings.search_remote_uri_users


def resolve_capabilities(
    principal: Optional[Principal], settings: Settings
) -> CallerCapabilities:
    return CallerCapabilities(
        authenticated=principal is not None,
        can_search_remote_uri=can_search_remote_uri(principal, settings),
        rights=principal.rights if principal else frozenset(),
        user_nsfw_policy=principal.nsfw_policy if principal else None,
        instance_nsfw_policy=settings.instance_default_nsfw_policy,
    )
