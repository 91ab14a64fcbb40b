"""
===============================================================================
TARJETA CRC — domain/visibility_policy.py
===============================================================================

Módulo:
    Política de Visibilidad de recursos de una cuenta

Responsabilidades:
    - Decidir qué clases de privacidad puede ver el caller para una cuenta.
    - Validar ownership para recursos estrictos (ratings).
    - Ser 100% testeable: funciones puras, inputs explícitos.

Colaboradores:
    - domain.entities.Privacy
    - domain.filters: traduce el scope a filtros del descriptor.
    - application/usecases/listing: invoca la policy por request.

Reglas:
    - Sin identidad autenticada -> PUBLIC_ONLY.
    - Dueño de la cuenta -> ALL.
    - Cualquier otro caso -> PUBLIC_ONLY (fail closed, sin permisos parciales).
    - Se recalcula en cada request: nunca se cachea.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..crosscutting.exceptions import ForbiddenError, UnauthorizedError
from .entities import Privacy


class VisibilityScope(str, Enum):
    PUBLIC_ONLY = "public_only"
    PUBLIC_AND_UNLISTED = "public_and_unlisted"
    ALL = "all"

    def allowed_privacies(self) -> frozenset[Privacy]:
        if self is VisibilityScope.ALL:
            return frozenset(Privacy)
        if self is VisibilityScope.PUBLIC_AND_UNLISTED:
            return frozenset({Privacy.PUBLIC, Privacy.UNLISTED})
        return frozenset({Privacy.PUBLIC})

    @property
    def includes_private_and_unlisted(self) -> bool:
        """Solo el dueño ve privados y no listados."""
        return self is VisibilityScope.ALL


def _is_owner(target_account_id: int, requester_account_id: Optional[int]) -> bool:
    return requester_account_id is not None and requester_account_id == target_account_id


def resolve_visibility(
    target_account_id: int, requester_account_id: Optional[int]
) -> VisibilityScope:
    """Scope de visibilidad del caller sobre la cuenta objetivo."""
    if _is_owner(target_account_id, requester_account_id):
        return VisibilityScope.ALL
    return VisibilityScope.PUBLIC_ONLY


def ensure_account_owner(
    target_account_id: int, requester_account_id: Optional[int]
) -> None:
    """
    Guard de recursos owner-only.

    Raises:
        UnauthorizedError: caller anónimo
        ForbiddenError: caller autenticado que no es dueño
    """
    if requester_account_id is None:
        raise UnauthorizedError("se requiere autenticación para este recurso")
    if not _is_owner(target_account_id, requester_account_id):
        raise ForbiddenError("solo el dueño de la cuenta puede ver este recurso")
