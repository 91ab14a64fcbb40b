"""
===============================================================================
MÓDULO: Paginación offset/count + sort con whitelist
===============================================================================

Objetivo
--------
Paginación simple y consistente para los listados de cuentas:
- start/count normalizados (clamp de count, rechazo de negativos)
- sort validado contra la whitelist del recurso ("-campo" = descendente)
- envelope uniforme {"data": [...], "total": n}

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  normalize() + ListQuery + ResultPage + format_page()

Responsabilidades:
  - Construir ListQuery inmutable a partir de parámetros no confiables
  - Señalar InvalidPaginationError / InvalidSortError
  - Formatear ResultPage al envelope de respuesta (sin filtrar nada)

Restricciones:
  - Puro: sin I/O, sin logging
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar

from .exceptions import InvalidPaginationError, InvalidSortError

T = TypeVar("T")

DESCENDING_PREFIX = "-"


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False

    @classmethod
    def parse(cls, raw: str) -> "SortKey":
        value = (raw or "").strip()
        descending = value.startswith(DESCENDING_PREFIX)
        name = value[1:] if descending else value
        if not name:
            raise InvalidSortError(f"sort inválido: '{raw}'")
        return cls(field=name, descending=descending)

    def __str__(self) -> str:
        return f"{DESCENDING_PREFIX if self.descending else ''}{self.field}"


@dataclass(frozen=True)
class PaginationDefaults:
    default_count: int = 15
    max_count: int = 100
    default_sort: str = "-createdAt"


@dataclass(frozen=True)
class ListQuery:
    """Query de listado ya validada (start >= 0, 1 <= count <= max)."""

    start: int
    count: int
    sort: SortKey


def normalize(
    start: Optional[int],
    count: Optional[int],
    sort: Optional[str],
    whitelist: Iterable[str],
    defaults: PaginationDefaults = PaginationDefaults(),
) -> ListQuery:
    """
    Normaliza parámetros de paginación y orden.

    - start ausente -> 0; negativo -> InvalidPaginationError
    - count ausente -> defaults.default_count; mayor al máximo -> se recorta;
      0 -> 1; negativo -> InvalidPaginationError
    - sort ausente -> defaults.default_sort; campo fuera de whitelist ->
      InvalidSortError (nunca se cae al default)
    """
    if start is None:
        start = 0
    elif start < 0:
        raise InvalidPaginationError(f"start debe ser >= 0 (recibido {start})")

    if count is None:
        count = defaults.default_count
    elif count < 0:
        raise InvalidPaginationError(f"count debe ser >= 0 (recibido {count})")
    count = max(1, min(count, defaults.max_count))

    sort_key = SortKey.parse(sort if sort is not None else defaults.default_sort)
    allowed = frozenset(whitelist)
    if sort_key.field not in allowed:
        raise InvalidSortError(
            f"sort '{sort_key.field}' no permitido; válidos: {sorted(allowed)}"
        )

    return ListQuery(start=start, count=count, sort=sort_key)


@dataclass(frozen=True)
class ResultPage(Generic[T]):
    """Página de resultados: total cuenta el conjunto completo, no la ventana."""

    items: Sequence[T] = field(default_factory=tuple)
    total: int = 0

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError("total no puede ser negativo")
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def empty(cls) -> "ResultPage[T]":
        return cls(items=(), total=0)


def format_page(
    page: ResultPage[T], serializer: Optional[Callable[[T], Any]] = None
) -> dict[str, Any]:
    """Envelope uniforme de listados."""
    to_dict = serializer or (lambda item: item)
    return {"data": [to_dict(item) for item in page.items], "total": page.total}
