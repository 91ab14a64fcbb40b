"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton por proceso)

Responsabilidades:
  - Inicializar, exponer y cerrar el pool de conexiones.
  - Configurar conexiones: statement_timeout y sesión read-only.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - crosscutting.config (db_statement_timeout_ms)

Principios:
  - Fail-fast (doble init, uso sin init)
===============================================================================
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Optional

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

if TYPE_CHECKING:
    from psycopg_pool import ConnectionPool

_pool: Optional["ConnectionPool"] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    """Configura cada conexión nueva del pool."""
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
    # Este servicio solo lee.
    conn.execute("SET default_transaction_read_only = on")
    conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> "ConnectionPool":
    """Inicializa el pool (una vez por proceso)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        # Lazy import: en test/ci no se necesita driver de DB.
        from psycopg_pool import ConnectionPool

        logger.info(
            "Inicializando pool DB",
            extra={"min_size": min_size, "max_size": max_size},
        )
        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )
        logger.info("Pool DB inicializado")
        return _pool


def get_pool() -> "ConnectionPool":
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool no inicializado. Llamar init_pool() primero."
        )
    return _pool


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Cerrando pool DB")
            try:
                _pool.close()
            finally:
                _pool = None
            logger.info("Pool DB cerrado")
