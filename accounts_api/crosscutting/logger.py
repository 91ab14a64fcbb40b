"""
===============================================================================
TARJETA CRC — crosscutting/logger.py (Logs JSON con contexto de request)
===============================================================================

Responsabilidades:
  - Emitir una línea JSON por evento (timestamp, nivel, mensaje, origen).
  - Agregar request_id / method / path desde accounts_api.context.
  - Copiar los `extra=` del call-site (actor_url, account_id, job_id, ...).
  - Ocultar credenciales que puedan colarse en un `extra`.

Colaboradores:
  - accounts_api/context.py (ContextVars)
  - crosscutting/config.py (log_level / log_json)

Notas:
  - Los atributos estándar de LogRecord se detectan a partir de un record
    vacío, así no hay que mantener la lista a mano entre versiones.
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_HIDDEN_KEYS = ("password", "secret", "token", "authorization", "cookie", "_url")
_HIDDEN = "***"


def _is_hidden(key: str) -> bool:
    lowered = key.lower()
    # actor_url es público (URL ActivityPub); las URLs de conexión no.
    if lowered == "actor_url":
        return False
    return any(marker in lowered for marker in _HIDDEN_KEYS)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: (_HIDDEN if _is_hidden(key) else value)
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS
    }


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "origin": f"{record.module}:{record.funcName}:{record.lineno}",
            **get_context_dict(),
            **_extra_fields(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = "accounts-api") -> logging.Logger:
    """Logger del servicio; idempotente ante reimports."""
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if settings.log_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
