# supplier_api/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Loguear de forma:
- Parseable (JSON, una línea por evento)
- Correlacionable (request_id / method / path)
- Segura (passwords, tokens y secretos JWT nunca salen en claro)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Formatear LogRecord como JSON
  - Enriquecer con el contexto del request (app/context.py)
  - Redactar claves sensibles que lleguen por `extra=`

Colaboradores:
  - app/context.py (ContextVars)
  - crosscutting/config.py (log_level / log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Atributos estándar de LogRecord: no se copian como "extra".
_RESERVED_KEYS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "taskName"}

_REDACTED = "***REDACTADO***"

# Claves cuyo valor jamás se loguea.
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "confirm_password",
        "confirmpassword",
        "password_hash",
        "secret",
        "jwt_secret",
        "token",
        "access_token",
        "accesstoken",
        "authorization",
    }
)


def _sanitize(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    """Redacta claves sensibles y limita la profundidad de estructuras anidadas."""
    if key and key.lower() in SENSITIVE_KEYS:
        return _REDACTED
    if depth > 4:
        return "***TRUNCADO***"
    if isinstance(value, dict):
        return {
            str(k): _sanitize(v, key=str(k), depth=depth + 1) for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_sanitize(v, key=key, depth=depth + 1) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes {len(value)}B>"
    return value


class JSONFormatter(logging.Formatter):
    """Convierte LogRecord -> JSON enriquecido con contexto de request."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }

        from ..context import get_context_dict

        payload.update(get_context_dict())

        for k, v in record.__dict__.items():
            if k in _RESERVED_KEYS:
                continue
            payload[k] = _sanitize(v, key=k)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = "supplier-api") -> logging.Logger:
    """
    Crea y configura el logger de la aplicación.

    - Evita duplicar handlers si el módulo se reimporta
    - Respeta LOG_LEVEL / LOG_JSON desde Settings
    """
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


# Instancia global (import-friendly)
logger = setup_logger()
