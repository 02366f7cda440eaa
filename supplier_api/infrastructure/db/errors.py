"""
===============================================================================
TARJETA CRC — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores del ciclo de vida del pool

Responsabilidades:
  - Distinguir "pool no inicializado" de "pool ya inicializado".
  - Heredar de DatabaseError: un request que encuentra el pool caído
    sale como 503 DATABASE_ERROR por el handler común.

Colaboradores:
  - infrastructure/db/pool.py (los lanza)
  - api/exception_handlers.py (DatabaseError -> 503)
===============================================================================
"""

from ...crosscutting.exceptions import DatabaseError


class DatabasePoolError(DatabaseError):
    """Base de errores del pool de Postgres."""

    error_code: str = "DATABASE_POOL_ERROR"


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabasePoolError):
    """get_pool() antes de init_pool() (o después de close_pool())."""
