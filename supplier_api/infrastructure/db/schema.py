"""
===============================================================================
CRC CARD — infrastructure/db/schema.py
===============================================================================

Componente:
  Bootstrap de esquema (idempotente)

Responsabilidades:
  - Crear tablas `suppliers`, `users` y `user_claims` si no existen.
  - Ejecutar todo en una sola transacción al arrancar la app.

Colaboradores:
  - infrastructure.db.pool.get_pool
  - crosscutting.exceptions.DatabaseError

Policy:
  - Solo sentencias aditivas (IF NOT EXISTS). No hay downgrade.
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>, fk_<tabla>_<col>__<ref_tabla>
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS suppliers (
        id UUID NOT NULL,
        name TEXT NULL,
        document TEXT NULL,
        is_active BOOLEAN NOT NULL DEFAULT FALSE,
        CONSTRAINT pk_suppliers PRIMARY KEY (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
        id UUID NOT NULL,
        email VARCHAR(320) NOT NULL,
        password_hash TEXT NOT NULL,
        email_confirmed BOOLEAN NOT NULL DEFAULT TRUE,
        access_failed_count INTEGER NOT NULL DEFAULT 0,
        lockout_end TIMESTAMPTZ NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
        CONSTRAINT pk_users PRIMARY KEY (id),
        CONSTRAINT uq_users_email UNIQUE (email)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_claims (
        id BIGSERIAL NOT NULL,
        user_id UUID NOT NULL,
        claim_type VARCHAR(256) NOT NULL,
        claim_value TEXT NOT NULL DEFAULT '',
        CONSTRAINT pk_user_claims PRIMARY KEY (id),
        CONSTRAINT fk_user_claims_user_id__users
            FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE,
        CONSTRAINT uq_user_claims_user_type_value
            UNIQUE (user_id, claim_type, claim_value)
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_user_claims_user_id ON user_claims (user_id)",
)


def ensure_schema(pool: Optional[ConnectionPool] = None) -> None:
    """Crea el esquema si falta. Idempotente."""
    if pool is None:
        from .pool import get_pool

        pool = get_pool()

    try:
        with pool.connection() as conn:
            with conn.transaction():
                for statement in SCHEMA_STATEMENTS:
                    conn.execute(statement)
    except Exception as exc:
        logger.exception("Schema bootstrap failed", extra={"error": str(exc)})
        raise DatabaseError(f"Schema bootstrap failed: {exc}") from exc

    logger.info("Esquema DB verificado", extra={"tables": 3})
