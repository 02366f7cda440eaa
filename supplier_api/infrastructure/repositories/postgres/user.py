"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios (por email / por id) junto con sus claims.
  - Crear usuarios (email único) y otorgar claims.
  - Persistir el estado de lockout (access_failed_count, lockout_end).
  - Mapear filas crudas -> `User` y envolver fallos en `DatabaseError`.

Collaborators:
  - psycopg_pool.ConnectionPool / psycopg.errors.UniqueViolation
  - infrastructure.db.pool.get_pool
  - identity.users.User / UserClaim
  - crosscutting.logger / crosscutting.exceptions.DatabaseError

Constraints / Notes:
  - Repositorio puro: la política de lockout vive en IdentityService.
  - Retorna None cuando no existe el recurso (no exception por "not found").
  - El email llega normalizado desde el servicio; acá no se transforma.
  - SQL parametrizado siempre.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.repositories import DuplicateUserError
from ....identity.users import User, UserClaim

# R: Lista explícita de columnas (contrato con el esquema).
_USER_COLUMNS = (
    "id, email, password_hash, email_confirmed, "
    "access_failed_count, lockout_end, created_at"
)


def _row_to_user(row: tuple, claims: Iterable[tuple] = ()) -> User:
    return User(
        id=row[0],
        email=row[1],
        password_hash=row[2],
        email_confirmed=bool(row[3]),
        access_failed_count=int(row[4] or 0),
        lockout_end=row[5],
        created_at=row[6],
        claims=tuple(UserClaim(type=c[0], value=c[1]) for c in claims),
    )


class PostgresUserRepository:
    """Repositorio Postgres de identidad (users + user_claims)."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        # Pool inyectable (para tests); si es None se usa el global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _load_user(
        self, where: str, param: object, log_msg: str, log_extra: dict[str, object]
    ) -> Optional[User]:
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM users WHERE {where} = %s",
                    (param,),
                ).fetchone()
                if row is None:
                    return None
                claims = conn.execute(
                    """
                    SELECT claim_type, claim_value
                    FROM user_claims
                    WHERE user_id = %s
                    ORDER BY id
                    """,
                    (row[0],),
                ).fetchall()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc
        return _row_to_user(row, claims)

    def _execute(
        self, query: str, params: Iterable[object], log_msg: str, log_extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    # --- Lectura ---
    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._load_user(
            "email",
            email,
            "PostgresUserRepository: get_user_by_email failed",
            {"email": email},
        )

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        return self._load_user(
            "id",
            user_id,
            "PostgresUserRepository: get_user_by_id failed",
            {"user_id": str(user_id)},
        )

    # --- Escritura ---
    def create_user(self, user: User) -> User:
        """Inserta el usuario. Email duplicado => DuplicateUserError."""
        try:
            with self._get_pool().connection() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO users (id, email, password_hash, email_confirmed,
                                       access_failed_count, lockout_end)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING {_USER_COLUMNS}
                    """,
                    (
                        user.id,
                        user.email,
                        user.password_hash,
                        user.email_confirmed,
                        user.access_failed_count,
                        user.lockout_end,
                    ),
                ).fetchone()
        except pg_errors.UniqueViolation as exc:
            raise DuplicateUserError(user.email) from exc
        except Exception as exc:
            logger.exception(
                "PostgresUserRepository: create_user failed",
                extra={"user_id": str(user.id), "error": str(exc)},
            )
            raise DatabaseError(f"PostgresUserRepository: create_user failed: {exc}") from exc

        if not row:
            raise DatabaseError(
                "PostgresUserRepository: create_user failed (no row returned)"
            )
        return _row_to_user(row)

    def record_failed_login(
        self, user_id: UUID, *, lockout_end: datetime | None
    ) -> Optional[User]:
        if lockout_end is not None:
            query = f"""
                UPDATE users
                SET access_failed_count = 0, lockout_end = %s
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """
            params: tuple = (lockout_end, user_id)
        else:
            query = f"""
                UPDATE users
                SET access_failed_count = access_failed_count + 1
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """
            params = (user_id,)

        row = self._execute(
            query,
            params,
            "PostgresUserRepository: record_failed_login failed",
            {"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def reset_failed_logins(self, user_id: UUID) -> None:
        self._execute(
            "UPDATE users SET access_failed_count = 0 WHERE id = %s RETURNING id",
            (user_id,),
            "PostgresUserRepository: reset_failed_logins failed",
            {"user_id": str(user_id)},
        )

    def add_claim(self, user_id: UUID, claim: UserClaim) -> bool:
        """Otorga un claim (idempotente). False si el usuario no existe."""
        if self.get_user_by_id(user_id) is None:
            return False
        self._execute(
            """
            INSERT INTO user_claims (user_id, claim_type, claim_value)
            VALUES (%s, %s, %s)
            ON CONFLICT ON CONSTRAINT uq_user_claims_user_type_value DO NOTHING
            RETURNING id
            """,
            (user_id, claim.type, claim.value),
            "PostgresUserRepository: add_claim failed",
            {"user_id": str(user_id), "claim_type": claim.type},
        )
        return True
