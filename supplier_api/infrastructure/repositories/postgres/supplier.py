"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/supplier.py
============================================================
Class: PostgresSupplierRepository

Responsibilities:
  - Implementar el gateway de proveedores como unidad de trabajo:
      - lecturas inmediatas (SELECT parametrizado)
      - escrituras staged, aplicadas por commit() en UNA transacción
  - Devolver filas afectadas (suma de rowcount) para que el caso de uso
    detecte "no se guardó nada".
  - Mapear filas crudas -> entidad de dominio `Supplier`.

Collaborators:
  - psycopg_pool.ConnectionPool
  - infrastructure.db.pool.get_pool
  - repositories.change_tracker.SupplierChangeTracker
  - crosscutting.exceptions.DatabaseError / crosscutting.logger

Constraints / Notes:
  - SQL parametrizado siempre.
  - INSERT ... ON CONFLICT (id) DO NOTHING: id duplicado => 0 filas, no excepción.
  - Un error de driver revierte la transacción completa y sale como DatabaseError.
  - Sin ORDER BY en list_all: no hay orden garantizado.
============================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Supplier
from ..change_tracker import ChangeKind, StagedChange, SupplierChangeTracker

_SUPPLIER_COLUMNS = "id, name, document, is_active"

_INSERT_SQL = f"""
    INSERT INTO suppliers ({_SUPPLIER_COLUMNS})
    VALUES (%s, %s, %s, %s)
    ON CONFLICT (id) DO NOTHING
"""

_UPDATE_SQL = """
    UPDATE suppliers
    SET name = %s, document = %s, is_active = %s
    WHERE id = %s
"""

_DELETE_SQL = "DELETE FROM suppliers WHERE id = %s"


def _statement_for(change: StagedChange) -> tuple[str, tuple]:
    """R: Traduce un cambio staged a (sql, params)."""
    s = change.supplier
    if change.kind is ChangeKind.ADD:
        return _INSERT_SQL, (s.id, s.name, s.document, s.is_active)
    if change.kind is ChangeKind.UPDATE:
        return _UPDATE_SQL, (s.name, s.document, s.is_active, s.id)
    return _DELETE_SQL, (s.id,)


class PostgresSupplierRepository:
    """
    Repositorio Postgres para Suppliers (scope por request).

    Pool inyectable (tests); si es None se usa el global.
    """

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool
        self._tracker = SupplierChangeTracker()

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    @staticmethod
    def _row_to_supplier(row: tuple) -> Supplier:
        return Supplier(
            id=row[0],
            name=row[1],
            document=row[2],
            is_active=bool(row[3]),
        )

    def _fetchone(
        self, query: str, params: Iterable[object], log_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(log_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    def _fetchall(self, query: str, log_msg: str) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query).fetchall()
        except Exception as exc:
            logger.exception(log_msg, extra={"error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    # =========================================================
    # Lecturas
    # =========================================================
    def find_by_id_untracked(self, supplier_id: UUID) -> Optional[Supplier]:
        row = self._fetchone(
            f"SELECT {_SUPPLIER_COLUMNS} FROM suppliers WHERE id = %s",
            (supplier_id,),
            "PostgresSupplierRepository: find_by_id failed",
            {"supplier_id": str(supplier_id)},
        )
        return self._row_to_supplier(row) if row else None

    def find_by_id(self, supplier_id: UUID) -> Optional[Supplier]:
        tracked = self._tracker.tracked(supplier_id)
        if tracked is not None:
            return tracked
        supplier = self.find_by_id_untracked(supplier_id)
        return self._tracker.attach(supplier) if supplier else None

    def list_all(self) -> List[Supplier]:
        rows = self._fetchall(
            f"SELECT {_SUPPLIER_COLUMNS} FROM suppliers",
            "PostgresSupplierRepository: list_all failed",
        )
        return [self._row_to_supplier(r) for r in rows]

    # =========================================================
    # Escrituras (staged)
    # =========================================================
    def add(self, supplier: Supplier) -> None:
        self._tracker.stage(ChangeKind.ADD, supplier)

    def update(self, supplier: Supplier) -> None:
        self._tracker.stage(ChangeKind.UPDATE, supplier)

    def remove(self, supplier: Supplier) -> None:
        self._tracker.stage(ChangeKind.REMOVE, supplier)

    def commit(self) -> int:
        """Aplica los cambios staged en una transacción. Retorna filas afectadas."""
        changes = self._tracker.pending()
        if not changes:
            return 0

        affected = 0
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    for change in changes:
                        query, params = _statement_for(change)
                        cursor = conn.execute(query, params)
                        affected += max(cursor.rowcount or 0, 0)
        except Exception as exc:
            logger.exception(
                "PostgresSupplierRepository: commit failed",
                extra={"staged": len(changes), "error": str(exc)},
            )
            raise DatabaseError(f"PostgresSupplierRepository: commit failed: {exc}") from exc
        finally:
            self._tracker.clear()

        return affected

    def rollback(self) -> None:
        self._tracker.clear()
