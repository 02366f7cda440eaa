"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/supplier.py
============================================================
Class: InMemorySupplierStore / InMemorySupplierRepository

Responsibilities:
  - Store: "tabla" de proveedores en memoria, compartida por proceso.
  - Repository: unidad de trabajo por request sobre el store
    (lecturas inmediatas, escrituras staged hasta commit()).
  - commit(): aplica los cambios bajo un único lock y cuenta filas afectadas,
    con la misma semántica que el repo Postgres:
      add sobre id existente -> 0 filas
      update/remove sobre id inexistente -> 0 filas

Collaborators:
  - domain.entities.Supplier
  - domain.repositories.SupplierRepository (contrato)
  - repositories.change_tracker.SupplierChangeTracker

Constraints / Notes:
  - Thread-safe a nivel store (Lock). El repositorio NO se comparte.
  - Copias: lo que sale del store nunca es la instancia almacenada.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Supplier
from ..change_tracker import ChangeKind, StagedChange, SupplierChangeTracker


class InMemorySupplierStore:
    """Almacenamiento compartido (UUID -> Supplier), en orden de inserción."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._rows: Dict[UUID, Supplier] = {}

    def get(self, supplier_id: UUID) -> Optional[Supplier]:
        with self._lock:
            row = self._rows.get(supplier_id)
            return row.copy() if row else None

    def all(self) -> List[Supplier]:
        with self._lock:
            return [row.copy() for row in self._rows.values()]

    def apply(self, changes: List[StagedChange]) -> int:
        """R: Aplica cambios en bloque. Retorna filas afectadas."""
        affected = 0
        with self._lock:
            for change in changes:
                supplier = change.supplier
                exists = supplier.id in self._rows
                if change.kind is ChangeKind.ADD:
                    if not exists:
                        self._rows[supplier.id] = supplier.copy()
                        affected += 1
                elif change.kind is ChangeKind.UPDATE:
                    if exists:
                        self._rows[supplier.id] = supplier.copy()
                        affected += 1
                elif change.kind is ChangeKind.REMOVE:
                    if exists:
                        del self._rows[supplier.id]
                        affected += 1
        return affected

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()


class InMemorySupplierRepository:
    """
    Unidad de trabajo in-memory para Suppliers.

    Modelo mental:
    - `store` es la tabla (compartida).
    - `_tracker` es el estado del request (identity map + staged).
    """

    def __init__(self, store: InMemorySupplierStore) -> None:
        self._store = store
        self._tracker = SupplierChangeTracker()

    # =========================================================
    # Lecturas
    # =========================================================
    def find_by_id(self, supplier_id: UUID) -> Optional[Supplier]:
        tracked = self._tracker.tracked(supplier_id)
        if tracked is not None:
            return tracked
        row = self._store.get(supplier_id)
        return self._tracker.attach(row) if row else None

    def find_by_id_untracked(self, supplier_id: UUID) -> Optional[Supplier]:
        return self._store.get(supplier_id)

    def list_all(self) -> List[Supplier]:
        return self._store.all()

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
        changes = self._tracker.pending()
        try:
            affected = self._store.apply(changes)
        finally:
            self._tracker.clear()
        logger.debug(
            "InMemorySupplierRepository: commit",
            extra={"staged": len(changes), "affected": affected},
        )
        return affected

    def rollback(self) -> None:
        self._tracker.clear()
