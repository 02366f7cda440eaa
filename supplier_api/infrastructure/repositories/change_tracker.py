"""
============================================================
TARJETA CRC — infrastructure/repositories/change_tracker.py
============================================================
Class: SupplierChangeTracker

Responsibilities:
  - Mantener el identity map de una unidad de trabajo (id -> instancia).
  - Acumular cambios staged (add / update / remove) en orden de llegada.
  - Rechazar una segunda instancia con la misma identidad (TrackingConflictError).

Collaborators:
  - domain.entities.Supplier
  - domain.repositories.TrackingConflictError
  - repositories in_memory/supplier.py y postgres/supplier.py (lo componen)

Constraints / Notes:
  - Scope por request: NO es thread-safe ni se comparte.
  - Compara identidad de objeto (`is`), no igualdad de campos.
============================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List
from uuid import UUID

from ...domain.entities import Supplier
from ...domain.repositories import TrackingConflictError


class ChangeKind(str, Enum):
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass(frozen=True)
class StagedChange:
    kind: ChangeKind
    supplier: Supplier


class SupplierChangeTracker:
    """Identity map + lista de cambios pendientes."""

    def __init__(self) -> None:
        self._tracked: Dict[UUID, Supplier] = {}
        self._staged: List[StagedChange] = []

    def tracked(self, supplier_id: UUID) -> Supplier | None:
        return self._tracked.get(supplier_id)

    def attach(self, supplier: Supplier) -> Supplier:
        """R: Trackea la instancia. Si ya hay una con ese id, gana la existente."""
        current = self._tracked.get(supplier.id)
        if current is not None:
            return current
        self._tracked[supplier.id] = supplier
        return supplier

    def stage(self, kind: ChangeKind, supplier: Supplier) -> None:
        current = self._tracked.get(supplier.id)
        if current is not None and current is not supplier:
            raise TrackingConflictError(supplier.id)
        self._tracked[supplier.id] = supplier
        self._staged.append(StagedChange(kind=kind, supplier=supplier))

    def pending(self) -> List[StagedChange]:
        return list(self._staged)

    def has_changes(self) -> bool:
        return bool(self._staged)

    def clear(self) -> None:
        self._tracked.clear()
        self._staged.clear()
