"""
===============================================================================
USE CASE: Delete Supplier
===============================================================================

Responsibilities:
    - Lookup por id (tracked); ausente => NOT_FOUND sin commit.
    - Stagear remove + commit; 0 filas => PERSISTENCE_FAILED.

Collaborators:
    - SupplierRepository.find_by_id / remove / commit

Nota:
    - El chequeo del claim de borrado ocurre en el borde HTTP, antes de llegar acá.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import SupplierRepository
from .supplier_results import DeleteSupplierResult, not_found, persistence_failed


class DeleteSupplierUseCase:
    def __init__(self, supplier_repository: SupplierRepository) -> None:
        self._suppliers = supplier_repository

    def execute(self, supplier_id: UUID) -> DeleteSupplierResult:
        supplier = self._suppliers.find_by_id(supplier_id)
        if supplier is None:
            return DeleteSupplierResult(deleted=False, error=not_found())

        self._suppliers.remove(supplier)
        if self._suppliers.commit() <= 0:
            return DeleteSupplierResult(deleted=False, error=persistence_failed())

        logger.info("Supplier eliminado", extra={"supplier_id": str(supplier_id)})
        return DeleteSupplierResult(deleted=True)
