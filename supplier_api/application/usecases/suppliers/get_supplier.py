"""
===============================================================================
USE CASE: Get Supplier
===============================================================================

Responsibilities:
    - Buscar un proveedor por id.
    - Ausencia => NOT_FOUND (nunca excepción).

Collaborators:
    - SupplierRepository.find_by_id_untracked (lectura pura, sin tracking)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import SupplierRepository
from .supplier_results import SupplierResult, not_found


class GetSupplierUseCase:
    def __init__(self, supplier_repository: SupplierRepository) -> None:
        self._suppliers = supplier_repository

    def execute(self, supplier_id: UUID) -> SupplierResult:
        supplier = self._suppliers.find_by_id_untracked(supplier_id)
        if supplier is None:
            return SupplierResult(error=not_found())
        return SupplierResult(supplier=supplier)
