"""
===============================================================================
USE CASE: List Suppliers
===============================================================================

Responsibilities:
    - Devolver todos los proveedores (sin filtro, sin paginación).
    - No garantiza orden: el orden es el del almacenamiento.

Collaborators:
    - SupplierRepository.list_all
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import SupplierRepository
from .supplier_results import SupplierListResult


class ListSuppliersUseCase:
    def __init__(self, supplier_repository: SupplierRepository) -> None:
        self._suppliers = supplier_repository

    def execute(self) -> SupplierListResult:
        return SupplierListResult(suppliers=self._suppliers.list_all())
