"""
===============================================================================
USE CASE: Update Supplier (full replace)
===============================================================================

Business Goal:
    Reemplazar name / document / is_active de un proveedor existente.

Why (Context / Intención):
    - La lookup previa es solo un chequeo de existencia, sin tracking, para que
      stagear el reemplazo no choque con el snapshot leído.
    - Se valida el payload entrante como objeto independiente (no un merge).
    - El id de la ruta manda: el id del body se ignora.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateSupplierUseCase

Responsibilities:
    - 404 antes de validar si el id no existe (sin commit).
    - Validar el reemplazo; si falla, no stagear nada.
    - Stagear update con el id de la ruta + commit; 0 filas => PERSISTENCE_FAILED.

Collaborators:
    - SupplierRepository.find_by_id_untracked / update / commit
    - domain.validation.validate_supplier
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Supplier
from ....domain.repositories import SupplierRepository
from ....domain.validation import validate_supplier
from .supplier_results import (
    SupplierResult,
    not_found,
    persistence_failed,
    validation_error,
)


class UpdateSupplierUseCase:
    def __init__(self, supplier_repository: SupplierRepository) -> None:
        self._suppliers = supplier_repository

    def execute(self, supplier_id: UUID, replacement: Supplier) -> SupplierResult:
        # 1) Existencia (sin tracking).
        if self._suppliers.find_by_id_untracked(supplier_id) is None:
            return SupplierResult(error=not_found())

        # 2) Gate de validación sobre el payload entrante.
        validation = validate_supplier(replacement)
        if not validation.is_valid:
            return SupplierResult(error=validation_error(validation.errors))

        # 3) Stage + commit.
        supplier = replacement.with_id(supplier_id)
        if replacement.id is not None and replacement.id != supplier_id:
            logger.info(
                "Update: id del body ignorado",
                extra={"supplier_id": str(supplier_id), "body_id": str(replacement.id)},
            )

        self._suppliers.update(supplier)
        if self._suppliers.commit() <= 0:
            return SupplierResult(error=persistence_failed())

        return SupplierResult(supplier=supplier)
