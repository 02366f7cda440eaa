"""
===============================================================================
USE CASE: Create Supplier
===============================================================================

Business Goal:
    Dar de alta un proveedor con id provisto por el cliente o generado.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateSupplierUseCase

Responsibilities:
    - Asignar id nuevo si falta (None o UUID nulo).
    - Correr el gate de validación; si falla, no stagear nada.
    - Stagear insert + commit; 0 filas afectadas => PERSISTENCE_FAILED.

Collaborators:
    - domain.validation.validate_supplier
    - SupplierRepository.add / commit
===============================================================================
"""

from __future__ import annotations

from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Supplier
from ....domain.repositories import SupplierRepository
from ....domain.validation import validate_supplier
from .supplier_results import SupplierResult, persistence_failed, validation_error

NIL_UUID = UUID(int=0)


class CreateSupplierUseCase:
    def __init__(self, supplier_repository: SupplierRepository) -> None:
        self._suppliers = supplier_repository

    def execute(self, supplier: Supplier) -> SupplierResult:
        if supplier.id is None or supplier.id == NIL_UUID:
            supplier = supplier.with_id(uuid4())

        validation = validate_supplier(supplier)
        if not validation.is_valid:
            return SupplierResult(error=validation_error(validation.errors))

        self._suppliers.add(supplier)
        if self._suppliers.commit() <= 0:
            logger.warning(
                "Supplier no persistido", extra={"supplier_id": str(supplier.id)}
            )
            return SupplierResult(error=persistence_failed())

        logger.info("Supplier creado", extra={"supplier_id": str(supplier.id)})
        return SupplierResult(supplier=supplier)
