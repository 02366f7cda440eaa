"""
===============================================================================
SUPPLIER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Supplier Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de proveedores, con un contrato explícito para:
      - validaciones (errores por campo)
      - recursos no encontrados
      - persistencia que no afectó filas

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    supplier_results models (module)

Responsibilities:
    - Definir SupplierErrorCode (set acotado, estable).
    - Representar SupplierError (code + message + field_errors opcional).
    - Representar SupplierResult / SupplierListResult / DeleteSupplierResult.

Collaborators:
    - domain.entities.Supplier
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from ....domain.entities import Supplier

PERSISTENCE_FAILED_MESSAGE = "There was a problem saving the record"


class SupplierErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: payload inválido (ver field_errors).
      - NOT_FOUND: id inexistente.
      - PERSISTENCE_FAILED: commit sin filas afectadas.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


@dataclass(frozen=True)
class SupplierError:
    code: SupplierErrorCode
    message: str
    field_errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class SupplierResult:
    """Si error is None => supplier presente (éxito)."""

    supplier: Supplier | None = None
    error: SupplierError | None = None


@dataclass
class SupplierListResult:
    suppliers: List[Supplier]
    error: SupplierError | None = None


@dataclass
class DeleteSupplierResult:
    deleted: bool
    error: SupplierError | None = None


def validation_error(field_errors: Dict[str, List[str]]) -> SupplierError:
    return SupplierError(
        code=SupplierErrorCode.VALIDATION_ERROR,
        message="One or more validation errors occurred.",
        field_errors=field_errors,
    )


def not_found() -> SupplierError:
    return SupplierError(code=SupplierErrorCode.NOT_FOUND, message="Supplier not found.")


def persistence_failed() -> SupplierError:
    return SupplierError(
        code=SupplierErrorCode.PERSISTENCE_FAILED, message=PERSISTENCE_FAILED_MESSAGE
    )
