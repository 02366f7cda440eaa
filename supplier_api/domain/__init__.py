"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.

Colaboradores:
    - domain.entities: Supplier
    - domain.repositories: Puertos de persistencia
    - domain.validation: Gate de validación por tabla de reglas

Reglas:
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import Supplier
from .repositories import (
    DuplicateUserError,
    SupplierRepository,
    TrackingConflictError,
    UserRepository,
)
from .validation import SUPPLIER_RULES, FieldRule, ValidationResult, validate_supplier

__all__ = [
    "Supplier",
    "SupplierRepository",
    "UserRepository",
    "TrackingConflictError",
    "DuplicateUserError",
    "FieldRule",
    "ValidationResult",
    "SUPPLIER_RULES",
    "validate_supplier",
]
