"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
└── suppliers/      # Supplier CRUD over the unit-of-work gateway

Usage
-----
    from supplier_api.application.usecases.suppliers import CreateSupplierUseCase
"""

from .suppliers import (
    CreateSupplierUseCase,
    DeleteSupplierResult,
    DeleteSupplierUseCase,
    GetSupplierUseCase,
    ListSuppliersUseCase,
    SupplierError,
    SupplierErrorCode,
    SupplierListResult,
    SupplierResult,
    UpdateSupplierUseCase,
)

__all__ = [
    "ListSuppliersUseCase",
    "GetSupplierUseCase",
    "CreateSupplierUseCase",
    "UpdateSupplierUseCase",
    "DeleteSupplierUseCase",
    "SupplierResult",
    "SupplierListResult",
    "DeleteSupplierResult",
    "SupplierError",
    "SupplierErrorCode",
]
