"""
Supplier Use Cases

Commands / queries over the supplier gateway. Each use case returns a typed
result; HTTP mapping lives in interfaces/api/http/routers/suppliers.py.
"""

from .create_supplier import CreateSupplierUseCase
from .delete_supplier import DeleteSupplierUseCase
from .get_supplier import GetSupplierUseCase
from .list_suppliers import ListSuppliersUseCase
from .supplier_results import (
    PERSISTENCE_FAILED_MESSAGE,
    DeleteSupplierResult,
    SupplierError,
    SupplierErrorCode,
    SupplierListResult,
    SupplierResult,
)
from .update_supplier import UpdateSupplierUseCase

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
    "PERSISTENCE_FAILED_MESSAGE",
]
