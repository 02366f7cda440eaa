"""
===============================================================================
TARJETA CRC — supplier_api/interfaces/api/http/routers/suppliers.py
===============================================================================

Class/Module:
    Supplier Router

Responsibilities:
    - Exponer CRUD HTTP de proveedores bajo /supplier.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir SupplierError -> RFC7807 (400 / 404).
    - Enforce de auth en el borde:
        GET          -> público
        POST / PUT   -> usuario autenticado
        DELETE       -> usuario autenticado + claim DeleteSupplier

Collaborators:
    - supplier_api.application.usecases.suppliers
    - supplier_api.identity.auth_users (require_user, require_claim)
    - supplier_api.container (factories DI)
    - schemas.suppliers (DTOs Pydantic)

Patterns:
    - Controller / Router
    - Adapter (HTTP -> UseCase)
    - Error Mapping
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from supplier_api.application.usecases.suppliers import (
    CreateSupplierUseCase,
    DeleteSupplierUseCase,
    GetSupplierUseCase,
    ListSuppliersUseCase,
    SupplierError,
    SupplierErrorCode,
    UpdateSupplierUseCase,
)
from supplier_api.container import (
    get_create_supplier_use_case,
    get_delete_supplier_use_case,
    get_get_supplier_use_case,
    get_list_suppliers_use_case,
    get_update_supplier_use_case,
)
from supplier_api.crosscutting.error_responses import (
    bad_request,
    internal_error,
    not_found,
    validation_problem,
)
from supplier_api.identity.auth_users import Principal, require_claim, require_user
from supplier_api.identity.users import DELETE_SUPPLIER_CLAIM

from ..schemas.suppliers import SupplierIn, SupplierOut

router = APIRouter(prefix="/supplier", tags=["Supplier"])


def _raise_supplier_error(error: SupplierError, *, supplier_id: UUID | None = None) -> None:
    """Traduce SupplierError (application layer) a RFC7807."""
    if error.code == SupplierErrorCode.VALIDATION_ERROR:
        raise validation_problem(error.field_errors, detail=error.message)

    if error.code == SupplierErrorCode.NOT_FOUND:
        raise not_found("Supplier", str(supplier_id or "-"))

    if error.code == SupplierErrorCode.PERSISTENCE_FAILED:
        raise bad_request(error.message)

    raise internal_error(error.message)


@router.get(
    "",
    response_model=list[SupplierOut],
    operation_id="GetSuppliers",
)
def list_suppliers(
    use_case: ListSuppliersUseCase = Depends(get_list_suppliers_use_case),
):
    result = use_case.execute()
    return [SupplierOut.from_entity(s) for s in result.suppliers]


@router.get(
    "/{supplier_id}",
    response_model=SupplierOut,
    operation_id="GetSupplierById",
)
def get_supplier(
    supplier_id: UUID,
    use_case: GetSupplierUseCase = Depends(get_get_supplier_use_case),
):
    result = use_case.execute(supplier_id)
    if result.error is not None:
        _raise_supplier_error(result.error, supplier_id=supplier_id)
    return SupplierOut.from_entity(result.supplier)


@router.post(
    "",
    response_model=SupplierOut,
    status_code=status.HTTP_201_CREATED,
    operation_id="PostSupplier",
)
def create_supplier(
    req: SupplierIn,
    response: Response,
    _principal: Principal = Depends(require_user()),
    use_case: CreateSupplierUseCase = Depends(get_create_supplier_use_case),
):
    result = use_case.execute(req.to_entity())
    if result.error is not None:
        _raise_supplier_error(result.error)

    supplier = result.supplier
    response.headers["Location"] = f"/supplier/{supplier.id}"
    return SupplierOut.from_entity(supplier)


@router.put(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    operation_id="PutSupplier",
)
def update_supplier(
    supplier_id: UUID,
    req: SupplierIn,
    _principal: Principal = Depends(require_user()),
    use_case: UpdateSupplierUseCase = Depends(get_update_supplier_use_case),
):
    result = use_case.execute(supplier_id, req.to_entity())
    if result.error is not None:
        _raise_supplier_error(result.error, supplier_id=supplier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    operation_id="DeleteSupplier",
)
def delete_supplier(
    supplier_id: UUID,
    _principal: Principal = Depends(require_claim(DELETE_SUPPLIER_CLAIM)),
    use_case: DeleteSupplierUseCase = Depends(get_delete_supplier_use_case),
):
    result = use_case.execute(supplier_id)
    if result.error is not None:
        _raise_supplier_error(result.error, supplier_id=supplier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
