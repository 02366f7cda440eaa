"""
Name: Supplier Use Case Tests

Responsibilities:
  - Create: id generation, validation gate, persistence failure
  - Update: 404 before validation, route id wins, nothing staged on failure
  - Delete: 404 without commit, persistence failure
  - Get / List: not found and empty list

Notes:
  - In-memory repository for happy paths, Mock(spec=...) to assert calls
"""

from unittest.mock import Mock
from uuid import UUID, uuid4

import pytest

from supplier_api.application.usecases.suppliers import (
    PERSISTENCE_FAILED_MESSAGE,
    CreateSupplierUseCase,
    DeleteSupplierUseCase,
    GetSupplierUseCase,
    ListSuppliersUseCase,
    SupplierErrorCode,
    UpdateSupplierUseCase,
)
from supplier_api.domain.entities import Supplier
from supplier_api.domain.repositories import SupplierRepository
from supplier_api.infrastructure.repositories import InMemorySupplierRepository

pytestmark = pytest.mark.unit


def _seed(store, supplier: Supplier) -> None:
    repo = InMemorySupplierRepository(store)
    repo.add(supplier)
    repo.commit()


def _mock_repository(existing: Supplier | None = None, affected: int = 1) -> Mock:
    repo = Mock(spec=SupplierRepository)
    repo.find_by_id.return_value = existing
    repo.find_by_id_untracked.return_value = existing
    repo.commit.return_value = affected
    return repo


# =============================================================================
# List / Get
# =============================================================================


def test_list_empty_store_returns_empty_list(supplier_repository):
    result = ListSuppliersUseCase(supplier_repository).execute()

    assert result.error is None
    assert result.suppliers == []


def test_get_missing_returns_not_found(supplier_repository):
    result = GetSupplierUseCase(supplier_repository).execute(uuid4())

    assert result.error.code == SupplierErrorCode.NOT_FOUND


def test_get_existing(supplier_store, supplier_repository, acme):
    _seed(supplier_store, acme)

    result = GetSupplierUseCase(supplier_repository).execute(acme.id)

    assert result.supplier == acme


# =============================================================================
# Create
# =============================================================================


def test_create_generates_id_when_missing(supplier_repository):
    use_case = CreateSupplierUseCase(supplier_repository)

    result = use_case.execute(Supplier(id=None, name="Acme", document="12345"))

    assert result.error is None
    assert isinstance(result.supplier.id, UUID)
    assert supplier_repository.find_by_id_untracked(result.supplier.id) is not None


def test_create_generates_id_for_nil_uuid(supplier_repository):
    result = CreateSupplierUseCase(supplier_repository).execute(
        Supplier(id=UUID(int=0), name="Acme", document="1")
    )

    assert result.supplier.id != UUID(int=0)


def test_create_keeps_client_supplied_id(supplier_repository, acme):
    result = CreateSupplierUseCase(supplier_repository).execute(acme)

    assert result.supplier.id == acme.id


def test_create_then_get_returns_equal_entity(supplier_store, acme):
    CreateSupplierUseCase(InMemorySupplierRepository(supplier_store)).execute(acme)

    result = GetSupplierUseCase(InMemorySupplierRepository(supplier_store)).execute(acme.id)

    assert result.supplier == acme


def test_create_invalid_does_not_stage():
    repo = _mock_repository()

    result = CreateSupplierUseCase(repo).execute(Supplier(id=uuid4(), document="1"))

    assert result.error.code == SupplierErrorCode.VALIDATION_ERROR
    assert "name" in result.error.field_errors
    repo.add.assert_not_called()
    repo.commit.assert_not_called()


def test_create_zero_rows_is_persistence_failure(acme):
    repo = _mock_repository(affected=0)

    result = CreateSupplierUseCase(repo).execute(acme)

    assert result.error.code == SupplierErrorCode.PERSISTENCE_FAILED
    assert result.error.message == PERSISTENCE_FAILED_MESSAGE


def test_create_duplicate_id_is_persistence_failure(supplier_store, acme):
    _seed(supplier_store, acme)

    result = CreateSupplierUseCase(InMemorySupplierRepository(supplier_store)).execute(
        Supplier(id=acme.id, name="Other", document="2")
    )

    assert result.error.code == SupplierErrorCode.PERSISTENCE_FAILED


# =============================================================================
# Update
# =============================================================================


def test_update_missing_returns_not_found_before_validation():
    repo = _mock_repository(existing=None)

    # Payload inválido: igual debe ganar el 404.
    result = UpdateSupplierUseCase(repo).execute(uuid4(), Supplier(id=None))

    assert result.error.code == SupplierErrorCode.NOT_FOUND
    repo.update.assert_not_called()
    repo.commit.assert_not_called()


def test_update_uses_untracked_lookup(acme):
    repo = _mock_repository(existing=acme)

    UpdateSupplierUseCase(repo).execute(acme.id, Supplier(id=None, name="N", document="D"))

    repo.find_by_id_untracked.assert_called_once_with(acme.id)
    repo.find_by_id.assert_not_called()


def test_update_invalid_does_not_stage(acme):
    repo = _mock_repository(existing=acme)

    result = UpdateSupplierUseCase(repo).execute(acme.id, Supplier(id=acme.id, name="N"))

    assert result.error.code == SupplierErrorCode.VALIDATION_ERROR
    assert list(result.error.field_errors) == ["document"]
    repo.update.assert_not_called()
    repo.commit.assert_not_called()


def test_update_route_id_is_authoritative(supplier_store, acme):
    _seed(supplier_store, acme)
    other_id = uuid4()

    result = UpdateSupplierUseCase(InMemorySupplierRepository(supplier_store)).execute(
        acme.id, Supplier(id=other_id, name="Renamed", document="999", is_active=False)
    )

    assert result.error is None
    reader = InMemorySupplierRepository(supplier_store)
    stored = reader.find_by_id_untracked(acme.id)
    assert stored == Supplier(id=acme.id, name="Renamed", document="999", is_active=False)
    assert reader.find_by_id_untracked(other_id) is None


def test_update_is_full_replace_not_merge(supplier_store, acme):
    _seed(supplier_store, acme)

    UpdateSupplierUseCase(InMemorySupplierRepository(supplier_store)).execute(
        acme.id, Supplier(id=None, name="Acme", document="12345")
    )

    stored = InMemorySupplierRepository(supplier_store).find_by_id_untracked(acme.id)
    assert stored.is_active is False


def test_update_zero_rows_is_persistence_failure(acme):
    repo = _mock_repository(existing=acme, affected=0)

    result = UpdateSupplierUseCase(repo).execute(acme.id, acme.copy())

    assert result.error.code == SupplierErrorCode.PERSISTENCE_FAILED


# =============================================================================
# Delete
# =============================================================================


def test_delete_missing_returns_not_found_without_commit():
    repo = _mock_repository(existing=None)

    result = DeleteSupplierUseCase(repo).execute(uuid4())

    assert result.deleted is False
    assert result.error.code == SupplierErrorCode.NOT_FOUND
    repo.commit.assert_not_called()


def test_delete_then_get_is_not_found(supplier_store, acme):
    _seed(supplier_store, acme)

    deleted = DeleteSupplierUseCase(InMemorySupplierRepository(supplier_store)).execute(
        acme.id
    )
    result = GetSupplierUseCase(InMemorySupplierRepository(supplier_store)).execute(acme.id)

    assert deleted.deleted is True
    assert result.error.code == SupplierErrorCode.NOT_FOUND


def test_delete_zero_rows_is_persistence_failure(acme):
    repo = _mock_repository(existing=acme, affected=0)

    result = DeleteSupplierUseCase(repo).execute(acme.id)

    assert result.error.code == SupplierErrorCode.PERSISTENCE_FAILED
    repo.remove.assert_called_once_with(acme)
