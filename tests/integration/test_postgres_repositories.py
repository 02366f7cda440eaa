"""
Name: PostgreSQL Repository Integration Tests

Responsibilities:
  - Unit of work against a real database (commit counts, atomicity)
  - User persistence: uniqueness, lockout state, claims
"""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

if os.getenv("RUN_INTEGRATION") != "1" or not os.getenv("TEST_DATABASE_URL"):
    pytest.skip(
        "Set RUN_INTEGRATION=1 and TEST_DATABASE_URL to run integration tests",
        allow_module_level=True,
    )

from supplier_api.domain.entities import Supplier  # noqa: E402
from supplier_api.domain.repositories import DuplicateUserError  # noqa: E402
from supplier_api.identity.users import User, UserClaim  # noqa: E402
from supplier_api.infrastructure.repositories import (  # noqa: E402
    PostgresSupplierRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.integration


def _supplier(**kwargs) -> Supplier:
    base = {"id": uuid4(), "name": "Acme", "document": "12345", "is_active": True}
    base.update(kwargs)
    return Supplier(**base)


def test_add_commit_and_read_back(pg_pool):
    supplier = _supplier()
    repo = PostgresSupplierRepository(pool=pg_pool)
    repo.add(supplier)

    assert repo.commit() == 1
    assert PostgresSupplierRepository(pool=pg_pool).find_by_id(supplier.id) == supplier


def test_duplicate_insert_affects_zero_rows(pg_pool):
    supplier = _supplier()
    first = PostgresSupplierRepository(pool=pg_pool)
    first.add(supplier)
    first.commit()

    second = PostgresSupplierRepository(pool=pg_pool)
    second.add(_supplier(id=supplier.id, name="Other"))

    assert second.commit() == 0


def test_update_and_remove(pg_pool):
    supplier = _supplier()
    repo = PostgresSupplierRepository(pool=pg_pool)
    repo.add(supplier)
    repo.commit()

    repo.update(_supplier(id=supplier.id, name="Renamed", is_active=False))
    assert repo.commit() == 1
    assert repo.find_by_id_untracked(supplier.id).name == "Renamed"

    tracked = repo.find_by_id(supplier.id)
    repo.remove(tracked)
    assert repo.commit() == 1
    assert repo.list_all() == []


def test_update_missing_row_affects_zero_rows(pg_pool):
    repo = PostgresSupplierRepository(pool=pg_pool)
    repo.update(_supplier())

    assert repo.commit() == 0


def test_user_roundtrip_with_claims_and_lockout(pg_pool):
    repo = PostgresUserRepository(pool=pg_pool)
    user = repo.create_user(User(id=uuid4(), email="ops@example.com", password_hash="h"))

    with pytest.raises(DuplicateUserError):
        repo.create_user(User(id=uuid4(), email="ops@example.com", password_hash="h"))

    assert repo.add_claim(user.id, UserClaim(type="DeleteSupplier")) is True
    assert repo.add_claim(user.id, UserClaim(type="DeleteSupplier")) is True
    assert repo.add_claim(uuid4(), UserClaim(type="DeleteSupplier")) is False

    repo.record_failed_login(user.id, lockout_end=None)
    assert repo.get_user_by_id(user.id).access_failed_count == 1

    end = datetime.now(timezone.utc) + timedelta(minutes=5)
    locked = repo.record_failed_login(user.id, lockout_end=end)
    assert locked.access_failed_count == 0
    assert locked.lockout_end is not None

    loaded = repo.get_user_by_email("ops@example.com")
    assert loaded.claims == (UserClaim(type="DeleteSupplier", value=""),)
