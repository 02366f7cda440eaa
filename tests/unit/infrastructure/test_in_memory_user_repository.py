"""Unit tests for InMemoryUserRepository (uniqueness, lockout state, claims)."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from supplier_api.domain.repositories import DuplicateUserError
from supplier_api.identity.users import User, UserClaim

pytestmark = pytest.mark.unit


def _user(email: str = "user@example.com") -> User:
    return User(id=uuid4(), email=email, password_hash="hash")


def test_create_and_lookup(user_repository):
    user = user_repository.create_user(_user())

    assert user_repository.get_user_by_email("user@example.com") == user
    assert user_repository.get_user_by_id(user.id) == user


def test_duplicate_email_raises(user_repository):
    user_repository.create_user(_user())

    with pytest.raises(DuplicateUserError):
        user_repository.create_user(_user())


def test_record_failed_login_increments_count(user_repository):
    user = user_repository.create_user(_user())

    updated = user_repository.record_failed_login(user.id, lockout_end=None)

    assert updated.access_failed_count == 1


def test_record_failed_login_with_lockout_resets_count(user_repository):
    user = user_repository.create_user(_user())
    user_repository.record_failed_login(user.id, lockout_end=None)
    end = datetime.now(timezone.utc) + timedelta(minutes=5)

    updated = user_repository.record_failed_login(user.id, lockout_end=end)

    assert updated.access_failed_count == 0
    assert updated.lockout_end == end


def test_reset_failed_logins(user_repository):
    user = user_repository.create_user(_user())
    user_repository.record_failed_login(user.id, lockout_end=None)

    user_repository.reset_failed_logins(user.id)

    assert user_repository.get_user_by_id(user.id).access_failed_count == 0


def test_add_claim_is_idempotent(user_repository):
    user = user_repository.create_user(_user())
    claim = UserClaim(type="DeleteSupplier")

    assert user_repository.add_claim(user.id, claim) is True
    assert user_repository.add_claim(user.id, claim) is True
    assert user_repository.get_user_by_id(user.id).claims == (claim,)


def test_add_claim_unknown_user_returns_false(user_repository):
    assert user_repository.add_claim(uuid4(), UserClaim(type="DeleteSupplier")) is False
