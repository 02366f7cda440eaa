"""
Name: Identity Service Tests

Responsibilities:
  - Register: validation rules, duplicate email, confirmed email
  - Sign-in: success, bad credentials, lockout after N failures
"""

from datetime import datetime, timedelta, timezone

import pytest

from supplier_api.identity.identity_service import (
    Credentials,
    IdentityService,
    LockoutPolicy,
    validate_login_user,
    validate_register_user,
)

pytestmark = pytest.mark.unit


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> _Clock:
    return _Clock()


@pytest.fixture
def service(user_repository, clock) -> IdentityService:
    return IdentityService(
        user_repository,
        lockout=LockoutPolicy(max_failed_attempts=3, lockout_minutes=5),
        clock=clock,
    )


def _register(service: IdentityService, email="user@example.com", password="secret1"):
    return service.register(Credentials(email=email, password=password))


# =============================================================================
# Validation
# =============================================================================


def test_register_validation_requires_email_and_password():
    errors = validate_register_user(Credentials(email=None, password=None))

    assert errors["email"] == ["The Email field is required."]
    assert errors["password"] == ["The Password field is required."]


def test_register_validation_rejects_bad_email_and_short_password():
    errors = validate_register_user(Credentials(email="nope", password="123"))

    assert "email" in errors
    assert "minimum length of 6" in errors["password"][0]


def test_register_validation_checks_confirmation():
    errors = validate_register_user(
        Credentials(email="a@b.co", password="secret1", confirm_password="secret2")
    )

    assert list(errors) == ["confirmPassword"]


def test_login_validation_accepts_any_password_length():
    assert validate_login_user(Credentials(email="a@b.co", password="1")) == {}


# =============================================================================
# Register
# =============================================================================


def test_register_creates_confirmed_user(service, user_repository):
    result = _register(service, email="  USER@Example.com ")

    assert result.succeeded
    assert result.user.email == "user@example.com"
    assert result.user.email_confirmed is True
    assert result.user.password_hash != "secret1"
    assert user_repository.get_user_by_email("user@example.com") is not None


def test_register_duplicate_email_fails(service):
    _register(service)

    result = _register(service, email="User@example.com")

    assert not result.succeeded
    assert result.errors[0].code == "DuplicateUserName"


# =============================================================================
# Sign-in + lockout
# =============================================================================


def test_sign_in_success(service):
    _register(service)

    result = service.password_sign_in(Credentials("user@example.com", "secret1"))

    assert result.succeeded
    assert result.user.email == "user@example.com"


def test_sign_in_unknown_user_fails(service):
    result = service.password_sign_in(Credentials("ghost@example.com", "secret1"))

    assert not result.succeeded
    assert not result.is_locked_out


def test_lockout_after_max_failures(service, user_repository):
    _register(service)
    bad = Credentials("user@example.com", "wrong")

    first = service.password_sign_in(bad)
    second = service.password_sign_in(bad)
    third = service.password_sign_in(bad)

    assert not first.is_locked_out and not second.is_locked_out
    assert third.is_locked_out
    user = user_repository.get_user_by_email("user@example.com")
    assert user.access_failed_count == 0
    assert user.lockout_end is not None


def test_locked_out_user_rejected_even_with_right_password(service, clock):
    _register(service)
    for _ in range(3):
        service.password_sign_in(Credentials("user@example.com", "wrong"))

    locked = service.password_sign_in(Credentials("user@example.com", "secret1"))
    clock.advance(minutes=6)
    unlocked = service.password_sign_in(Credentials("user@example.com", "secret1"))

    assert locked.is_locked_out and not locked.succeeded
    assert unlocked.succeeded


def test_success_resets_failed_count(service, user_repository):
    _register(service)
    service.password_sign_in(Credentials("user@example.com", "wrong"))

    service.password_sign_in(Credentials("user@example.com", "secret1"))

    assert user_repository.get_user_by_email("user@example.com").access_failed_count == 0


def test_failure_without_lockout_does_not_count(service, user_repository):
    _register(service)

    service.password_sign_in(
        Credentials("user@example.com", "wrong"), lockout_on_failure=False
    )

    assert user_repository.get_user_by_email("user@example.com").access_failed_count == 0
