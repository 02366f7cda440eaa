"""
===============================================================================
TARJETA CRC — identity/identity_service.py
===============================================================================

Módulo:
    Servicio de identidad (registro / login con lockout)

Responsabilidades:
    - Validar RegisterUser / LoginUser (tabla de reglas + confirmación).
    - Registrar usuarios (email confirmado, password Argon2, email único).
    - Login por password con bloqueo tras N fallos consecutivos.
    - Devolver resultados tipados (IdentityResult / SignInResult), sin HTTP.

Colaboradores:
    - domain.repositories.UserRepository (puerto de persistencia)
    - domain.validation (reglas por campo)
    - identity.auth_users (hash/verify)
    - crosscutting.logger

Notas:
    - "Usuario no existe" y "password incorrecto" devuelven el mismo resultado.
    - Un usuario bloqueado no llega a verificar password.
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

from ..crosscutting.logger import logger
from ..domain.repositories import DuplicateUserError, UserRepository
from ..domain.validation import FieldRule, is_present, validate
from .auth_users import hash_password, verify_password
from .users import User

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100


def _is_email(value: object) -> bool:
    return value is None or (isinstance(value, str) and bool(_EMAIL_RE.match(value)))


def _password_length_ok(value: object) -> bool:
    return value is None or (
        isinstance(value, str)
        and PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH
    )


_EMAIL_RULES = [
    FieldRule(is_present, "The Email field is required."),
    FieldRule(_is_email, "The Email field is not a valid e-mail address."),
]

LOGIN_USER_RULES = {
    "email": _EMAIL_RULES,
    "password": [FieldRule(is_present, "The Password field is required.")],
}

REGISTER_USER_RULES = {
    "email": _EMAIL_RULES,
    "password": [
        FieldRule(is_present, "The Password field is required."),
        FieldRule(
            _password_length_ok,
            f"The field Password must be a string with a minimum length of "
            f"{PASSWORD_MIN_LENGTH} and a maximum length of {PASSWORD_MAX_LENGTH}.",
        ),
    ],
}


@dataclass(frozen=True, slots=True)
class Credentials:
    """RegisterUser / LoginUser."""

    email: str | None
    password: str | None
    confirm_password: str | None = None


@dataclass(frozen=True, slots=True)
class IdentityError:
    code: str
    description: str


@dataclass
class IdentityResult:
    """Resultado de registro. `errors` vacío => éxito (y `user` presente)."""

    user: User | None = None
    errors: list[IdentityError] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class SignInResult:
    succeeded: bool = False
    is_locked_out: bool = False
    user: User | None = None


@dataclass(frozen=True, slots=True)
class LockoutPolicy:
    max_failed_attempts: int = 5
    lockout_minutes: int = 5


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_register_user(credentials: Credentials) -> dict[str, list[str]]:
    """Reglas de RegisterUser + comparación de confirmación (si viene)."""
    errors = dict(validate(credentials, REGISTER_USER_RULES).errors)
    if (
        credentials.confirm_password is not None
        and credentials.confirm_password != credentials.password
    ):
        errors.setdefault("confirmPassword", []).append(
            "'ConfirmPassword' and 'Password' do not match."
        )
    return errors


def validate_login_user(credentials: Credentials) -> dict[str, list[str]]:
    return dict(validate(credentials, LOGIN_USER_RULES).errors)


class IdentityService:
    """
    Servicio de identidad: registro + sign-in con lockout.

    Inyección explícita: repositorio, política de lockout y reloj.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        lockout: LockoutPolicy | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._users = user_repository
        self._lockout = lockout or LockoutPolicy()
        self._now = clock or (lambda: datetime.now(timezone.utc))

    def register(self, credentials: Credentials) -> IdentityResult:
        """Crea el usuario (email confirmado). Precondición: credenciales validadas."""
        email = normalize_email(credentials.email)

        if self._users.get_user_by_email(email) is not None:
            return self._duplicate(email)

        user = User(
            id=uuid4(),
            email=email,
            password_hash=hash_password(credentials.password or ""),
            email_confirmed=True,
            created_at=self._now(),
        )
        try:
            created = self._users.create_user(user)
        except DuplicateUserError:
            # Carrera entre el chequeo y el insert.
            return self._duplicate(email)

        logger.info("Usuario registrado", extra={"user_id": str(created.id)})
        return IdentityResult(user=created)

    def password_sign_in(
        self, credentials: Credentials, *, lockout_on_failure: bool = True
    ) -> SignInResult:
        """Login por password. Bloquea tras `max_failed_attempts` fallos."""
        email = normalize_email(credentials.email)
        user = self._users.get_user_by_email(email)
        if user is None:
            return SignInResult()

        now = self._now()
        if user.is_locked_out(now):
            logger.warning("Login rechazado: usuario bloqueado", extra={"user_id": str(user.id)})
            return SignInResult(is_locked_out=True)

        if verify_password(credentials.password or "", user.password_hash):
            if user.access_failed_count:
                self._users.reset_failed_logins(user.id)
            return SignInResult(succeeded=True, user=user)

        if not lockout_on_failure:
            return SignInResult()

        lockout_end = None
        if user.access_failed_count + 1 >= self._lockout.max_failed_attempts:
            lockout_end = now + timedelta(minutes=self._lockout.lockout_minutes)

        self._users.record_failed_login(user.id, lockout_end=lockout_end)

        if lockout_end is not None:
            logger.warning(
                "Usuario bloqueado por intentos fallidos",
                extra={"user_id": str(user.id), "lockout_end": lockout_end.isoformat()},
            )
            return SignInResult(is_locked_out=True)

        return SignInResult()

    @staticmethod
    def _duplicate(email: str) -> IdentityResult:
        return IdentityResult(
            errors=[
                IdentityError(
                    code="DuplicateUserName",
                    description=f"Username '{email}' is already taken.",
                )
            ]
        )
