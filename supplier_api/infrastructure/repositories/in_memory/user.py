"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Guardar usuarios + claims en memoria (tests / local dev).
  - Mantener el estado de lockout (access_failed_count, lockout_end).
  - Enforzar unicidad de email (DuplicateUserError).

Collaborators:
  - identity.users.User / UserClaim
  - domain.repositories.UserRepository (contrato)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - User es inmutable: cada cambio reemplaza el registro (dataclasses.replace).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.repositories import DuplicateUserError
from ....identity.users import User, UserClaim


class InMemoryUserRepository:
    """Repositorio in-memory, thread-safe, para usuarios."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def _by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._by_email(email)

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def create_user(self, user: User) -> User:
        with self._lock:
            if self._by_email(user.email) is not None:
                raise DuplicateUserError(user.email)
            self._users[user.id] = user
            return user

    def record_failed_login(
        self, user_id: UUID, *, lockout_end: datetime | None
    ) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            if lockout_end is not None:
                updated = replace(user, access_failed_count=0, lockout_end=lockout_end)
            else:
                updated = replace(user, access_failed_count=user.access_failed_count + 1)
            self._users[user_id] = updated
            return updated

    def reset_failed_logins(self, user_id: UUID) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                self._users[user_id] = replace(user, access_failed_count=0)

    def add_claim(self, user_id: UUID, claim: UserClaim) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            if claim not in user.claims:
                self._users[user_id] = replace(user, claims=user.claims + (claim,))
            return True

    def clear(self) -> None:
        with self._lock:
            self._users.clear()
