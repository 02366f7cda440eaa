"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario e Identidad (JWT + claims)

Responsabilidades:
    - Definir el dataclass User utilizado por registro/login y validación de token.
    - Definir UserClaim (permiso nombrado, independiente de estar autenticado).
    - Centralizar los nombres de claims que la API conoce.

Colaboradores:
    - identity/auth_users.py: emite/valida JWT con estos datos.
    - identity/identity_service.py: registro, login y lockout.
    - infrastructure/repositories/*/user.py: mapean filas -> User.

Notas:
    - Este módulo NO contiene lógica: solo "shapes" de datos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

# Claim requerido para borrar proveedores.
DELETE_SUPPLIER_CLAIM: str = "DeleteSupplier"


@dataclass(frozen=True, slots=True)
class UserClaim:
    """Par (tipo, valor) asociado a un usuario."""

    type: str
    value: str = ""


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario de identidad."""

    id: UUID
    email: str
    password_hash: str
    email_confirmed: bool = True
    access_failed_count: int = 0
    lockout_end: datetime | None = None
    claims: tuple[UserClaim, ...] = field(default_factory=tuple)
    created_at: datetime | None = None

    def is_locked_out(self, now: datetime) -> bool:
        return self.lockout_end is not None and self.lockout_end > now
