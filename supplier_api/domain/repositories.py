"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Model the supplier gateway as an explicit unit of work:
  reads are immediate, writes are staged and applied by commit().

Collaborators
- domain.entities: Supplier
- identity.users: User, UserClaim
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- A SupplierRepository instance is request-scoped (its staged list and
  identity map must never be shared across requests).

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- commit() returns the number of rows actually changed; 0 for an operation
  that should have changed one row is a failure signal for the caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Protocol
from uuid import UUID

from .entities import Supplier

if TYPE_CHECKING:
    from ..identity.users import User, UserClaim


class TrackingConflictError(Exception):
    """
    R: A change was staged for an identity already tracked through another
    instance in the same unit of work.
    """

    def __init__(self, supplier_id: UUID):
        self.supplier_id = supplier_id
        super().__init__(
            f"Another instance of Supplier '{supplier_id}' is already tracked"
        )


class DuplicateUserError(Exception):
    """R: A user with the same (normalized) email already exists."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User '{email}' already exists")


class SupplierRepository(Protocol):
    """
    R: Persistence gateway for suppliers (unit of work).

    Reads:
      - find_by_id: returns a snapshot and tracks it in the identity map.
      - find_by_id_untracked: returns a read-only snapshot, tracks nothing.
      - list_all: every row, storage order (no ordering guarantee).

    Writes (staged until commit):
      - add / update / remove
    """

    def find_by_id(self, supplier_id: UUID) -> Optional[Supplier]:
        """R: Lookup by id (tracked). None when absent, never an error."""
        ...

    def find_by_id_untracked(self, supplier_id: UUID) -> Optional[Supplier]:
        """R: Lookup by id without tracking (existence checks / snapshots)."""
        ...

    def list_all(self) -> List[Supplier]:
        """R: All suppliers."""
        ...

    def add(self, supplier: Supplier) -> None:
        """R: Stage an insert."""
        ...

    def update(self, supplier: Supplier) -> None:
        """R: Stage a full replace of name/document/is_active for supplier.id."""
        ...

    def remove(self, supplier: Supplier) -> None:
        """R: Stage a delete by supplier.id."""
        ...

    def commit(self) -> int:
        """R: Apply staged changes in one transaction; return affected rows."""
        ...

    def rollback(self) -> None:
        """R: Discard staged changes and the identity map."""
        ...


class UserRepository(Protocol):
    """R: Interface for identity persistence (users + claims + lockout state)."""

    def get_user_by_email(self, email: str) -> Optional["User"]:
        ...

    def get_user_by_id(self, user_id: UUID) -> Optional["User"]:
        ...

    def create_user(self, user: "User") -> "User":
        """R: Persist a new user. Raises DuplicateUserError on duplicate email."""
        ...

    def record_failed_login(
        self, user_id: UUID, *, lockout_end: datetime | None
    ) -> Optional["User"]:
        """R: Increment access_failed_count; set lockout_end when given (resets count)."""
        ...

    def reset_failed_logins(self, user_id: UUID) -> None:
        ...

    def add_claim(self, user_id: UUID, claim: "UserClaim") -> bool:
        """R: Grant a claim. False if the user does not exist."""
        ...
