"""
Name: Grant Claim Script

Responsibilities:
  - Grant a named claim (default: DeleteSupplier) to an existing user (idempotent)
  - Resolve the user by normalized email
  - Store the claim in PostgreSQL through PostgresUserRepository

Usage:
  python -m supplier_api.scripts.grant_claim --email ops@example.com
  python -m supplier_api.scripts.grant_claim --email ops@example.com --claim DeleteSupplier
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ..crosscutting.config import get_settings
from ..domain.repositories import UserRepository
from ..identity.identity_service import normalize_email
from ..identity.users import DELETE_SUPPLIER_CLAIM, User, UserClaim


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] == "--":
        args = args[1:]
    parser = argparse.ArgumentParser(description="Grant a claim to a user (idempotent).")
    parser.add_argument("--email", required=True, help="User email (will be normalized)")
    parser.add_argument(
        "--claim",
        default=DELETE_SUPPLIER_CLAIM,
        help=f"Claim type (default: {DELETE_SUPPLIER_CLAIM})",
    )
    parser.add_argument("--value", default="", help="Claim value (default: empty)")
    return parser.parse_args(args)


def grant_claim(repository: UserRepository, email: str, claim: UserClaim) -> User:
    """Otorga el claim. SystemExit si el usuario no existe."""
    normalized = normalize_email(email)
    if not normalized:
        raise SystemExit("Email is required.")

    user = repository.get_user_by_email(normalized)
    if user is None:
        raise SystemExit(f"User not found: {normalized}")

    if claim in user.claims:
        print(f"Claim already granted: email={normalized} claim={claim.type}")
        return user

    repository.add_claim(user.id, claim)
    print(f"Granted claim: id={user.id} email={normalized} claim={claim.type}")
    return repository.get_user_by_id(user.id) or user


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)

    from ..infrastructure.db import close_pool, ensure_schema, init_pool
    from ..infrastructure.repositories import PostgresUserRepository

    settings = get_settings()
    pool = init_pool(settings.database_url, min_size=1, max_size=1)
    try:
        ensure_schema(pool)
        grant_claim(
            PostgresUserRepository(pool),
            args.email,
            UserClaim(type=args.claim, value=args.value),
        )
    finally:
        close_pool()


if __name__ == "__main__":
    main()
