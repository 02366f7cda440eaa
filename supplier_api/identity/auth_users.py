"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (JWT) + chequeo de claims

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Emitir JWT de acceso (iss/aud/exp/nbf/jti + claims del usuario).
    - Decodificar y validar JWT (firma, exp, iss, aud, claims mínimos).
    - Exponer `has_claim(principal, name)` como chequeo explícito de capacidad.
    - Exponer dependencias FastAPI (require_user, require_claim).

Colaboradores:
    - crosscutting.config.get_settings: secreto, issuer, audience, expiración.
    - crosscutting.error_responses: unauthorized/forbidden estándar.
    - crosscutting.logger: logging estructurado.
    - identity.users: User / UserClaim.

Decisiones de diseño:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - Validación stateless: el principal sale del token, sin ir a la DB.
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID, uuid4

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Header, Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from .users import User, UserClaim

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_JTI: str = "jti"
CLAIM_NBF: str = "nbf"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_ISS: str = "iss"
CLAIM_AUD: str = "aud"

# R: claims propios del token; un claim de usuario con estos nombres se ignora.
RESERVED_CLAIMS: frozenset[str] = frozenset(
    {CLAIM_SUB, CLAIM_EMAIL, CLAIM_JTI, CLAIM_NBF, CLAIM_IAT, CLAIM_EXP, CLAIM_ISS, CLAIM_AUD}
)

_password_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Contratos
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    jwt_secret: str
    jwt_issuer: str
    jwt_audience: str
    jwt_expiration_hours: int


@dataclass(frozen=True, slots=True)
class Principal:
    """Llamador autenticado, reconstruido desde el access token."""

    user_id: UUID
    email: str
    claims: tuple[UserClaim, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class UserToken:
    id: UUID
    email: str
    claims: tuple[UserClaim, ...]


@dataclass(frozen=True, slots=True)
class TokenResponse:
    """Respuesta de registro/login: token + datos mínimos del usuario."""

    access_token: str
    expires_in: int
    user_token: UserToken


def get_auth_settings() -> AuthSettings:
    """Construye un snapshot de settings de auth."""
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_issuer=s.jwt_issuer,
        jwt_audience=s.jwt_audience,
        jwt_expiration_hours=s.jwt_expiration_hours,
    )


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user: User, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Crea un JWT de acceso firmado. Retorna (token, expires_in_seconds)."""
    auth_settings = settings or get_auth_settings()

    now = datetime.now(timezone.utc)
    expires_in = int(auth_settings.jwt_expiration_hours * 3600)

    payload: dict[str, object] = {}

    # R: claims de usuario primero; tipos repetidos se agrupan en lista.
    for claim in user.claims:
        if claim.type in RESERVED_CLAIMS:
            continue
        current = payload.get(claim.type)
        if current is None:
            payload[claim.type] = claim.value
        elif isinstance(current, list):
            current.append(claim.value)
        else:
            payload[claim.type] = [current, claim.value]

    payload.update(
        {
            CLAIM_SUB: str(user.id),
            CLAIM_EMAIL: user.email,
            CLAIM_JTI: str(uuid4()),
            CLAIM_NBF: int(now.timestamp()),
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
            CLAIM_ISS: auth_settings.jwt_issuer,
            CLAIM_AUD: auth_settings.jwt_audience,
        }
    )

    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def build_token_response(
    user: User, settings: AuthSettings | None = None
) -> TokenResponse:
    """Emite el token y arma la respuesta de registro/login."""
    token, expires_in = create_access_token(user, settings=settings)
    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user_token=UserToken(id=user.id, email=user.email, claims=tuple(user.claims)),
    )


def decode_access_token(token: str, settings: AuthSettings | None = None) -> Principal:
    """
    Decodifica y valida un JWT de acceso.

    Errores:
        - 401 si expiró, firma/issuer/audience inválidos o faltan claims mínimos.
    """
    auth_settings = settings or get_auth_settings()

    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            audience=auth_settings.jwt_audience,
            issuer=auth_settings.jwt_issuer,
            options={"require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_EXP]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Invalid token.") from exc

    try:
        user_id = UUID(str(payload[CLAIM_SUB]))
    except ValueError as exc:
        raise unauthorized("Invalid token.") from exc

    claims: list[UserClaim] = []
    for claim_type, raw in payload.items():
        if claim_type in RESERVED_CLAIMS:
            continue
        values = raw if isinstance(raw, list) else [raw]
        claims.extend(UserClaim(type=claim_type, value=str(v)) for v in values)

    return Principal(
        user_id=user_id, email=str(payload[CLAIM_EMAIL]), claims=tuple(claims)
    )


def has_claim(principal: Principal | None, claim_name: str) -> bool:
    """True si el principal trae un claim con ese tipo (cualquier valor)."""
    if principal is None:
        return False
    return any(claim.type == claim_name for claim in principal.claims)


# ---------------------------------------------------------------------------
# Extracción de token
# ---------------------------------------------------------------------------


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        token = extract_bearer_token(authorization)
        if not token:
            raise unauthorized("Missing bearer token.")

        principal = decode_access_token(token)
        request.state.principal = principal
        return principal

    return dependency


def require_claim(claim_name: str) -> Callable:
    """Dependency FastAPI: usuario autenticado + claim específico."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> Principal:
        principal = await require_user()(request, authorization)
        if not has_claim(principal, claim_name):
            logger.warning(
                "Auth falló: claim faltante",
                extra={"user_id": str(principal.user_id), "required_claim": claim_name},
            )
            raise forbidden(f"Missing required claim: {claim_name}")
        return principal

    return dependency
