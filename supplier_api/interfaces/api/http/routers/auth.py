"""
===============================================================================
TARJETA CRC — supplier_api/interfaces/api/http/routers/auth.py
===============================================================================

Class/Module:
    User Router (registro / login)

Responsibilities:
    - POST /register: validar, crear usuario (email confirmado) y emitir token.
    - POST /login: validar, sign-in con lockout y emitir token.
    - Traducir fallos de identidad a 400 (mensaje plano o mapa por campo).

Collaborators:
    - supplier_api.identity.identity_service.IdentityService
    - supplier_api.identity.auth_users.build_token_response
    - supplier_api.container.get_identity_service
    - schemas.auth (DTOs)

Notas:
    - Body ausente => 400 "User not informed".
    - Usuario inexistente y password incorrecto responden igual.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from supplier_api.container import get_identity_service
from supplier_api.crosscutting.error_responses import bad_request, validation_problem
from supplier_api.crosscutting.logger import logger
from supplier_api.identity.auth_users import build_token_response
from supplier_api.identity.identity_service import (
    IdentityService,
    validate_login_user,
    validate_register_user,
)

from ..schemas.auth import LoginUserReq, RegisterUserReq, TokenRes

router = APIRouter(tags=["User"])

USER_NOT_INFORMED = "User not informed"
USER_LOCKED_OUT = "User locked out"
INVALID_CREDENTIALS = "Invalid user or password"


@router.post("/register", response_model=TokenRes, operation_id="Register")
def register(
    req: RegisterUserReq | None = Body(default=None),
    identity: IdentityService = Depends(get_identity_service),
):
    if req is None:
        raise bad_request(USER_NOT_INFORMED)

    credentials = req.to_credentials()
    field_errors = validate_register_user(credentials)
    if field_errors:
        raise validation_problem(field_errors)

    result = identity.register(credentials)
    if not result.succeeded:
        raise bad_request(
            result.errors[0].description,
            errors=[{"code": e.code, "description": e.description} for e in result.errors],
        )

    return TokenRes.from_token_response(build_token_response(result.user))


@router.post("/login", response_model=TokenRes, operation_id="Login")
def login(
    req: LoginUserReq | None = Body(default=None),
    identity: IdentityService = Depends(get_identity_service),
):
    if req is None:
        raise bad_request(USER_NOT_INFORMED)

    credentials = req.to_credentials()
    field_errors = validate_login_user(credentials)
    if field_errors:
        raise validation_problem(field_errors)

    result = identity.password_sign_in(credentials, lockout_on_failure=True)
    if result.is_locked_out:
        raise bad_request(USER_LOCKED_OUT)
    if not result.succeeded:
        logger.info("Login fallido")
        raise bad_request(INVALID_CREDENTIALS)

    return TokenRes.from_token_response(build_token_response(result.user))
