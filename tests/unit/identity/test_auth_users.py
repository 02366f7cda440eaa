"""
Name: JWT + Claims Tests

Responsibilities:
  - Token round trip carries sub/email/claims
  - Issuer / audience / expiry are enforced (401)
  - has_claim is independent from authentication
  - FastAPI dependencies: 401 without token, 403 without claim
"""

import warnings
from dataclasses import replace
from unittest.mock import patch
from uuid import uuid4

import jwt
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from supplier_api.api.exception_handlers import register_exception_handlers
from supplier_api.crosscutting.config import DEV_JWT_SECRET
from supplier_api.crosscutting.error_responses import AppHTTPException
from supplier_api.identity.auth_users import (
    JWT_ALGORITHM,
    Principal,
    build_token_response,
    create_access_token,
    decode_access_token,
    extract_bearer_token,
    has_claim,
    hash_password,
    require_claim,
    require_user,
    verify_password,
)
from supplier_api.identity.users import DELETE_SUPPLIER_CLAIM, User, UserClaim

pytestmark = pytest.mark.unit


def _user(*claims: UserClaim) -> User:
    return User(
        id=uuid4(),
        email="user@example.com",
        password_hash="unused",
        claims=tuple(claims),
    )


def test_password_hash_roundtrip():
    hashed = hash_password("secret1")

    assert hashed != "secret1"
    assert verify_password("secret1", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_verify_password_with_garbage_hash_is_false():
    assert verify_password("secret1", "not-a-hash") is False


def test_token_carries_identity_and_claims(auth_settings):
    user = _user(UserClaim(DELETE_SUPPLIER_CLAIM, "true"))

    token, expires_in = create_access_token(user, settings=auth_settings)
    principal = decode_access_token(token, settings=auth_settings)

    assert expires_in == 2 * 3600
    assert principal.user_id == user.id
    assert principal.email == user.email
    assert has_claim(principal, DELETE_SUPPLIER_CLAIM)


def test_default_settings_sign_without_key_length_warnings(auth_settings):
    settings = replace(auth_settings, jwt_secret=DEV_JWT_SECRET)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        token, _ = create_access_token(_user(), settings=settings)
        principal = decode_access_token(token, settings=settings)

    assert principal.email == "user@example.com"


def test_repeated_claim_types_are_grouped(auth_settings):
    user = _user(UserClaim("Role", "a"), UserClaim("Role", "b"))

    token, _ = create_access_token(user, settings=auth_settings)
    payload = jwt.decode(
        token,
        auth_settings.jwt_secret,
        algorithms=[JWT_ALGORITHM],
        audience=auth_settings.jwt_audience,
    )
    principal = decode_access_token(token, settings=auth_settings)

    assert payload["Role"] == ["a", "b"]
    assert [c.value for c in principal.claims if c.type == "Role"] == ["a", "b"]


def test_reserved_claim_names_are_not_overridden(auth_settings):
    user = _user(UserClaim("sub", "hijack"))

    token, _ = create_access_token(user, settings=auth_settings)

    assert decode_access_token(token, settings=auth_settings).user_id == user.id


def test_wrong_audience_is_rejected(auth_settings):
    token, _ = create_access_token(_user(), settings=auth_settings)
    other = replace(auth_settings, jwt_audience="https://elsewhere")

    with pytest.raises(AppHTTPException) as exc_info:
        decode_access_token(token, settings=other)

    assert exc_info.value.status_code == 401


def test_expired_token_is_rejected(auth_settings):
    expired = replace(auth_settings, jwt_expiration_hours=-1)
    token, _ = create_access_token(_user(), settings=expired)

    with pytest.raises(AppHTTPException) as exc_info:
        decode_access_token(token, settings=auth_settings)

    assert exc_info.value.detail == "Token expired."


def test_build_token_response_shape(auth_settings):
    user = _user(UserClaim(DELETE_SUPPLIER_CLAIM))

    response = build_token_response(user, settings=auth_settings)

    assert response.access_token
    assert response.user_token.email == user.email
    assert response.user_token.claims == user.claims


def test_has_claim_without_principal_is_false():
    assert has_claim(None, DELETE_SUPPLIER_CLAIM) is False
    assert has_claim(Principal(user_id=uuid4(), email="x@y.z"), DELETE_SUPPLIER_CLAIM) is False


@pytest.mark.parametrize(
    "header,expected",
    [
        (None, None),
        ("", None),
        ("Basic abc", None),
        ("Bearer ", None),
        ("Bearer abc", "abc"),
        ("bearer  abc ", "abc"),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/me")
    def me(principal: Principal = Depends(require_user())):
        return {"email": principal.email}

    @app.get("/danger")
    def danger(_: Principal = Depends(require_claim(DELETE_SUPPLIER_CLAIM))):
        return {"ok": True}

    return app


def test_require_user_dependency(auth_settings):
    client = TestClient(_build_app())
    token, _ = create_access_token(_user(), settings=auth_settings)

    with patch(
        "supplier_api.identity.auth_users.get_auth_settings",
        return_value=auth_settings,
    ):
        missing = client.get("/me")
        ok = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert missing.status_code == 401
    assert missing.headers["WWW-Authenticate"] == "Bearer"
    assert ok.status_code == 200
    assert ok.json() == {"email": "user@example.com"}


def test_require_claim_dependency(auth_settings):
    client = TestClient(_build_app())
    plain, _ = create_access_token(_user(), settings=auth_settings)
    elevated, _ = create_access_token(
        _user(UserClaim(DELETE_SUPPLIER_CLAIM)), settings=auth_settings
    )

    with patch(
        "supplier_api.identity.auth_users.get_auth_settings",
        return_value=auth_settings,
    ):
        anonymous = client.get("/danger")
        forbidden = client.get("/danger", headers={"Authorization": f"Bearer {plain}"})
        allowed = client.get("/danger", headers={"Authorization": f"Bearer {elevated}"})

    assert anonymous.status_code == 401
    assert forbidden.status_code == 403
    assert DELETE_SUPPLIER_CLAIM in forbidden.json()["detail"]
    assert allowed.status_code == 200
