"""
===============================================================================
TARJETA CRC — schemas/auth.py
===============================================================================

Módulo:
    Schemas HTTP para registro / login

Responsabilidades:
    - RegisterUserReq / LoginUserReq (camelCase en el wire).
    - TokenRes: accessToken + expiresIn + userToken { id, email, claims[] }.

Reglas:
    - Los campos son opcionales a nivel schema: las reglas (email válido,
      longitud de password, confirmación) viven en identity_service para
      responder con el mapa campo -> mensajes.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from supplier_api.identity.auth_users import TokenResponse
from supplier_api.identity.identity_service import Credentials


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class LoginUserReq(_CamelModel):
    email: str | None = None
    password: str | None = None

    def to_credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password)


class RegisterUserReq(LoginUserReq):
    confirm_password: str | None = Field(default=None, alias="confirmPassword")

    def to_credentials(self) -> Credentials:
        return Credentials(
            email=self.email,
            password=self.password,
            confirm_password=self.confirm_password,
        )


class ClaimRes(_CamelModel):
    type: str
    value: str


class UserTokenRes(_CamelModel):
    id: UUID
    email: str
    claims: list[ClaimRes] = Field(default_factory=list)


class TokenRes(_CamelModel):
    access_token: str = Field(alias="accessToken")
    expires_in: int = Field(alias="expiresIn")
    user_token: UserTokenRes = Field(alias="userToken")

    @classmethod
    def from_token_response(cls, token: TokenResponse) -> "TokenRes":
        return cls(
            access_token=token.access_token,
            expires_in=token.expires_in,
            user_token=UserTokenRes(
                id=token.user_token.id,
                email=token.user_token.email,
                claims=[
                    ClaimRes(type=c.type, value=c.value)
                    for c in token.user_token.claims
                ],
            ),
        )
