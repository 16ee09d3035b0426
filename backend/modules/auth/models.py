"""
Authentication module data models.

These models define the account (principal) record, the request payloads
of the auth flows and the claims carried by session tokens.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Any, NamedTuple, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.models import CamelModel


# Lifetime of a password-reset token
RESET_TOKEN_TTL = timedelta(minutes=10)

PASSWORD_MIN_LENGTH = 6
# bcrypt only reads the first 72 bytes
PASSWORD_MAX_LENGTH = 72


class Role(str, Enum):
    """Closed set of account roles."""

    USER = "user"
    PUBLISHER = "publisher"
    ADMIN = "admin"


class Account(CamelModel):
    """
    A registered user.

    The password hash and reset-token fields are loaded only when asked
    for and are never serialized.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Account ID (ObjectId hex)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique email address")
    role: Role = Field(default=Role.USER, description="Account role")
    created_at: Optional[datetime] = Field(None, description="Registration time")

    password_hash: Optional[str] = Field(default=None, alias="password", exclude=True)
    reset_password_token: Optional[str] = Field(default=None, exclude=True)
    reset_password_expire: Optional[datetime] = Field(default=None, exclude=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Account":
        return cls.model_validate({**document, "id": str(document["_id"])})


class TokenClaims(BaseModel):
    """Decoded session token payload."""

    sub: str = Field(..., min_length=1, description="Subject (account ID)")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


class ResetSecret(NamedTuple):
    """A reset token in its delivered and its persisted form."""

    plaintext: str
    hash: str


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    role: Role = Role.USER

    @field_validator("role")
    @classmethod
    def role_is_self_assignable(cls, role: Role) -> Role:
        if role is Role.ADMIN:
            raise ValueError("Role admin cannot be self-assigned")
        return role


class LoginRequest(BaseModel):
    """Both fields are optional so a missing one is reported as a bad request."""

    email: Optional[str] = None
    password: Optional[str] = None


class UpdateDetailsRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None


class UpdatePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
