"""
User administration request models.

Unlike registration, an admin may assign any role.
"""

from typing import Optional
from pydantic import EmailStr, Field

from shared.models import CamelModel
from modules.auth.models import PASSWORD_MAX_LENGTH, PASSWORD_MIN_LENGTH, Role


class CreateUserRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    role: Role = Role.USER


class UpdateUserRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(
        None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )
    role: Optional[Role] = None
