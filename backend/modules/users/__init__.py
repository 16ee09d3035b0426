"""
User administration module.

Admin-only CRUD over accounts. Passwords are hashed before they reach
the repository.
"""

from .models import CreateUserRequest, UpdateUserRequest
from .service import UserAdminService

__all__ = ["CreateUserRequest", "UpdateUserRequest", "UserAdminService"]
