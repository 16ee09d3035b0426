"""
Authentication module.

Handles registration, login, session tokens, password changes and the
forgot/reset password flow.

Public API:
- IAuthService: Interface for auth operations
- ICredentialStore / INotificationService: collaborators of the flows
- Account, Role: the principal attached to authenticated requests
- TokenCodec: session token issue/verify
- Auth exceptions: InvalidTokenError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService, ICredentialStore, INotificationService
from .models import Account, Role, RESET_TOKEN_TTL
from .tokens import TokenCodec, generate_reset_secret, hash_for_lookup
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    NotAuthenticatedError,
    MissingCredentialsError,
    InvalidCredentialsError,
    IncorrectPasswordError,
    AccountNotFoundError,
    EmailNotRegisteredError,
    InvalidResetTokenError,
    InsufficientPermissionsError,
    NotResourceOwnerError,
    EmailDeliveryError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ICredentialStore",
    "INotificationService",
    # Models
    "Account",
    "Role",
    "RESET_TOKEN_TTL",
    # Tokens
    "TokenCodec",
    "generate_reset_secret",
    "hash_for_lookup",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "NotAuthenticatedError",
    "MissingCredentialsError",
    "InvalidCredentialsError",
    "IncorrectPasswordError",
    "AccountNotFoundError",
    "EmailNotRegisteredError",
    "InvalidResetTokenError",
    "InsufficientPermissionsError",
    "NotResourceOwnerError",
    "EmailDeliveryError",
]
