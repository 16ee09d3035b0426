"""
Authentication module exceptions.

These exceptions are raised by the auth module and are rendered by the
API error handlers with the status each base class carries.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ExternalServiceError,
    NotFoundError,
)


NOT_AUTHORIZED_MESSAGE = "Not authorized to access this route"


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(InvalidTokenError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message)
        self.code = "TOKEN_EXPIRED"


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = NOT_AUTHORIZED_MESSAGE):
        super().__init__(message, code="MISSING_TOKEN")


class NotAuthenticatedError(AuthenticationError):
    """Raised when a presented token does not resolve to an account."""

    def __init__(self, message: str = NOT_AUTHORIZED_MESSAGE):
        super().__init__(message, code="NOT_AUTHENTICATED")


class MissingCredentialsError(BadRequestError):
    """Raised when login is attempted without an email or a password."""

    def __init__(self):
        super().__init__(
            "Please provide an email and a password",
            code="MISSING_CREDENTIALS",
        )


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Unknown email and wrong password produce the same error.
    """

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class IncorrectPasswordError(AuthenticationError):
    """Raised when the current password does not match on password change."""

    def __init__(self):
        super().__init__("Password is incorrect", code="INCORRECT_PASSWORD")


class AccountNotFoundError(NotFoundError):
    """Raised when an account id does not exist."""

    def __init__(self, account_id: str):
        super().__init__(
            f"User not found with id of {account_id}",
            code="USER_NOT_FOUND",
            details={"user_id": account_id},
        )


class EmailNotRegisteredError(NotFoundError):
    """Raised when forgot-password names an unknown email."""

    def __init__(self, email: str):
        super().__init__(
            "There is no user with that email",
            code="EMAIL_NOT_REGISTERED",
            details={"email": email},
        )


class InvalidResetTokenError(BadRequestError):
    """Raised when a reset token is unknown or expired."""

    def __init__(self):
        super().__init__("Invalid token", code="INVALID_RESET_TOKEN")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, user_role: str):
        super().__init__(
            f"User role {user_role} is not authorized to access this route",
            code="INSUFFICIENT_PERMISSIONS",
            details={"user_role": user_role},
        )


class NotResourceOwnerError(AuthorizationError):
    """Raised when a non-admin acts on a resource owned by someone else."""

    def __init__(self, user_id: str, action: str, resource: str):
        super().__init__(
            f"User {user_id} is not authorized to {action} this {resource}",
            code="NOT_RESOURCE_OWNER",
            details={"user_id": user_id, "resource": resource},
        )


class EmailDeliveryError(ExternalServiceError):
    """Raised when the reset email could not be delivered."""

    def __init__(self):
        super().__init__(
            "Email could not be sent",
            service="email",
            code="EMAIL_NOT_SENT",
        )
