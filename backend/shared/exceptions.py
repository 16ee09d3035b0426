"""
Base exception classes for the DevCamper backend.

Each module should define its own exceptions that inherit from these bases.
Every class carries the HTTP status it maps to, so the error handlers can
render any of them without knowing the concrete type.
"""

from typing import Optional, Any


class DevCamperError(Exception):
    """
    Base exception for all DevCamper errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class BadRequestError(DevCamperError):
    """Malformed or missing input."""

    status_code = 400


class ValidationError(BadRequestError):
    """Input validation failed."""

    pass


class ConflictError(BadRequestError):
    """A unique field already holds the submitted value."""

    def __init__(
        self,
        message: str = "Duplicate field value entered",
        code: Optional[str] = "DUPLICATE_FIELD",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class AuthenticationError(DevCamperError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(DevCamperError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(DevCamperError):
    """Resource not found."""

    status_code = 404


class MalformedIdError(NotFoundError):
    """An identifier could not be parsed, so nothing can match it."""

    def __init__(self, value: Any):
        super().__init__(
            f"Resource not found with id of {value}",
            code="MALFORMED_ID",
            details={"id": str(value)},
        )


class ServerError(DevCamperError):
    """Unexpected failure."""

    status_code = 500


class ExternalServiceError(ServerError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
