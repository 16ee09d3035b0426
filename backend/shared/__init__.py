"""
Shared infrastructure for the DevCamper backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- collection: Document collection contract and its MongoDB implementation
- database: MongoDB client factory
- exceptions: Base exception classes
- models: Response envelopes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .collection import IDocumentCollection, MongoCollection, serialize_document, to_object_id
from .database import get_collection, reset_client_cache
from .exceptions import (
    DevCamperError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    MalformedIdError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ServerError,
    ExternalServiceError,
)
from .models import Envelope, ListEnvelope, ErrorEnvelope

__all__ = [
    "Settings",
    "get_settings",
    "IDocumentCollection",
    "MongoCollection",
    "serialize_document",
    "to_object_id",
    "get_collection",
    "reset_client_cache",
    "DevCamperError",
    "BadRequestError",
    "ConflictError",
    "NotFoundError",
    "MalformedIdError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ServerError",
    "ExternalServiceError",
    "Envelope",
    "ListEnvelope",
    "ErrorEnvelope",
]
