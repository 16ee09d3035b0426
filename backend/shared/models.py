"""
Shared data models used across modules.

These models are shared infrastructure, not business logic: the base
class for stored documents and the response envelope every endpoint
returns. Module-specific models stay in their respective module
directories.
"""

from typing import Any, Generic, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base model for documents and payloads.

    Attributes are snake_case in Python and camelCase on the wire and in
    storage, so query strings address stored fields by their public names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PageRef(BaseModel):
    """A neighbouring page of a list result."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)


class Envelope(BaseModel, Generic[T]):
    """Success envelope for single-resource endpoints."""

    success: bool = True
    data: T


class CollectionEnvelope(BaseModel):
    """Success envelope for unpaginated collections."""

    success: bool = True
    count: int
    data: list[dict[str, Any]]


class ListEnvelope(CollectionEnvelope):
    """
    Success envelope for paginated list endpoints.

    `count` is the number of items in this page, not the total.
    `pagination` holds only the `next`/`prev` keys that exist.
    """

    pagination: dict[str, PageRef] = Field(default_factory=dict)


class TokenEnvelope(BaseModel):
    """Envelope returned by every flow that issues a session token."""

    success: bool = True
    token: str


class ErrorEnvelope(BaseModel):
    """Failure envelope produced by the error handlers."""

    success: bool = False
    error: str
