"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
collection access and providing shared utilities for data operations.
"""

from datetime import datetime, timezone
from typing import Any, Callable, TypeVar, Generic

from .collection import IDocumentCollection


T = TypeVar("T")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Collection access via self._collection
    - An injectable clock via self._now for timestamps
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle document-to-Pydantic model mapping internally.

    Example:
        class BootcampRepository(BaseRepository[Bootcamp]):
            async def get_by_id(self, bootcamp_id: str) -> Optional[Bootcamp]:
                document = await self._collection.find_by_id(bootcamp_id)
                if document is None:
                    return None
                return Bootcamp.from_document(document)
    """

    def __init__(self, collection: IDocumentCollection, clock: Clock = utcnow) -> None:
        """
        Initialize the repository with a document collection.

        Args:
            collection: Collection holding this repository's documents.
            clock: Source of the current time for timestamps.
        """
        self._collection = collection
        self._now = clock

    @property
    def collection(self) -> IDocumentCollection:
        return self._collection

    def _stamp(self, document: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of the document with its creation time set."""
        return {**document, "createdAt": self._now()}
