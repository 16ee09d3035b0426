"""
Review repository for database access.
"""

from typing import Any, Optional

from shared.collection import Document, to_object_id
from shared.repository import BaseRepository

from .models import Review


class ReviewRepository(BaseRepository[Review]):
    """
    Repository for review data access.

    The (bootcamp, user) pair is unique; a second insert for the same
    pair raises DuplicateKeyError from the collection.
    """

    async def get_document(self, review_id: str) -> Optional[Document]:
        return await self._collection.find_by_id(review_id)

    async def list_for_bootcamp(self, bootcamp_id: str) -> list[Document]:
        return await self._collection.find({"bootcamp": to_object_id(bootcamp_id)})

    async def ratings(self, bootcamp_id: Any) -> list[float]:
        documents = await self._collection.find(
            {"bootcamp": to_object_id(bootcamp_id)},
            projection=["rating"],
        )
        return [d["rating"] for d in documents if d.get("rating") is not None]

    async def create(self, fields: dict[str, Any], bootcamp_id: str, user_id: str) -> Review:
        document = await self._collection.insert(
            self._stamp(
                {
                    **fields,
                    "bootcamp": to_object_id(bootcamp_id),
                    "user": to_object_id(user_id),
                }
            )
        )
        return Review.from_document(document)

    async def update(self, review_id: str, fields: dict[str, Any]) -> Optional[Review]:
        document = await self._collection.update_by_id(review_id, fields)
        if document is None:
            return None
        return Review.from_document(document)

    async def delete(self, review_id: str) -> bool:
        return await self._collection.delete_by_id(review_id)
