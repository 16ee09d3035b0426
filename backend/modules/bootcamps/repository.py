"""
Bootcamp repository for database access.
"""

from typing import Any, Optional

from shared.collection import to_object_id
from shared.repository import BaseRepository

from .models import Bootcamp, DEFAULT_PHOTO, slugify


class BootcampRepository(BaseRepository[Bootcamp]):
    """
    Repository for bootcamp data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    async def get_by_id(self, bootcamp_id: str) -> Optional[Bootcamp]:
        document = await self._collection.find_by_id(bootcamp_id)
        if document is None:
            return None
        return Bootcamp.from_document(document)

    async def find_by_owner(self, user_id: str) -> Optional[Bootcamp]:
        document = await self._collection.find_one({"user": to_object_id(user_id)})
        if document is None:
            return None
        return Bootcamp.from_document(document)

    async def create(self, fields: dict[str, Any], owner_id: str) -> Bootcamp:
        """
        Create a new bootcamp record.

        Args:
            fields: Stored field names -> values
            owner_id: Account that publishes the bootcamp

        Returns:
            Created Bootcamp with generated ID, slug and timestamp.
        """
        document = await self._collection.insert(
            self._stamp(
                {
                    **fields,
                    "slug": slugify(fields["name"]),
                    "photo": DEFAULT_PHOTO,
                    "user": to_object_id(owner_id),
                }
            )
        )
        return Bootcamp.from_document(document)

    async def update(self, bootcamp_id: str, fields: dict[str, Any]) -> Optional[Bootcamp]:
        if "name" in fields:
            fields = {**fields, "slug": slugify(fields["name"])}
        document = await self._collection.update_by_id(bootcamp_id, fields)
        if document is None:
            return None
        return Bootcamp.from_document(document)

    async def set_aggregate(self, bootcamp_id: Any, field: str, value: Optional[float]) -> None:
        """Store a derived value, or clear it when there is nothing to derive from."""
        if value is None:
            await self._collection.update_by_id(bootcamp_id, {}, unset=[field])
        else:
            await self._collection.update_by_id(bootcamp_id, {field: value})

    async def delete(self, bootcamp_id: str) -> bool:
        return await self._collection.delete_by_id(bootcamp_id)
