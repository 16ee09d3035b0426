"""
Course repository for database access.
"""

from typing import Any, Optional

from shared.collection import Document, to_object_id
from shared.repository import BaseRepository

from .models import Course


class CourseRepository(BaseRepository[Course]):
    """
    Repository for course data access.

    Note: This repository does NOT perform authorization checks.
    """

    async def get_document(self, course_id: str) -> Optional[Document]:
        return await self._collection.find_by_id(course_id)

    async def list_for_bootcamp(self, bootcamp_id: str) -> list[Document]:
        return await self._collection.find({"bootcamp": to_object_id(bootcamp_id)})

    async def tuitions(self, bootcamp_id: Any) -> list[float]:
        documents = await self._collection.find(
            {"bootcamp": to_object_id(bootcamp_id)},
            projection=["tuition"],
        )
        return [d["tuition"] for d in documents if d.get("tuition") is not None]

    async def create(self, fields: dict[str, Any], bootcamp_id: str) -> Course:
        document = await self._collection.insert(
            self._stamp({**fields, "bootcamp": to_object_id(bootcamp_id)})
        )
        return Course.from_document(document)

    async def update(self, course_id: str, fields: dict[str, Any]) -> Optional[Course]:
        document = await self._collection.update_by_id(course_id, fields)
        if document is None:
            return None
        return Course.from_document(document)

    async def delete(self, course_id: str) -> bool:
        return await self._collection.delete_by_id(course_id)
