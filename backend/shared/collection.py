"""
Document collection contract and its MongoDB implementation.

Services and repositories depend on IDocumentCollection only. The
MongoDB-backed implementation wraps an async pymongo collection; tests
substitute an in-memory one.
"""

from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from .exceptions import MalformedIdError


Document = dict[str, Any]
SortSpec = list[tuple[str, int]]


def to_object_id(value: Any) -> ObjectId:
    """
    Parse a document identifier.

    Raises:
        MalformedIdError: If the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        raise MalformedIdError(value)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise MalformedIdError(value)


def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [serialize_value(v) for v in value]
    if isinstance(value, dict):
        return serialize_document(value)
    return value


def serialize_document(
    document: Document,
    hidden: Iterable[str] = (),
) -> Document:
    """
    Convert a stored document into its JSON-ready form.

    `_id` becomes `id`, ObjectIds become hex strings and hidden fields
    are dropped.
    """
    hidden = set(hidden)
    result: Document = {}
    for key, value in document.items():
        if key in hidden:
            continue
        if key == "_id":
            result["id"] = str(value)
            continue
        result[key] = serialize_value(value)
    return result


@runtime_checkable
class IDocumentCollection(Protocol):
    """
    Interface for a single document collection.

    All identifiers are ObjectIds or their hex string form.
    """

    async def count(self, filter: Document) -> int:
        """Count documents matching the filter."""
        ...

    async def find(
        self,
        filter: Document,
        projection: Optional[list[str]] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        """
        Fetch documents matching the filter.

        Args:
            filter: Storage filter
            projection: Inclusion list of fields (`_id` is always returned)
            sort: Ordered (field, direction) pairs, direction 1 or -1
            skip: Number of matching documents to skip
            limit: Maximum number of documents (0 means unbounded)
        """
        ...

    async def find_one(
        self,
        filter: Document,
        projection: Optional[list[str]] = None,
    ) -> Optional[Document]:
        ...

    async def find_by_id(self, document_id: Any) -> Optional[Document]:
        ...

    async def insert(self, document: Document) -> Document:
        """Insert a document and return it with its generated `_id`."""
        ...

    async def update_by_id(
        self,
        document_id: Any,
        fields: Document,
        unset: Iterable[str] = (),
    ) -> Optional[Document]:
        """Set and unset fields on one document, returning the updated version."""
        ...

    async def delete_by_id(self, document_id: Any) -> bool:
        ...

    async def delete_many(self, filter: Document) -> int:
        ...


class MongoCollection(IDocumentCollection):
    """IDocumentCollection over an async pymongo collection."""

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def count(self, filter: Document) -> int:
        return await self._collection.count_documents(filter)

    async def find(
        self,
        filter: Document,
        projection: Optional[list[str]] = None,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        cursor = self._collection.find(filter, _projection(projection))
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list()

    async def find_one(
        self,
        filter: Document,
        projection: Optional[list[str]] = None,
    ) -> Optional[Document]:
        return await self._collection.find_one(filter, _projection(projection))

    async def find_by_id(self, document_id: Any) -> Optional[Document]:
        return await self._collection.find_one({"_id": to_object_id(document_id)})

    async def insert(self, document: Document) -> Document:
        document = dict(document)
        result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def update_by_id(
        self,
        document_id: Any,
        fields: Document,
        unset: Iterable[str] = (),
    ) -> Optional[Document]:
        object_id = to_object_id(document_id)
        update: Document = {}
        if fields:
            update["$set"] = fields
        unset = list(unset)
        if unset:
            update["$unset"] = {field: "" for field in unset}
        if not update:
            return await self._collection.find_one({"_id": object_id})

        return await self._collection.find_one_and_update(
            {"_id": object_id},
            update,
            return_document=ReturnDocument.AFTER,
        )

    async def delete_by_id(self, document_id: Any) -> bool:
        result = await self._collection.delete_one({"_id": to_object_id(document_id)})
        return result.deleted_count > 0

    async def delete_many(self, filter: Document) -> int:
        result = await self._collection.delete_many(filter)
        return result.deleted_count


def _projection(fields: Optional[list[str]]) -> Optional[Document]:
    if not fields:
        return None
    return {field: 1 for field in fields}
