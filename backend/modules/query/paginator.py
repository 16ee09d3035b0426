"""
Result pagination.

Executes a QueryPlan against a document collection, expands related
documents and assembles the list envelope with `next`/`prev` links.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from shared.collection import Document, IDocumentCollection, serialize_document
from shared.models import ListEnvelope, PageRef

from .models import QueryPlan


@dataclass(frozen=True)
class Relation:
    """
    A related collection to inline into each listed document.

    Forward reference (a course's bootcamp):
        Relation("bootcamp", bootcamps, local_field="bootcamp", foreign_field="_id")

    Reverse reference (a bootcamp's courses):
        Relation("courses", courses, local_field="_id", foreign_field="bootcamp", many=True)
    """

    name: str
    collection: IDocumentCollection
    local_field: str
    foreign_field: str = "_id"
    many: bool = False
    select: Optional[tuple[str, ...]] = None


def build_pagination(page: int, limit: int, total: int) -> dict[str, PageRef]:
    """
    Compute the neighbouring pages of a result.

    `next` exists iff page * limit < total; `prev` exists iff
    (page - 1) * limit > 0.
    """
    start_index = (page - 1) * limit
    end_index = page * limit

    pagination: dict[str, PageRef] = {}
    if end_index < total:
        pagination["next"] = PageRef(page=page + 1, limit=limit)
    if start_index > 0:
        pagination["prev"] = PageRef(page=page - 1, limit=limit)
    return pagination


async def expand_relations(
    documents: list[Document],
    relations: Iterable[Relation],
) -> None:
    """Inline related documents in place, one query per relation."""
    for relation in relations:
        keys = {
            document[relation.local_field]
            for document in documents
            if document.get(relation.local_field) is not None
        }

        related: list[Document] = []
        if keys:
            projection = None
            if relation.select:
                projection = list(relation.select)
                if relation.foreign_field not in projection and relation.foreign_field != "_id":
                    projection.append(relation.foreign_field)
            related = await relation.collection.find(
                {relation.foreign_field: {"$in": list(keys)}},
                projection=projection,
            )

        if relation.many:
            grouped: dict[Any, list[Document]] = {}
            for item in related:
                grouped.setdefault(item.get(relation.foreign_field), []).append(item)
            for document in documents:
                document[relation.name] = grouped.get(document.get(relation.local_field), [])
        else:
            indexed = {item.get(relation.foreign_field): item for item in related}
            for document in documents:
                if relation.local_field in document:
                    document[relation.name] = indexed.get(document[relation.local_field])


async def paginate(
    collection: IDocumentCollection,
    plan: QueryPlan,
    relations: Sequence[Relation] = (),
    reference_fields: Iterable[str] = (),
    hidden: Iterable[str] = (),
) -> ListEnvelope:
    """
    Run a list query and wrap the page in the list envelope.

    Args:
        collection: Collection to query
        plan: Translated list query
        relations: Related documents to inline
        reference_fields: Fields holding ObjectId references, filterable by id
        hidden: Fields stripped from every returned document

    Returns:
        ListEnvelope whose `count` is the size of this page
    """
    storage_filter = plan.to_storage_filter(reference_fields)

    total = await collection.count(storage_filter)
    documents = await collection.find(
        storage_filter,
        projection=list(plan.projection) if plan.projection else None,
        sort=plan.to_storage_sort(),
        skip=plan.start_index,
        limit=plan.limit,
    )

    await expand_relations(documents, relations)
    data = [serialize_document(document, hidden) for document in documents]

    return ListEnvelope(
        count=len(data),
        pagination=build_pagination(plan.page, plan.limit, total),
        data=data,
    )
