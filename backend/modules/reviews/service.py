"""
Reviews service implementation.
"""

import logging
from typing import Iterable, Optional

from shared.collection import serialize_document
from shared.models import CollectionEnvelope, ListEnvelope
from modules.auth.models import Account
from modules.auth.permissions import ensure_owner_or_admin
from modules.bootcamps.exceptions import BootcampNotFoundError
from modules.bootcamps.repository import BootcampRepository
from modules.query import QueryPlan, Relation, expand_relations, paginate

from .exceptions import ReviewNotFoundError
from .models import CreateReviewRequest, Review, UpdateReviewRequest
from .repository import ReviewRepository

logger = logging.getLogger(__name__)


def average_rating(ratings: Iterable[float]) -> Optional[float]:
    """Mean rating to one decimal place, or None."""
    values = list(ratings)
    if not values:
        return None
    return round(sum(values) / len(values), 1)


class ReviewService:
    """Review operations for the API layer."""

    def __init__(self, repository: ReviewRepository, bootcamps: BootcampRepository):
        self._repository = repository
        self._bootcamps = bootcamps

    def _bootcamp_relation(self) -> Relation:
        return Relation(
            "bootcamp",
            self._bootcamps.collection,
            local_field="bootcamp",
            select=("name", "description"),
        )

    async def _ensure_bootcamp(self, bootcamp_id: str) -> None:
        if await self._bootcamps.get_by_id(bootcamp_id) is None:
            raise BootcampNotFoundError(bootcamp_id)

    async def list_reviews(self, plan: QueryPlan) -> ListEnvelope:
        return await paginate(
            self._repository.collection,
            plan,
            relations=[self._bootcamp_relation()],
            reference_fields=("bootcamp", "user"),
        )

    async def list_bootcamp_reviews(self, bootcamp_id: str) -> CollectionEnvelope:
        await self._ensure_bootcamp(bootcamp_id)
        documents = await self._repository.list_for_bootcamp(bootcamp_id)
        return CollectionEnvelope(
            count=len(documents),
            data=[serialize_document(d) for d in documents],
        )

    async def get_review(self, review_id: str) -> Review:
        document = await self._repository.get_document(review_id)
        if document is None:
            raise ReviewNotFoundError(review_id)
        await expand_relations([document], [self._bootcamp_relation()])
        return Review.from_document(document)

    async def create_review(
        self,
        bootcamp_id: str,
        account: Account,
        request: CreateReviewRequest,
    ) -> Review:
        """
        Review a bootcamp as the caller.

        Raises:
            BootcampNotFoundError: Unknown bootcamp
            DuplicateKeyError: The caller already reviewed this bootcamp
        """
        await self._ensure_bootcamp(bootcamp_id)
        fields = request.model_dump(by_alias=True, exclude_none=True)
        review = await self._repository.create(fields, bootcamp_id=bootcamp_id, user_id=account.id)
        await self.recompute_average_rating(bootcamp_id)
        return review

    async def update_review(
        self,
        review_id: str,
        account: Account,
        request: UpdateReviewRequest,
    ) -> Review:
        review = await self.get_review(review_id)
        ensure_owner_or_admin(account, review.user, "update", "review")

        fields = request.model_dump(by_alias=True, exclude_none=True)
        updated = await self._repository.update(review_id, fields)
        if updated is None:
            raise ReviewNotFoundError(review_id)
        await self.recompute_average_rating(review.bootcamp_id)
        return updated

    async def delete_review(self, review_id: str, account: Account) -> None:
        review = await self.get_review(review_id)
        ensure_owner_or_admin(account, review.user, "delete", "review")

        await self._repository.delete(review_id)
        await self.recompute_average_rating(review.bootcamp_id)

    async def recompute_average_rating(self, bootcamp_id: str) -> Optional[float]:
        rating = average_rating(await self._repository.ratings(bootcamp_id))
        await self._bootcamps.set_aggregate(bootcamp_id, "averageRating", rating)
        logger.debug("Bootcamp %s averageRating -> %s", bootcamp_id, rating)
        return rating
