"""
Bootcamps service implementation.

CRUD over the bootcamp collection. Deleting a bootcamp removes its
courses and reviews in the same call.
"""

import logging

from shared.collection import IDocumentCollection, to_object_id
from shared.models import ListEnvelope
from modules.auth.models import Account, Role
from modules.auth.permissions import ensure_owner_or_admin
from modules.query import QueryPlan, Relation, paginate

from .exceptions import BootcampAlreadyPublishedError, BootcampNotFoundError
from .models import Bootcamp, CreateBootcampRequest, UpdateBootcampRequest
from .repository import BootcampRepository

logger = logging.getLogger(__name__)


class BootcampService:
    """Bootcamp operations for the API layer."""

    def __init__(
        self,
        repository: BootcampRepository,
        courses: IDocumentCollection,
        reviews: IDocumentCollection,
    ):
        self._repository = repository
        self._courses = courses
        self._reviews = reviews

    async def list_bootcamps(self, plan: QueryPlan) -> ListEnvelope:
        """List bootcamps with their courses inlined."""
        return await paginate(
            self._repository.collection,
            plan,
            relations=[
                Relation(
                    "courses",
                    self._courses,
                    local_field="_id",
                    foreign_field="bootcamp",
                    many=True,
                )
            ],
            reference_fields=("user",),
        )

    async def get_bootcamp(self, bootcamp_id: str) -> Bootcamp:
        bootcamp = await self._repository.get_by_id(bootcamp_id)
        if bootcamp is None:
            raise BootcampNotFoundError(bootcamp_id)
        return bootcamp

    async def create_bootcamp(
        self,
        account: Account,
        request: CreateBootcampRequest,
    ) -> Bootcamp:
        """
        Publish a bootcamp owned by the caller.

        Publishers may own a single bootcamp; admins are not limited.
        """
        if account.role is not Role.ADMIN:
            if await self._repository.find_by_owner(account.id) is not None:
                raise BootcampAlreadyPublishedError(account.id)

        fields = request.model_dump(by_alias=True, exclude_none=True, mode="json")
        bootcamp = await self._repository.create(fields, owner_id=account.id)
        logger.info("Bootcamp %s created by %s", bootcamp.id, account.id)
        return bootcamp

    async def update_bootcamp(
        self,
        bootcamp_id: str,
        account: Account,
        request: UpdateBootcampRequest,
    ) -> Bootcamp:
        bootcamp = await self.get_bootcamp(bootcamp_id)
        ensure_owner_or_admin(account, bootcamp.user, "update", "bootcamp")

        fields = request.model_dump(by_alias=True, exclude_none=True, mode="json")
        updated = await self._repository.update(bootcamp_id, fields)
        if updated is None:
            raise BootcampNotFoundError(bootcamp_id)
        return updated

    async def delete_bootcamp(self, bootcamp_id: str, account: Account) -> None:
        bootcamp = await self.get_bootcamp(bootcamp_id)
        ensure_owner_or_admin(account, bootcamp.user, "delete", "bootcamp")

        object_id = to_object_id(bootcamp_id)
        courses = await self._courses.delete_many({"bootcamp": object_id})
        reviews = await self._reviews.delete_many({"bootcamp": object_id})
        await self._repository.delete(bootcamp_id)
        logger.info(
            "Bootcamp %s deleted with %d courses and %d reviews",
            bootcamp_id,
            courses,
            reviews,
        )
