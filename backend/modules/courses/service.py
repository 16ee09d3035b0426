"""
Courses service implementation.
"""

import logging
import math
from typing import Iterable, Optional

from shared.collection import serialize_document
from shared.models import CollectionEnvelope, ListEnvelope
from modules.auth.models import Account
from modules.auth.permissions import ensure_owner_or_admin
from modules.bootcamps.exceptions import BootcampNotFoundError
from modules.bootcamps.models import Bootcamp
from modules.bootcamps.repository import BootcampRepository
from modules.query import QueryPlan, Relation, expand_relations, paginate

from .exceptions import CourseNotFoundError
from .models import Course, CreateCourseRequest, UpdateCourseRequest
from .repository import CourseRepository

logger = logging.getLogger(__name__)


def average_cost(tuitions: Iterable[float]) -> Optional[int]:
    """Mean tuition rounded up to the next multiple of ten, or None."""
    values = list(tuitions)
    if not values:
        return None
    return int(math.ceil(sum(values) / len(values) / 10) * 10)


class CourseService:
    """Course operations for the API layer."""

    def __init__(self, repository: CourseRepository, bootcamps: BootcampRepository):
        self._repository = repository
        self._bootcamps = bootcamps

    def _bootcamp_relation(self) -> Relation:
        return Relation(
            "bootcamp",
            self._bootcamps.collection,
            local_field="bootcamp",
            select=("name", "description"),
        )

    async def _get_bootcamp(self, bootcamp_id: str) -> Bootcamp:
        bootcamp = await self._bootcamps.get_by_id(bootcamp_id)
        if bootcamp is None:
            raise BootcampNotFoundError(bootcamp_id)
        return bootcamp

    async def list_courses(self, plan: QueryPlan) -> ListEnvelope:
        return await paginate(
            self._repository.collection,
            plan,
            relations=[self._bootcamp_relation()],
            reference_fields=("bootcamp",),
        )

    async def list_bootcamp_courses(self, bootcamp_id: str) -> CollectionEnvelope:
        """All courses of one bootcamp, unpaginated."""
        await self._get_bootcamp(bootcamp_id)
        documents = await self._repository.list_for_bootcamp(bootcamp_id)
        return CollectionEnvelope(
            count=len(documents),
            data=[serialize_document(d) for d in documents],
        )

    async def get_course(self, course_id: str) -> Course:
        document = await self._repository.get_document(course_id)
        if document is None:
            raise CourseNotFoundError(course_id)
        await expand_relations([document], [self._bootcamp_relation()])
        return Course.from_document(document)

    async def create_course(
        self,
        bootcamp_id: str,
        account: Account,
        request: CreateCourseRequest,
    ) -> Course:
        bootcamp = await self._get_bootcamp(bootcamp_id)
        ensure_owner_or_admin(account, bootcamp.user, "add a course to", "bootcamp")

        fields = request.model_dump(by_alias=True, exclude_none=True, mode="json")
        course = await self._repository.create(fields, bootcamp_id=bootcamp_id)
        await self.recompute_average_cost(bootcamp_id)
        return course

    async def update_course(
        self,
        course_id: str,
        account: Account,
        request: UpdateCourseRequest,
    ) -> Course:
        course = await self.get_course(course_id)
        bootcamp = await self._get_bootcamp(course.bootcamp_id)
        ensure_owner_or_admin(account, bootcamp.user, "update", "course")

        fields = request.model_dump(by_alias=True, exclude_none=True, mode="json")
        updated = await self._repository.update(course_id, fields)
        if updated is None:
            raise CourseNotFoundError(course_id)
        await self.recompute_average_cost(course.bootcamp_id)
        return updated

    async def delete_course(self, course_id: str, account: Account) -> None:
        course = await self.get_course(course_id)
        bootcamp = await self._get_bootcamp(course.bootcamp_id)
        ensure_owner_or_admin(account, bootcamp.user, "delete", "course")

        await self._repository.delete(course_id)
        await self.recompute_average_cost(course.bootcamp_id)

    async def recompute_average_cost(self, bootcamp_id: str) -> Optional[int]:
        cost = average_cost(await self._repository.tuitions(bootcamp_id))
        await self._bootcamps.set_aggregate(bootcamp_id, "averageCost", cost)
        logger.debug("Bootcamp %s averageCost -> %s", bootcamp_id, cost)
        return cost
