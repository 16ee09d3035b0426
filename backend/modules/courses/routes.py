"""
Course API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_course_service, get_query_plan
from api.middleware.auth import authorize
from shared.models import CollectionEnvelope, Envelope, ListEnvelope
from modules.auth.models import Account, Role
from modules.query import QueryPlan

from .models import Course, CreateCourseRequest, UpdateCourseRequest
from .service import CourseService

router = APIRouter()

publisher_or_admin = authorize(Role.PUBLISHER, Role.ADMIN)


@router.get("/courses", response_model=ListEnvelope)
async def list_courses(
    plan: QueryPlan = Depends(get_query_plan),
    service: CourseService = Depends(get_course_service),
) -> ListEnvelope:
    """
    List courses with their bootcamp's name and description inlined.

    Accepts the usual filter, select, sort, page and limit parameters.
    """
    return await service.list_courses(plan)


@router.get("/bootcamps/{bootcamp_id}/courses", response_model=CollectionEnvelope)
async def list_bootcamp_courses(
    bootcamp_id: str,
    service: CourseService = Depends(get_course_service),
) -> CollectionEnvelope:
    return await service.list_bootcamp_courses(bootcamp_id)


@router.get("/courses/{course_id}", response_model=Envelope[Course])
async def get_course(
    course_id: str,
    service: CourseService = Depends(get_course_service),
) -> Envelope[Course]:
    return Envelope(data=await service.get_course(course_id))


@router.post("/bootcamps/{bootcamp_id}/courses", response_model=Envelope[Course])
async def create_course(
    bootcamp_id: str,
    request: CreateCourseRequest,
    user: Account = Depends(publisher_or_admin),
    service: CourseService = Depends(get_course_service),
) -> Envelope[Course]:
    """
    Add a course to a bootcamp.

    Only the bootcamp's owner or an admin may add courses.
    """
    return Envelope(data=await service.create_course(bootcamp_id, user, request))


@router.put("/courses/{course_id}", response_model=Envelope[Course])
async def update_course(
    course_id: str,
    request: UpdateCourseRequest,
    user: Account = Depends(publisher_or_admin),
    service: CourseService = Depends(get_course_service),
) -> Envelope[Course]:
    return Envelope(data=await service.update_course(course_id, user, request))


@router.delete("/courses/{course_id}", response_model=Envelope[dict])
async def delete_course(
    course_id: str,
    user: Account = Depends(publisher_or_admin),
    service: CourseService = Depends(get_course_service),
) -> Envelope[dict]:
    await service.delete_course(course_id, user)
    return Envelope(data={})
