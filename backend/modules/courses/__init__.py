"""
Courses module.

Courses belong to a bootcamp. Every write recomputes the bootcamp's
average tuition.
"""

from .exceptions import CourseNotFoundError
from .models import (
    BootcampSummary,
    Course,
    CreateCourseRequest,
    Skill,
    UpdateCourseRequest,
)
from .repository import CourseRepository
from .service import CourseService, average_cost

__all__ = [
    "BootcampSummary",
    "Course",
    "CourseNotFoundError",
    "CourseRepository",
    "CourseService",
    "CreateCourseRequest",
    "Skill",
    "UpdateCourseRequest",
    "average_cost",
]
