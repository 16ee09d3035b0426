"""
Courses module exceptions.
"""

from shared.exceptions import NotFoundError


class CourseNotFoundError(NotFoundError):
    """Raised when a course is not found."""

    def __init__(self, course_id: str):
        super().__init__(
            f"No course with the id of {course_id}",
            code="COURSE_NOT_FOUND",
            details={"course_id": course_id},
        )
