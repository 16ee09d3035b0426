"""
Bootcamps module exceptions.
"""

from shared.exceptions import BadRequestError, NotFoundError


class BootcampNotFoundError(NotFoundError):
    """Raised when a bootcamp is not found."""

    def __init__(self, bootcamp_id: str):
        super().__init__(
            f"Bootcamp not found with id of {bootcamp_id}",
            code="BOOTCAMP_NOT_FOUND",
            details={"bootcamp_id": bootcamp_id},
        )


class BootcampAlreadyPublishedError(BadRequestError):
    """Raised when a publisher tries to add a second bootcamp."""

    def __init__(self, user_id: str):
        super().__init__(
            f"The user with ID {user_id} has already published a bootcamp",
            code="BOOTCAMP_ALREADY_PUBLISHED",
            details={"user_id": user_id},
        )
