"""
Bootcamps module.

The directory's primary resource. A bootcamp owns its courses and
reviews and carries their derived averages.
"""

from .exceptions import BootcampAlreadyPublishedError, BootcampNotFoundError
from .models import (
    Bootcamp,
    Career,
    CreateBootcampRequest,
    UpdateBootcampRequest,
    slugify,
)
from .repository import BootcampRepository
from .service import BootcampService

__all__ = [
    "Bootcamp",
    "BootcampAlreadyPublishedError",
    "BootcampNotFoundError",
    "BootcampRepository",
    "BootcampService",
    "Career",
    "CreateBootcampRequest",
    "UpdateBootcampRequest",
    "slugify",
]
