"""
Reviews module.

One review per user per bootcamp. Every write recomputes the bootcamp's
average rating.
"""

from .exceptions import ReviewNotFoundError
from .models import CreateReviewRequest, Review, UpdateReviewRequest
from .repository import ReviewRepository
from .service import ReviewService, average_rating

__all__ = [
    "CreateReviewRequest",
    "Review",
    "ReviewNotFoundError",
    "ReviewRepository",
    "ReviewService",
    "UpdateReviewRequest",
    "average_rating",
]
