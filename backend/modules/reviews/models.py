"""
Reviews module data models.
"""

from datetime import datetime
from typing import Any, Optional, Union
from pydantic import Field

from shared.collection import serialize_document
from shared.models import CamelModel
from modules.courses.models import BootcampSummary


RATING_MIN = 1
RATING_MAX = 10


class Review(CamelModel):
    id: str = Field(..., description="Review ID (ObjectId hex)")
    title: str
    text: str
    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)
    created_at: Optional[datetime] = None
    bootcamp: Union[BootcampSummary, str]
    user: str = Field(..., description="Author account ID")

    @property
    def bootcamp_id(self) -> str:
        if isinstance(self.bootcamp, BootcampSummary):
            return self.bootcamp.id
        return self.bootcamp

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Review":
        return cls.model_validate(serialize_document(document))


class CreateReviewRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    text: str = Field(..., min_length=1)
    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX)


class UpdateReviewRequest(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    text: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=RATING_MIN, le=RATING_MAX)
