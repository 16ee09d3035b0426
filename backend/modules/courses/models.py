"""
Courses module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union
from pydantic import Field

from shared.collection import serialize_document
from shared.models import CamelModel


class Skill(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class BootcampSummary(CamelModel):
    """The slice of a bootcamp inlined into a course."""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None


class Course(CamelModel):
    id: str = Field(..., description="Course ID (ObjectId hex)")
    title: str
    description: str
    weeks: str
    tuition: float
    minimum_skill: Skill
    scholarship_available: bool = False
    created_at: Optional[datetime] = None
    bootcamp: Union[BootcampSummary, str] = Field(
        ..., description="Owning bootcamp, or its ID when not expanded"
    )

    @property
    def bootcamp_id(self) -> str:
        if isinstance(self.bootcamp, BootcampSummary):
            return self.bootcamp.id
        return self.bootcamp

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Course":
        return cls.model_validate(serialize_document(document))


class CreateCourseRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    weeks: str = Field(..., min_length=1)
    tuition: float = Field(..., ge=0)
    minimum_skill: Skill
    scholarship_available: bool = False


class UpdateCourseRequest(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    weeks: Optional[str] = Field(None, min_length=1)
    tuition: Optional[float] = Field(None, ge=0)
    minimum_skill: Optional[Skill] = None
    scholarship_available: Optional[bool] = None
