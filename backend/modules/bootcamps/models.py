"""
Bootcamps module data models.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import EmailStr, Field, HttpUrl

from shared.collection import serialize_document
from shared.models import CamelModel


DEFAULT_PHOTO = "no-photo.jpg"


class Career(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    UI_UX = "UI/UX"
    DATA_SCIENCE = "Data Science"
    BUSINESS = "Business"
    OTHER = "Other"


def slugify(name: str) -> str:
    """`Devworks Bootcamp` -> `devworks-bootcamp`"""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class Bootcamp(CamelModel):
    """A training program listed in the directory."""

    id: str = Field(..., description="Bootcamp ID (ObjectId hex)")
    name: str
    slug: str
    description: str
    website: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    careers: list[Career] = Field(default_factory=list)
    average_rating: Optional[float] = Field(None, description="Mean review rating")
    average_cost: Optional[float] = Field(None, description="Mean course tuition")
    photo: str = DEFAULT_PHOTO
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
    created_at: Optional[datetime] = None
    user: Optional[str] = Field(None, description="Owner account ID")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Bootcamp":
        return cls.model_validate(serialize_document(document))


class CreateBootcampRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    website: Optional[HttpUrl] = None
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    careers: list[Career] = Field(..., min_length=1)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class UpdateBootcampRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    website: Optional[HttpUrl] = None
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    careers: Optional[list[Career]] = Field(None, min_length=1)
    housing: Optional[bool] = None
    job_assistance: Optional[bool] = None
    job_guarantee: Optional[bool] = None
    accept_gi: Optional[bool] = None
