"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings
from shared import database

from ..dependencies import get_app_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(settings: Settings = Depends(get_app_settings)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Pings MongoDB when a connection string is configured.
    """
    if not settings.mongo_uri:
        return ReadinessResponse(status="not_ready", database="unconfigured")
    if await database.ping():
        return ReadinessResponse(status="ready", database="connected")
    return ReadinessResponse(status="not_ready", database="unreachable")
