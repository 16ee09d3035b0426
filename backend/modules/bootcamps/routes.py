"""
Bootcamp API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_bootcamp_service, get_query_plan
from api.middleware.auth import authorize
from shared.models import Envelope, ListEnvelope
from modules.auth.models import Account, Role
from modules.query import QueryPlan

from .models import Bootcamp, CreateBootcampRequest, UpdateBootcampRequest
from .service import BootcampService

router = APIRouter(prefix="/bootcamps")

publisher_or_admin = authorize(Role.PUBLISHER, Role.ADMIN)


@router.get("", response_model=ListEnvelope)
async def list_bootcamps(
    plan: QueryPlan = Depends(get_query_plan),
    service: BootcampService = Depends(get_bootcamp_service),
) -> ListEnvelope:
    """
    List bootcamps with their courses inlined.

    Examples:
        /bootcamps?averageCost[lte]=10000&select=name,averageCost&sort=-averageCost
        /bootcamps?careers[in]=Business,UI/UX&page=2&limit=5
    """
    return await service.list_bootcamps(plan)


@router.get("/{bootcamp_id}", response_model=Envelope[Bootcamp])
async def get_bootcamp(
    bootcamp_id: str,
    service: BootcampService = Depends(get_bootcamp_service),
) -> Envelope[Bootcamp]:
    return Envelope(data=await service.get_bootcamp(bootcamp_id))


@router.post("", response_model=Envelope[Bootcamp], status_code=201)
async def create_bootcamp(
    request: CreateBootcampRequest,
    user: Account = Depends(publisher_or_admin),
    service: BootcampService = Depends(get_bootcamp_service),
) -> Envelope[Bootcamp]:
    return Envelope(data=await service.create_bootcamp(user, request))


@router.put("/{bootcamp_id}", response_model=Envelope[Bootcamp])
async def update_bootcamp(
    bootcamp_id: str,
    request: UpdateBootcampRequest,
    user: Account = Depends(publisher_or_admin),
    service: BootcampService = Depends(get_bootcamp_service),
) -> Envelope[Bootcamp]:
    return Envelope(data=await service.update_bootcamp(bootcamp_id, user, request))


@router.delete("/{bootcamp_id}", response_model=Envelope[dict])
async def delete_bootcamp(
    bootcamp_id: str,
    user: Account = Depends(publisher_or_admin),
    service: BootcampService = Depends(get_bootcamp_service),
) -> Envelope[dict]:
    """Delete a bootcamp together with its courses and reviews."""
    await service.delete_bootcamp(bootcamp_id, user)
    return Envelope(data={})
