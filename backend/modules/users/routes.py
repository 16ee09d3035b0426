"""
User administration endpoints.

Every route requires an authenticated admin.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_query_plan, get_user_admin_service
from api.middleware.auth import authorize
from shared.models import Envelope, ListEnvelope
from modules.auth.models import Account, Role
from modules.query import QueryPlan

from .models import CreateUserRequest, UpdateUserRequest
from .service import UserAdminService

router = APIRouter(dependencies=[Depends(authorize(Role.ADMIN))])


@router.get("", response_model=ListEnvelope)
async def list_users(
    plan: QueryPlan = Depends(get_query_plan),
    service: UserAdminService = Depends(get_user_admin_service),
) -> ListEnvelope:
    return await service.list_users(plan)


@router.get("/{user_id}", response_model=Envelope[Account])
async def get_user(
    user_id: str,
    service: UserAdminService = Depends(get_user_admin_service),
) -> Envelope[Account]:
    return Envelope(data=await service.get_user(user_id))


@router.post("", response_model=Envelope[Account], status_code=201)
async def create_user(
    request: CreateUserRequest,
    service: UserAdminService = Depends(get_user_admin_service),
) -> Envelope[Account]:
    return Envelope(data=await service.create_user(request))


@router.put("/{user_id}", response_model=Envelope[Account])
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: UserAdminService = Depends(get_user_admin_service),
) -> Envelope[Account]:
    return Envelope(data=await service.update_user(user_id, request))


@router.delete("/{user_id}", response_model=Envelope[dict])
async def delete_user(
    user_id: str,
    service: UserAdminService = Depends(get_user_admin_service),
) -> Envelope[dict]:
    await service.delete_user(user_id)
    return Envelope(data={})
