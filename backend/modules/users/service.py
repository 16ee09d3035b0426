"""
User administration service.
"""

import logging

from shared.models import ListEnvelope
from modules.auth.exceptions import AccountNotFoundError
from modules.auth.models import Account
from modules.auth.passwords import DEFAULT_ROUNDS, hash_password_async
from modules.auth.repository import SECRET_FIELDS, UserRepository
from modules.query import QueryPlan, paginate

from .models import CreateUserRequest, UpdateUserRequest

logger = logging.getLogger(__name__)


class UserAdminService:
    """Account CRUD for administrators."""

    def __init__(self, repository: UserRepository, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self._repository = repository
        self._bcrypt_rounds = bcrypt_rounds

    async def list_users(self, plan: QueryPlan) -> ListEnvelope:
        return await paginate(self._repository.collection, plan, hidden=SECRET_FIELDS)

    async def get_user(self, user_id: str) -> Account:
        account = await self._repository.find_by_id(user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return account

    async def create_user(self, request: CreateUserRequest) -> Account:
        account = await self._repository.create(
            name=request.name,
            email=request.email,
            password_hash=await hash_password_async(request.password, self._bcrypt_rounds),
            role=request.role,
        )
        logger.info("Admin created account %s with role %s", account.id, account.role.value)
        return account

    async def update_user(self, user_id: str, request: UpdateUserRequest) -> Account:
        """
        Update an account.

        A new password is hashed before it is stored.
        """
        fields = request.model_dump(include={"name", "email", "role"}, exclude_none=True)
        if request.password is not None:
            fields["password_hash"] = await hash_password_async(
                request.password, self._bcrypt_rounds
            )

        account = await self._repository.update_fields(user_id, fields)
        if account is None:
            raise AccountNotFoundError(user_id)
        return account

    async def delete_user(self, user_id: str) -> None:
        if not await self._repository.delete(user_id):
            raise AccountNotFoundError(user_id)
        logger.info("Admin deleted account %s", user_id)
