"""
Account repository.

Implements ICredentialStore on the `users` collection.
"""

from datetime import datetime
from typing import Any, Iterable, Optional

from shared.collection import Document, to_object_id
from shared.repository import BaseRepository

from .interfaces import ICredentialStore
from .models import Account, Role
from .passwords import verify_password_async


# Account attribute -> stored field
STORAGE_FIELDS = {
    "name": "name",
    "email": "email",
    "role": "role",
    "password_hash": "password",
    "reset_password_token": "resetPasswordToken",
    "reset_password_expire": "resetPasswordExpire",
}

SECRET_FIELDS = ("password", "resetPasswordToken", "resetPasswordExpire")


def normalize_email(email: str) -> str:
    """Stored and looked-up form of an email address."""
    return email.strip().lower()


def _storage_value(name: str, value: Any) -> Any:
    if name == "email" and isinstance(value, str):
        return normalize_email(value)
    return value.value if isinstance(value, Role) else value


class UserRepository(BaseRepository[Account], ICredentialStore):
    """
    Repository for account data access.

    Secret fields are stripped from loaded accounts unless the caller
    asks for the password hash.
    """

    def _to_account(
        self,
        document: Optional[Document],
        include_password: bool = False,
    ) -> Optional[Account]:
        if document is None:
            return None
        if not include_password:
            document = {k: v for k, v in document.items() if k not in SECRET_FIELDS}
        return Account.from_document(document)

    async def find_by_email(
        self,
        email: str,
        include_password: bool = False,
    ) -> Optional[Account]:
        document = await self._collection.find_one({"email": normalize_email(email)})
        return self._to_account(document, include_password)

    async def find_by_id(
        self,
        account_id: str,
        include_password: bool = False,
    ) -> Optional[Account]:
        document = await self._collection.find_by_id(account_id)
        return self._to_account(document, include_password)

    async def find_by_reset_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> Optional[Account]:
        document = await self._collection.find_one(
            {
                "resetPasswordToken": token_hash,
                "resetPasswordExpire": {"$gt": now},
            }
        )
        return self._to_account(document, include_password=True)

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> Account:
        document = await self._collection.insert(
            self._stamp(
                {
                    "name": name,
                    "email": normalize_email(email),
                    "role": role.value,
                    "password": password_hash,
                }
            )
        )
        return self._to_account(document)

    async def update_fields(
        self,
        account_id: str,
        fields: dict[str, Any],
        unset: Iterable[str] = (),
    ) -> Optional[Account]:
        document = await self._collection.update_by_id(
            account_id,
            {STORAGE_FIELDS[name]: _storage_value(name, value) for name, value in fields.items()},
            unset=[STORAGE_FIELDS[name] for name in unset],
        )
        return self._to_account(document)

    async def delete(self, account_id: str) -> bool:
        return await self._collection.delete_by_id(to_object_id(account_id))

    async def compare_password(self, password: str, password_hash: str) -> bool:
        return await verify_password_async(password, password_hash)
