"""Ownership checks shared by the resource services."""

from typing import Optional

from .exceptions import NotResourceOwnerError
from .models import Account, Role


def ensure_owner_or_admin(
    account: Account,
    owner_id: Optional[str],
    action: str,
    resource: str,
) -> None:
    """
    Raise unless the account owns the resource or is an admin.

    Raises:
        NotResourceOwnerError: Someone else's resource
    """
    if account.role is Role.ADMIN:
        return
    if owner_id is None or owner_id != account.id:
        raise NotResourceOwnerError(account.id, action, resource)
