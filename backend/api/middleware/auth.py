"""
Bearer token authentication and role authorization.

get_current_user authenticates a request; authorize(*roles) builds a
guard that depends on it, so a role check can never run without an
authenticated principal.
"""

import logging
from typing import Callable, Coroutine, Any, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import (
    AccountNotFoundError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingTokenError,
    NotAuthenticatedError,
)
from modules.auth.interfaces import IAuthService
from modules.auth.models import Account, Role

from ..dependencies import get_auth_service

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Account:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Account = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    try:
        return await auth.authenticate(credentials.credentials)
    except (InvalidTokenError, AccountNotFoundError) as e:
        logger.debug("Rejected bearer token: %s", e.message)
        raise NotAuthenticatedError()


def authorize(*roles: Role) -> Callable[..., Coroutine[Any, Any, Account]]:
    """
    Build a dependency that admits only the given roles.

    Usage:
        @router.post("/", dependencies=[Depends(authorize(Role.PUBLISHER, Role.ADMIN))])
    """
    allowed = frozenset(roles)

    async def require_role(user: Account = Depends(get_current_user)) -> Account:
        if user.role not in allowed:
            raise InsufficientPermissionsError(user.role.value)
        return user

    return require_role


# Type alias for cleaner route definitions
RequireAuth = Depends(get_current_user)
