"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The credential store and the notification service are
collaborators of the auth flows; IAuthService is what the API layer uses.
"""

from datetime import datetime
from typing import Any, Iterable, Protocol, Optional, runtime_checkable

from .models import (
    Account,
    RegisterRequest,
    Role,
    UpdateDetailsRequest,
)


@runtime_checkable
class ICredentialStore(Protocol):
    """
    Interface to the account collection.

    The auth flows never touch storage directly; every read and write of
    an account goes through these operations.
    """

    async def find_by_email(
        self,
        email: str,
        include_password: bool = False,
    ) -> Optional[Account]:
        """
        Get an account by email.

        Args:
            email: Account email
            include_password: Whether to load the password hash

        Returns:
            Account if found, None otherwise
        """
        ...

    async def find_by_id(
        self,
        account_id: str,
        include_password: bool = False,
    ) -> Optional[Account]:
        ...

    async def find_by_reset_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> Optional[Account]:
        """
        Get the account holding a reset token that has not expired.

        Args:
            token_hash: Digest of the presented reset token
            now: Current time; the stored expiry must be later

        Returns:
            Account if a live reset token matches, None otherwise
        """
        ...

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> Account:
        """
        Persist a new account.

        The password must already be hashed.
        """
        ...

    async def update_fields(
        self,
        account_id: str,
        fields: dict[str, Any],
        unset: Iterable[str] = (),
    ) -> Optional[Account]:
        """
        Set and clear account attributes.

        Args:
            account_id: Account to update
            fields: Attribute name -> new value
            unset: Attribute names to remove

        Returns:
            Updated account, or None if it does not exist
        """
        ...

    async def compare_password(self, password: str, password_hash: str) -> bool:
        ...


@runtime_checkable
class INotificationService(Protocol):
    """Out-of-band delivery of messages to account holders."""

    async def send(self, to: str, subject: str, message: str) -> None:
        """
        Deliver a message.

        Raises:
            Exception: Any delivery failure
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    Every flow that logs a user in returns a freshly issued session token.
    """

    async def register(self, request: RegisterRequest) -> str:
        ...

    async def login(self, email: Optional[str], password: Optional[str]) -> str:
        """
        Raises:
            MissingCredentialsError: Email or password absent
            InvalidCredentialsError: Unknown email or wrong password
        """
        ...

    async def authenticate(self, token: str) -> Account:
        """
        Resolve a session token to its account.

        Raises:
            InvalidTokenError: Token fails verification
            AccountNotFoundError: Token names a deleted account
        """
        ...

    async def update_details(
        self,
        account: Account,
        request: UpdateDetailsRequest,
    ) -> Account:
        ...

    async def update_password(
        self,
        account: Account,
        current_password: str,
        new_password: str,
    ) -> str:
        ...

    async def forgot_password(self, email: str, reset_url_base: str) -> None:
        """
        Create a reset token and deliver it.

        Args:
            email: Account email
            reset_url_base: URL the plaintext token is appended to
        """
        ...

    async def reset_password(self, token: str, new_password: str) -> str:
        ...
