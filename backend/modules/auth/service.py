"""
Authentication service implementation.

Orchestrates registration, login, profile and password changes and the
forgot/reset password flow on top of the credential store, the token
codec and the notification service.
"""

import logging
from typing import Optional

from shared.repository import Clock, utcnow

from .exceptions import (
    AccountNotFoundError,
    EmailDeliveryError,
    EmailNotRegisteredError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    MissingCredentialsError,
)
from .interfaces import IAuthService, ICredentialStore, INotificationService
from .models import (
    Account,
    RegisterRequest,
    RESET_TOKEN_TTL,
    UpdateDetailsRequest,
)
from .notifications import RESET_SUBJECT, build_reset_message
from .passwords import DEFAULT_ROUNDS, hash_password_async
from .tokens import TokenCodec, generate_reset_secret, hash_for_lookup

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Password hashing is an explicit step before every write that sets a
    password; the store only ever receives hashes.
    """

    def __init__(
        self,
        store: ICredentialStore,
        tokens: TokenCodec,
        notifier: INotificationService,
        clock: Clock = utcnow,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self._store = store
        self._tokens = tokens
        self._notifier = notifier
        self._clock = clock
        self._bcrypt_rounds = bcrypt_rounds

    async def _hash(self, password: str) -> str:
        return await hash_password_async(password, self._bcrypt_rounds)

    async def register(self, request: RegisterRequest) -> str:
        account = await self._store.create(
            name=request.name,
            email=request.email,
            password_hash=await self._hash(request.password),
            role=request.role,
        )
        logger.info("Registered account %s with role %s", account.id, account.role.value)
        return self._tokens.issue(account.id)

    async def login(self, email: Optional[str], password: Optional[str]) -> str:
        if not email or not password:
            raise MissingCredentialsError()

        account = await self._store.find_by_email(email, include_password=True)
        if account is None or not account.password_hash:
            raise InvalidCredentialsError()

        if not await self._store.compare_password(password, account.password_hash):
            raise InvalidCredentialsError()

        return self._tokens.issue(account.id)

    async def authenticate(self, token: str) -> Account:
        account_id = self._tokens.verify(token)
        account = await self._store.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def update_details(
        self,
        account: Account,
        request: UpdateDetailsRequest,
    ) -> Account:
        """Update name and email only; other attributes are not reachable here."""
        fields = request.model_dump(include={"name", "email"}, exclude_none=True)
        updated = await self._store.update_fields(account.id, fields)
        if updated is None:
            raise AccountNotFoundError(account.id)
        return updated

    async def update_password(
        self,
        account: Account,
        current_password: str,
        new_password: str,
    ) -> str:
        stored = await self._store.find_by_id(account.id, include_password=True)
        if stored is None:
            raise AccountNotFoundError(account.id)

        if not stored.password_hash or not await self._store.compare_password(
            current_password, stored.password_hash
        ):
            raise IncorrectPasswordError()

        await self._store.update_fields(
            stored.id,
            {"password_hash": await self._hash(new_password)},
        )
        return self._tokens.issue(stored.id)

    async def forgot_password(self, email: str, reset_url_base: str) -> None:
        account = await self._store.find_by_email(email)
        if account is None:
            raise EmailNotRegisteredError(email)

        secret = generate_reset_secret()
        await self._store.update_fields(
            account.id,
            {
                "reset_password_token": secret.hash,
                "reset_password_expire": self._clock() + RESET_TOKEN_TTL,
            },
        )

        reset_url = f"{reset_url_base.rstrip('/')}/{secret.plaintext}"
        try:
            await self._notifier.send(
                to=account.email,
                subject=RESET_SUBJECT,
                message=build_reset_message(reset_url),
            )
        except Exception:
            logger.exception("Reset email to account %s could not be sent", account.id)
            await self._store.update_fields(
                account.id,
                {},
                unset=("reset_password_token", "reset_password_expire"),
            )
            raise EmailDeliveryError()

    async def reset_password(self, token: str, new_password: str) -> str:
        account = await self._store.find_by_reset_token(
            hash_for_lookup(token),
            self._clock(),
        )
        if account is None:
            raise InvalidResetTokenError()

        await self._store.update_fields(
            account.id,
            {"password_hash": await self._hash(new_password)},
            unset=("reset_password_token", "reset_password_expire"),
        )
        logger.info("Password reset for account %s", account.id)
        return self._tokens.issue(account.id)
