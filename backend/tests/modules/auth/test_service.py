"""Tests for the authentication flows."""

from datetime import timedelta

import pytest

from modules.auth.exceptions import (
    AccountNotFoundError,
    EmailDeliveryError,
    EmailNotRegisteredError,
    ExpiredTokenError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    MissingCredentialsError,
)
from modules.auth.models import RegisterRequest, Role, UpdateDetailsRequest
from modules.auth.tokens import hash_for_lookup


def _reset_token_from(notifier) -> str:
    """The plaintext token is the last path segment of the emailed URL."""
    return notifier.sent[-1]["message"].strip().rsplit("/", 1)[-1]


class TestAuthService:
    @pytest.fixture
    def service(self, container):
        return container.auth

    @pytest.fixture
    def users(self, database):
        return database("users")

    async def _register(self, service, email="john@gmail.com", password="123456", role=Role.USER):
        return await service.register(
            RegisterRequest(name="John Doe", email=email, password=password, role=role)
        )

    @pytest.mark.asyncio
    async def test_register_hashes_password_and_issues_token(self, service, users, container):
        """Should store only the hash and return a token for the new account."""
        token = await self._register(service)

        stored = users.documents[0]
        assert stored["password"] != "123456"
        assert stored["password"].startswith("$2b$")
        assert stored["role"] == "user"
        assert container.tokens.verify(token) == str(stored["_id"])

    @pytest.mark.asyncio
    async def test_login_success(self, service, container, users):
        await self._register(service)

        token = await service.login("john@gmail.com", "123456")

        assert container.tokens.verify(token) == str(users.documents[0]["_id"])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [(None, "123456"), ("john@gmail.com", None), ("", "")])
    async def test_login_requires_both_fields(self, service, email, password):
        with pytest.raises(MissingCredentialsError) as exc_info:
            await service.login(email, password)
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_login_failures_are_indistinguishable(self, service):
        """Wrong password and unknown email yield the same error."""
        await self._register(service)

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await service.login("john@gmail.com", "wrong-password")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await service.login("nobody@gmail.com", "123456")

        assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"
        assert wrong_password.value.status_code == unknown_email.value.status_code == 401

    @pytest.mark.asyncio
    async def test_authenticate_resolves_account(self, service):
        token = await self._register(service)

        account = await service.authenticate(token)

        assert account.email == "john@gmail.com"
        assert account.password_hash is None

    @pytest.mark.asyncio
    async def test_authenticate_rejects_expired_token(self, service, clock, settings):
        token = await self._register(service)
        clock.advance(timedelta(days=settings.jwt_expire_days))

        with pytest.raises(ExpiredTokenError):
            await service.authenticate(token)

    @pytest.mark.asyncio
    async def test_authenticate_rejects_deleted_account(self, service, users):
        token = await self._register(service)
        users.documents.clear()

        with pytest.raises(AccountNotFoundError):
            await service.authenticate(token)

    @pytest.mark.asyncio
    async def test_authenticate_rejects_garbage(self, service):
        with pytest.raises(InvalidTokenError):
            await service.authenticate("garbage")

    @pytest.mark.asyncio
    async def test_update_details_only_touches_name_and_email(self, service, users):
        token = await self._register(service)
        account = await service.authenticate(token)
        password_before = users.documents[0]["password"]

        updated = await service.update_details(
            account, UpdateDetailsRequest(name="Jane Doe", email="jane@gmail.com")
        )

        assert updated.name == "Jane Doe"
        assert updated.email == "jane@gmail.com"
        assert updated.role is Role.USER
        assert users.documents[0]["password"] == password_before

    @pytest.mark.asyncio
    async def test_update_password(self, service, container):
        token = await self._register(service)
        account = await service.authenticate(token)

        new_token = await service.update_password(account, "123456", "abcdef")

        assert container.tokens.verify(new_token) == account.id
        await service.login("john@gmail.com", "abcdef")
        with pytest.raises(InvalidCredentialsError):
            await service.login("john@gmail.com", "123456")

    @pytest.mark.asyncio
    async def test_update_password_requires_current(self, service):
        account = await service.authenticate(await self._register(service))

        with pytest.raises(IncorrectPasswordError) as exc_info:
            await service.update_password(account, "wrong", "abcdef")
        assert exc_info.value.status_code == 401


class TestPasswordReset:
    @pytest.fixture
    def service(self, container):
        return container.auth

    @pytest.fixture
    def users(self, database):
        return database("users")

    @pytest.fixture
    def register(self, service):
        async def _register():
            return await service.register(
                RegisterRequest(name="John Doe", email="john@gmail.com", password="123456")
            )

        return _register

    @pytest.mark.asyncio
    async def test_forgot_password_persists_only_hash(self, service, register, users, notifier, clock):
        """The emailed token is plaintext; only its digest and expiry are stored."""
        await register()

        await service.forgot_password("john@gmail.com", "http://localhost:5000/api/v1/auth/resetpassword")

        plaintext = _reset_token_from(notifier)
        stored = users.documents[0]
        assert stored["resetPasswordToken"] == hash_for_lookup(plaintext)
        assert stored["resetPasswordToken"] != plaintext
        assert stored["resetPasswordExpire"] == clock.now + timedelta(minutes=10)
        assert notifier.sent[-1]["to"] == "john@gmail.com"
        assert "http://localhost:5000/api/v1/auth/resetpassword/" in notifier.sent[-1]["message"]

    @pytest.mark.asyncio
    async def test_forgot_password_unknown_email(self, service, notifier):
        with pytest.raises(EmailNotRegisteredError) as exc_info:
            await service.forgot_password("nobody@gmail.com", "http://x")
        assert exc_info.value.status_code == 404
        assert notifier.sent == []

    @pytest.mark.asyncio
    async def test_delivery_failure_clears_reset_fields(self, service, register, users, notifier):
        await register()
        notifier.fail = True

        with pytest.raises(EmailDeliveryError) as exc_info:
            await service.forgot_password("john@gmail.com", "http://x")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Email could not be sent"
        assert "resetPasswordToken" not in users.documents[0]
        assert "resetPasswordExpire" not in users.documents[0]

    @pytest.mark.asyncio
    async def test_reset_password(self, service, register, users, notifier, container):
        await register()
        await service.forgot_password("john@gmail.com", "http://x")
        plaintext = _reset_token_from(notifier)

        token = await service.reset_password(plaintext, "newpass1")

        assert container.tokens.verify(token) == str(users.documents[0]["_id"])
        assert "resetPasswordToken" not in users.documents[0]
        assert "resetPasswordExpire" not in users.documents[0]
        await service.login("john@gmail.com", "newpass1")

    @pytest.mark.asyncio
    async def test_reset_token_is_single_use(self, service, register, notifier):
        await register()
        await service.forgot_password("john@gmail.com", "http://x")
        plaintext = _reset_token_from(notifier)
        await service.reset_password(plaintext, "newpass1")

        with pytest.raises(InvalidResetTokenError):
            await service.reset_password(plaintext, "newpass2")

    @pytest.mark.asyncio
    async def test_expired_and_unknown_tokens_fail_identically(self, service, register, notifier, clock):
        await register()
        await service.forgot_password("john@gmail.com", "http://x")
        plaintext = _reset_token_from(notifier)
        clock.advance(timedelta(minutes=10, seconds=1))

        with pytest.raises(InvalidResetTokenError) as expired:
            await service.reset_password(plaintext, "newpass1")
        with pytest.raises(InvalidResetTokenError) as unknown:
            await service.reset_password("0" * 40, "newpass1")

        assert expired.value.message == unknown.value.message == "Invalid token"
        assert expired.value.status_code == unknown.value.status_code == 400
