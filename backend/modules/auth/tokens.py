"""
Session and password-reset tokens.

Session tokens are stateless HS256 JWTs carrying the account id. Reset
tokens are random secrets whose SHA-256 digest is the only form that is
ever stored.
"""

import hashlib
import secrets
from datetime import timedelta
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.repository import Clock, utcnow

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import ResetSecret, TokenClaims


RESET_TOKEN_BYTES = 20


class TokenCodec:
    """
    Issues and verifies signed session tokens.

    The clock is injectable so expiry can be tested without waiting.
    Expiry is checked against that clock rather than by PyJWT, which
    always reads the system time.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta,
        algorithm: str = "HS256",
        clock: Clock = utcnow,
    ):
        if not secret:
            raise RuntimeError(
                "Session token secret missing. Set the JWT_SECRET environment variable."
            )
        self._secret = secret
        self._expires_in = expires_in
        self._algorithm = algorithm
        self._clock = clock

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, subject_id: str, expires_in: Optional[timedelta] = None) -> str:
        """
        Create a signed token for an account.

        Args:
            subject_id: Account ID to bind into the token
            expires_in: Lifetime override; defaults to the configured one

        Returns:
            Encoded JWT
        """
        lifetime = expires_in if expires_in is not None else self._expires_in
        if lifetime <= timedelta(0):
            raise ValueError("Token lifetime must be positive")

        now = self._clock()
        payload = {
            "sub": subject_id,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return the account ID it names.

        Raises:
            InvalidTokenError: Bad signature or malformed payload
            ExpiredTokenError: Valid token whose expiry has passed
        """
        if not token:
            raise InvalidTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": ["sub", "iat", "exp"],
                },
            )
            claims = TokenClaims(**payload)
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")
        except PydanticValidationError:
            raise InvalidTokenError("Invalid token: malformed claims")

        if self._clock().timestamp() >= claims.exp:
            raise ExpiredTokenError()

        return claims.sub


def hash_for_lookup(plaintext: str) -> str:
    """Digest under which a reset token is stored and looked up."""
    return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()


def generate_reset_secret() -> ResetSecret:
    """Create a reset token and the digest to persist for it."""
    plaintext = secrets.token_hex(RESET_TOKEN_BYTES)
    return ResetSecret(plaintext=plaintext, hash=hash_for_lookup(plaintext))
