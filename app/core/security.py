"""Password policy, bcrypt hashing, and JWT access/refresh token issuance and verification."""

import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

logger = logging.getLogger(__name__)

# Default bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only uses the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

PASSWORD_MIN_LEN = 10
PASSWORD_MAX_LEN = 128
_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")

# Token lifetimes are fixed; callers cannot choose them.
ACCESS_TOKEN_TTL = timedelta(hours=1)
REFRESH_TOKEN_TTL = timedelta(days=7)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class InvalidInputError(ValueError):
    """Raised when asked to hash something that is not a non-empty string."""


class InvalidTokenError(Exception):
    """Raised for any token that fails verification (malformed, tampered, expired, wrong type)."""


def is_strong_password(password: str, min_length: int = PASSWORD_MIN_LEN) -> bool:
    """
    Return True when password has at least min_length characters and contains
    an ASCII lowercase letter, an ASCII uppercase letter, an ASCII digit and
    a symbol (anything outside A-Z, a-z and 0-9).
    """
    if not isinstance(password, str) or len(password) < min_length:
        return False
    return all(p.search(password) for p in (_LOWER, _UPPER, _DIGIT, _SYMBOL))


def password_requirement_message(min_length: int = PASSWORD_MIN_LEN) -> str:
    return (
        f"Password must be at least {min_length} characters long and include uppercase, "
        "lowercase, digit, and special character"
    )


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialHasher:
    """bcrypt wrapper with a configurable work factor."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Each call uses a fresh salt."""
        if not isinstance(plain_password, str) or not plain_password:
            raise InvalidInputError("Password to hash must be a non-empty string")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash."""
        if not isinstance(plain_password, str) or not isinstance(hashed, str):
            return False
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenIssuer:
    """
    Creates and verifies signed, time-limited JWTs.

    Access and refresh tokens use different secrets and carry a "type" claim,
    so neither is accepted where the other is expected.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh token secrets must differ")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.algorithm = algorithm
        self._clock = clock

    def issue_access_token(self, user_id: int) -> str:
        return self._issue(user_id, ACCESS_TOKEN_TYPE, ACCESS_TOKEN_TTL, self._access_secret)

    def issue_refresh_token(self, user_id: int) -> str:
        return self._issue(user_id, REFRESH_TOKEN_TYPE, REFRESH_TOKEN_TTL, self._refresh_secret)

    def verify_access_token(self, token: str) -> int:
        """Return the user id carried by a valid access token. Raises InvalidTokenError."""
        return self._verify(token, ACCESS_TOKEN_TYPE, self._access_secret)

    def verify_refresh_token(self, token: str) -> int:
        """Return the user id carried by a valid refresh token. Raises InvalidTokenError."""
        return self._verify(token, REFRESH_TOKEN_TYPE, self._refresh_secret)

    def _issue(self, user_id: int, token_type: str, ttl: timedelta, secret: str) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "type": token_type,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def _verify(self, token: str, token_type: str, secret: str) -> int:
        # Every failure collapses to InvalidTokenError; the reason is only logged.
        if not isinstance(token, str) or not token:
            raise InvalidTokenError("Invalid token")
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            logger.debug("Rejected %s token: %s", token_type, e)
            raise InvalidTokenError("Invalid token") from e
        if payload.get("type") != token_type:
            logger.debug("Rejected %s token: type claim %r", token_type, payload.get("type"))
            raise InvalidTokenError("Invalid token")
        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as e:
            logger.debug("Rejected %s token: non-integer sub", token_type)
            raise InvalidTokenError("Invalid token") from e
