"""Registration, login and access-token refresh."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from app.core.errors import ErrorKind, Failure
from app.core.security import (
    PASSWORD_MIN_LEN,
    CredentialHasher,
    InvalidTokenError,
    TokenIssuer,
    is_strong_password,
    password_requirement_message,
)
from app.models import Role
from app.services.user_directory import DuplicateEmailError, UserDirectory, UserRecord

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


# Verified against for unknown emails so both login failures cost one bcrypt check.
@lru_cache
def _dummy_hash(rounds: int) -> str:
    return CredentialHasher(rounds).hash("placeholder-password")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class Registration:
    user: UserRecord
    tokens: TokenPair


class AuthService:
    """
    Orchestrates registration and login against an injected UserDirectory.

    Expected failures come back as Failure values; only unexpected errors
    (e.g. the database being down) raise.
    """

    def __init__(
        self,
        directory: UserDirectory,
        hasher: CredentialHasher,
        issuer: TokenIssuer,
        password_min_length: int = PASSWORD_MIN_LEN,
    ) -> None:
        self.directory = directory
        self.hasher = hasher
        self.issuer = issuer
        self.password_min_length = password_min_length

    def register(self, email: str, password: str) -> Registration | Failure:
        """Create a USER account and return it with a fresh token pair."""
        if not is_strong_password(password, self.password_min_length):
            return Failure(ErrorKind.WEAK_PASSWORD, password_requirement_message(self.password_min_length))
        if self.directory.find_by_email(email) is not None:
            return Failure(ErrorKind.DUPLICATE_USER, "User already exists")

        password_hash = self.hasher.hash(password)
        try:
            user = self.directory.create(email, password_hash, Role.USER)
        except DuplicateEmailError:
            # Lost a race with a concurrent registration for the same email.
            return Failure(ErrorKind.DUPLICATE_USER, "User already exists")

        logger.info("Registered user id=%s", user.id)
        return Registration(user=user, tokens=self._issue_pair(user.id))

    def login(self, email: str, password: str) -> TokenPair | Failure:
        """Check credentials; unknown email and wrong password fail identically."""
        user = self.directory.find_by_email(email)
        if user is None:
            self.hasher.verify(password, _dummy_hash(self.hasher.rounds))
            return Failure(ErrorKind.AUTHENTICATION_FAILED, INVALID_CREDENTIALS)
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for user id=%s", user.id)
            return Failure(ErrorKind.AUTHENTICATION_FAILED, INVALID_CREDENTIALS)
        return self._issue_pair(user.id)

    def refresh(self, refresh_token: str) -> str | Failure:
        """Mint a new access token from a valid refresh token. The refresh token is not rotated."""
        try:
            user_id = self.issuer.verify_refresh_token(refresh_token)
        except InvalidTokenError:
            return Failure(ErrorKind.INVALID_TOKEN, "Invalid refresh token")
        return self.issuer.issue_access_token(user_id)

    def _issue_pair(self, user_id: int) -> TokenPair:
        return TokenPair(
            access_token=self.issuer.issue_access_token(user_id),
            refresh_token=self.issuer.issue_refresh_token(user_id),
        )
