"""
Error kinds returned by the auth and user services.

Services return a Failure value for expected outcomes (bad credentials,
duplicate email, role denied) instead of raising; routes turn it into an
HTTPException with a fixed status code.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import HTTPException, status


class ErrorKind(str, Enum):
    """Outward error categories; each maps to one HTTP status."""

    WEAK_PASSWORD = "weak_password"
    DUPLICATE_USER = "duplicate_user"
    AUTHENTICATION_FAILED = "authentication_failed"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_TOKEN = "invalid_token"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_USER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


@dataclass(frozen=True)
class Failure:
    """A tagged, expected failure of a service operation."""

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


def to_http_exception(failure: Failure) -> HTTPException:
    """Map a Failure to the HTTPException the API layer raises."""
    headers = None
    if failure.kind is ErrorKind.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=failure.status_code,
        detail=failure.message,
        headers=headers,
    )
