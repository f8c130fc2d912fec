"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AccessTokenResponse,
    CurrentUser,
    LoginRequest,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenPairResponse,
)
from app.schemas.external import ExternalRequest, ExternalResponse
from app.schemas.health import HealthResponse
from app.schemas.user import UserCreateRequest, UserOut, UserUpdateRequest

__all__ = [
    "AccessTokenResponse",
    "CurrentUser",
    "ExternalRequest",
    "ExternalResponse",
    "HealthResponse",
    "LoginRequest",
    "ProfileResponse",
    "RefreshRequest",
    "RegisterRequest",
    "RegisterResponse",
    "TokenPairResponse",
    "UserCreateRequest",
    "UserOut",
    "UserUpdateRequest",
]
