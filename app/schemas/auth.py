"""Request/response schemas for auth endpoints."""

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models import Role

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
EMAIL_MAX_LEN = 255


def normalize_email(value: str) -> str:
    """Require a plausible address; case is preserved as stored."""
    email = value.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Email must be valid")
    return email


class CamelModel(BaseModel):
    """Base for wire schemas: camelCase JSON, snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(CamelModel):
    """Self-service registration. Only the USER role may be requested."""

    email: str = Field(..., max_length=EMAIL_MAX_LEN, description="Email address")
    password: str = Field(..., max_length=128, description="Password")
    role: Literal["USER"] | None = Field(
        default=None, description="Registration allowed only for normal users"
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email address")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token from login")


class RegisterResponse(CamelModel):
    """Created user id/email plus a fresh token pair."""

    id: int
    email: str
    access_token: str = Field(..., description="JWT access token (1 hour)")
    refresh_token: str = Field(..., description="JWT refresh token (7 days)")


class TokenPairResponse(CamelModel):
    access_token: str = Field(..., description="JWT access token (1 hour)")
    refresh_token: str = Field(..., description="JWT refresh token (7 days)")


class AccessTokenResponse(CamelModel):
    access_token: str = Field(..., description="JWT access token (1 hour)")


class CurrentUser(CamelModel):
    """Authenticated user (id, email, role) for dependency injection."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    email: str
    role: Role
    created_at: datetime | None = None


class ProfileResponse(CamelModel):
    """Response for GET /auth/profile."""

    user: CurrentUser
