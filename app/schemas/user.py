"""Request/response schemas for admin user management."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models import Role
from app.schemas.auth import EMAIL_MAX_LEN, CamelModel, normalize_email


class UserOut(CamelModel):
    """User entry returned by the users endpoints (no password hash)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    email: str
    role: Role
    created_at: datetime | None = None


class UserCreateRequest(CamelModel):
    """Admin-initiated user creation; ADMIN is only granted with a valid admin key."""

    email: str = Field(..., max_length=EMAIL_MAX_LEN)
    password: str = Field(..., max_length=128)
    role: Role = Field(default=Role.USER)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class UserUpdateRequest(CamelModel):
    """Partial update; omitted fields are left unchanged."""

    email: str | None = Field(default=None, max_length=EMAIL_MAX_LEN)
    password: str | None = Field(default=None, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return normalize_email(v)
