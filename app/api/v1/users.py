"""Admin user management routes. Reading a single user only requires authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Response, status

from app.api.v1.auth import get_current_user, get_hasher, get_user_directory, require_admin
from app.core.config import get_settings
from app.core.errors import Failure, to_http_exception
from app.core.security import CredentialHasher
from app.schemas.auth import CurrentUser
from app.schemas.user import UserCreateRequest, UserOut, UserUpdateRequest
from app.services.user_directory import UserDirectory
from app.services.users import UserService

router = APIRouter()


def get_user_service(
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    hasher: Annotated[CredentialHasher, Depends(get_hasher)],
) -> UserService:
    settings = get_settings()
    admin_key = settings.ADMIN_KEY.get_secret_value() if settings.ADMIN_KEY else None
    return UserService(
        directory,
        hasher,
        admin_key=admin_key,
        password_min_length=settings.PASSWORD_MIN_LENGTH,
    )


@router.get("", response_model=list[UserOut])
def list_users(
    admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserOut]:
    """List all users (admin only)."""
    result = service.list_users(admin)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return [UserOut.model_validate(u) for u in result]


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    result = service.get_user(current_user, user_id)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return UserOut.model_validate(result)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
    x_admin_key: Annotated[str | None, Header()] = None,
) -> UserOut:
    """
    Create a user (admin only). The new user gets role USER unless ADMIN is
    requested and the X-Admin-Key header matches ADMIN_KEY.
    """
    result = service.create_user(
        admin,
        body.email,
        body.password,
        role=body.role,
        admin_key=x_admin_key,
    )
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return UserOut.model_validate(result)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    result = service.update_user(admin, user_id, email=body.email, password=body.password)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return UserOut.model_validate(result)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    """Delete a user (admin only). ADMIN accounts, including the caller's own, cannot be deleted."""
    result = service.delete_user(admin, user_id)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
