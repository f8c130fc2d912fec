"""Register/login/refresh/profile routes and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import ErrorKind, Failure, to_http_exception
from app.core.security import CredentialHasher, TokenIssuer
from app.models import Role
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
from app.services.auth import AuthService
from app.services.session import SessionVerifier
from app.services.user_directory import SqlAlchemyUserDirectory, UserDirectory

router = APIRouter()
# auto_error=False: a missing header is reported as 401 by SessionVerifier, not 403 by FastAPI.
security = HTTPBearer(auto_error=False)


def get_user_directory(db: Annotated[Session, Depends(get_db)]) -> UserDirectory:
    return SqlAlchemyUserDirectory(db)


def get_hasher() -> CredentialHasher:
    return CredentialHasher(rounds=get_settings().BCRYPT_ROUNDS)


def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    return TokenIssuer(
        access_secret=settings.JWT_SECRET.get_secret_value(),
        refresh_secret=settings.REFRESH_TOKEN_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def get_auth_service(
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    hasher: Annotated[CredentialHasher, Depends(get_hasher)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    return AuthService(
        directory,
        hasher,
        issuer,
        password_min_length=get_settings().PASSWORD_MIN_LENGTH,
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> CurrentUser:
    """Dependency: require a valid Bearer access token and return the current user."""
    token = credentials.credentials if credentials is not None else None
    result = SessionVerifier(directory, issuer).verify(token)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return result


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated user with role ADMIN. Raises 403 otherwise."""
    if current_user.role != Role.ADMIN:
        raise to_http_exception(Failure(ErrorKind.FORBIDDEN, "Admin access required"))
    return current_user


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """Create a USER account and return its id, email and a token pair."""
    result = service.register(body.email, body.password)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return RegisterResponse(
        id=result.user.id,
        email=result.user.email,
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
    )


@router.post("/login", response_model=TokenPairResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenPairResponse:
    """
    Authenticate with email and password; returns access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <accessToken>
    """
    result = service.login(body.email, body.password)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return TokenPairResponse(
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post("/refresh", response_model=AccessTokenResponse)
def refresh(
    body: RefreshRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AccessTokenResponse:
    """Exchange a refresh token for a new access token."""
    result = service.refresh(body.refresh_token)
    if isinstance(result, Failure):
        raise to_http_exception(result)
    return AccessTokenResponse(access_token=result)


@router.get("/profile", response_model=ProfileResponse)
def profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProfileResponse:
    return ProfileResponse(user=current_user)
