"""Resolve an inbound bearer access token to the current user."""

from app.core.errors import ErrorKind, Failure
from app.core.security import InvalidTokenError, TokenIssuer
from app.schemas.auth import CurrentUser
from app.services.user_directory import UserDirectory


class SessionVerifier:
    def __init__(self, directory: UserDirectory, issuer: TokenIssuer) -> None:
        self.directory = directory
        self.issuer = issuer

    def verify(self, token: str | None) -> CurrentUser | Failure:
        """
        Verify the token and load its user.

        A missing token or a user deleted since the token was issued is
        UNAUTHENTICATED; any token that fails verification is INVALID_TOKEN.
        """
        if not token:
            return Failure(ErrorKind.UNAUTHENTICATED, "Not authenticated")
        try:
            user_id = self.issuer.verify_access_token(token)
        except InvalidTokenError:
            return Failure(ErrorKind.INVALID_TOKEN, "Invalid or expired token")
        user = self.directory.find_by_id(user_id)
        if user is None:
            return Failure(ErrorKind.UNAUTHENTICATED, "User not found")
        return CurrentUser(id=user.id, email=user.email, role=user.role, created_at=user.created_at)
