"""In-memory UserDirectory and small builders shared by the tests."""

from datetime import UTC, datetime

from app.core.security import CredentialHasher, TokenIssuer
from app.models import Role
from app.schemas.auth import CurrentUser
from app.services.user_directory import DuplicateEmailError, UserDirectory, UserRecord

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


class InMemoryUserDirectory(UserDirectory):
    """Dict-backed directory with the same uniqueness rule as the users table."""

    def __init__(self) -> None:
        self.users: dict[int, UserRecord] = {}
        self._next_id = 1

    def find_by_email(self, email: str) -> UserRecord | None:
        return self._by_email(email)

    def _by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    def list_all(self) -> list[UserRecord]:
        return [self.users[k] for k in sorted(self.users)]

    def create(self, email: str, password_hash: str, role: Role) -> UserRecord:
        if self._by_email(email) is not None:
            raise DuplicateEmailError(email)
        user = UserRecord(
            id=self._next_id,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=datetime.now(UTC),
        )
        self.users[user.id] = user
        self._next_id += 1
        return user

    def update(self, user_id, email=None, password_hash=None):
        user = self.users.get(user_id)
        if user is None:
            return None
        if email is not None and email != user.email and self._by_email(email) is not None:
            raise DuplicateEmailError(email)
        updated = UserRecord(
            id=user.id,
            email=email if email is not None else user.email,
            password_hash=password_hash if password_hash is not None else user.password_hash,
            role=user.role,
            created_at=user.created_at,
        )
        self.users[user_id] = updated
        return updated

    def delete(self, user_id: int) -> bool:
        return self.users.pop(user_id, None) is not None


class RacingUserDirectory(InMemoryUserDirectory):
    """Pre-check never sees the existing user, as if a concurrent insert won the race."""

    def find_by_email(self, email: str) -> UserRecord | None:
        return None


def make_hasher() -> CredentialHasher:
    return CredentialHasher(rounds=4)


def make_issuer(**kwargs) -> TokenIssuer:
    return TokenIssuer(ACCESS_SECRET, REFRESH_SECRET, **kwargs)


def actor(user: UserRecord) -> CurrentUser:
    return CurrentUser(id=user.id, email=user.email, role=user.role, created_at=user.created_at)
