"""User record persistence: the interface the auth core depends on and its SQLAlchemy implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Role, User

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """Raised when storage rejects a write because the email is already taken."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


@dataclass(frozen=True)
class UserRecord:
    """Persistence-independent view of a stored user."""

    id: int
    email: str
    password_hash: str
    role: Role
    created_at: datetime | None = None


class UserDirectory(ABC):
    """Create/find/update/delete user records by id or email."""

    @abstractmethod
    def find_by_email(self, email: str) -> UserRecord | None: ...

    @abstractmethod
    def find_by_id(self, user_id: int) -> UserRecord | None: ...

    @abstractmethod
    def list_all(self) -> list[UserRecord]: ...

    @abstractmethod
    def create(self, email: str, password_hash: str, role: Role) -> UserRecord:
        """Persist a new user. Raises DuplicateEmailError if the email exists."""

    @abstractmethod
    def update(
        self,
        user_id: int,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> UserRecord | None:
        """Update the given fields; None if the user does not exist. Raises DuplicateEmailError."""

    @abstractmethod
    def delete(self, user_id: int) -> bool:
        """Delete the user; False if it did not exist."""


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        email=user.email,
        password_hash=user.password_hash,
        role=Role(user.role),
        created_at=user.created_at,
    )


class SqlAlchemyUserDirectory(UserDirectory):
    """UserDirectory backed by the users table; commits each write."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> UserRecord | None:
        user = self.session.query(User).filter(User.email == email).first()
        return _to_record(user) if user is not None else None

    def find_by_id(self, user_id: int) -> UserRecord | None:
        user = self.session.get(User, user_id)
        return _to_record(user) if user is not None else None

    def list_all(self) -> list[UserRecord]:
        return [_to_record(u) for u in self.session.query(User).order_by(User.id).all()]

    def create(self, email: str, password_hash: str, role: Role) -> UserRecord:
        user = User(email=email, password_hash=password_hash, role=role.value)
        self.session.add(user)
        self._commit(email)
        self.session.refresh(user)
        return _to_record(user)

    def update(
        self,
        user_id: int,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> UserRecord | None:
        user = self.session.get(User, user_id)
        if user is None:
            return None
        if email is not None:
            user.email = email
        if password_hash is not None:
            user.password_hash = password_hash
        self._commit(user.email)
        self.session.refresh(user)
        return _to_record(user)

    def delete(self, user_id: int) -> bool:
        user = self.session.get(User, user_id)
        if user is None:
            return False
        self.session.delete(user)
        self.session.commit()
        return True

    def _commit(self, email: str) -> None:
        # The unique index on email is the final authority under concurrent writes.
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info("Unique constraint rejected write for an existing email")
            raise DuplicateEmailError(email) from e
