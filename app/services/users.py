"""Admin user management: list, get, create, update and delete user records."""

from __future__ import annotations

import hmac
import logging

from app.core.errors import ErrorKind, Failure
from app.core.security import (
    PASSWORD_MIN_LEN,
    CredentialHasher,
    is_strong_password,
    password_requirement_message,
)
from app.models import Role
from app.schemas.auth import CurrentUser
from app.services.access_policy import Action, check_access
from app.services.user_directory import DuplicateEmailError, UserDirectory, UserRecord

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


class UserService:
    """Every operation is checked against the access policy before touching storage."""

    def __init__(
        self,
        directory: UserDirectory,
        hasher: CredentialHasher,
        admin_key: str | None = None,
        password_min_length: int = PASSWORD_MIN_LEN,
    ) -> None:
        self.directory = directory
        self.hasher = hasher
        self.admin_key = admin_key
        self.password_min_length = password_min_length

    def list_users(self, actor: CurrentUser) -> list[UserRecord] | Failure:
        denied = check_access(actor, Action.LIST_USERS)
        if denied is not None:
            return denied
        return self.directory.list_all()

    def get_user(self, actor: CurrentUser, user_id: int) -> UserRecord | Failure:
        denied = check_access(actor, Action.GET_USER)
        if denied is not None:
            return denied
        user = self.directory.find_by_id(user_id)
        if user is None:
            return Failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
        return user

    def create_user(
        self,
        actor: CurrentUser,
        email: str,
        password: str,
        role: Role = Role.USER,
        admin_key: str | None = None,
    ) -> UserRecord | Failure:
        """
        Create a user on behalf of an admin.

        Requesting ADMIN without a matching admin key creates a USER instead.
        """
        denied = check_access(actor, Action.CREATE_USER)
        if denied is not None:
            return denied
        if not is_strong_password(password, self.password_min_length):
            return Failure(ErrorKind.WEAK_PASSWORD, password_requirement_message(self.password_min_length))

        if role == Role.ADMIN and not self._admin_key_matches(admin_key):
            logger.warning("User %s requested ADMIN role without a valid admin key; creating USER", actor.id)
            role = Role.USER

        if self.directory.find_by_email(email) is not None:
            return Failure(ErrorKind.DUPLICATE_USER, "User already exists")
        try:
            user = self.directory.create(email, self.hasher.hash(password), role)
        except DuplicateEmailError:
            return Failure(ErrorKind.DUPLICATE_USER, "User already exists")
        logger.info("User %s created a new user with id %s (role=%s).", actor.id, user.id, user.role.value)
        return user

    def update_user(
        self,
        actor: CurrentUser,
        user_id: int,
        email: str | None = None,
        password: str | None = None,
    ) -> UserRecord | Failure:
        denied = check_access(actor, Action.UPDATE_USER)
        if denied is not None:
            return denied
        if self.directory.find_by_id(user_id) is None:
            return Failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND)

        password_hash = None
        if password is not None:
            if not is_strong_password(password, self.password_min_length):
                return Failure(ErrorKind.WEAK_PASSWORD, "Provided password is weak.")
            password_hash = self.hasher.hash(password)

        try:
            updated = self.directory.update(user_id, email=email, password_hash=password_hash)
        except DuplicateEmailError:
            return Failure(ErrorKind.DUPLICATE_USER, "User already exists")
        if updated is None:
            return Failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
        logger.info("User %s updated user %s.", actor.id, updated.id)
        return updated

    def delete_user(self, actor: CurrentUser, user_id: int) -> None | Failure:
        denied = check_access(actor, Action.DELETE_USER)
        if denied is not None:
            return denied
        target = self.directory.find_by_id(user_id)
        if target is None:
            return Failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
        denied = check_access(actor, Action.DELETE_USER, target)
        if denied is not None:
            logger.warning("User %s was denied deleting user %s", actor.id, target.id)
            return denied
        if not self.directory.delete(user_id):
            return Failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
        logger.info("User %s deleted user %s.", actor.id, user_id)
        return None

    def _admin_key_matches(self, presented: str | None) -> bool:
        if not self.admin_key or not presented:
            return False
        return hmac.compare_digest(presented.encode("utf-8"), self.admin_key.encode("utf-8"))
