"""Role-based decisions for user-management operations."""

from enum import Enum

from app.core.errors import ErrorKind, Failure
from app.models import Role
from app.schemas.auth import CurrentUser
from app.services.user_directory import UserRecord


class Action(str, Enum):
    LIST_USERS = "list_users"
    GET_USER = "get_user"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"


# Minimum role per action; None means any authenticated user.
REQUIRED_ROLE: dict[Action, Role | None] = {
    Action.LIST_USERS: Role.ADMIN,
    Action.GET_USER: None,
    Action.CREATE_USER: Role.ADMIN,
    Action.UPDATE_USER: Role.ADMIN,
    Action.DELETE_USER: Role.ADMIN,
}


def check_access(
    actor: CurrentUser,
    action: Action,
    target: UserRecord | None = None,
) -> Failure | None:
    """Return None when actor may perform action on target, otherwise a FORBIDDEN Failure."""
    required = REQUIRED_ROLE[action]
    if required is not None and actor.role != required:
        return Failure(ErrorKind.FORBIDDEN, "Admin access required")

    if action is Action.DELETE_USER and target is not None:
        if target.role == Role.ADMIN:
            return Failure(ErrorKind.FORBIDDEN, "Forbidden - cannot delete admin")
        if target.id == actor.id:
            return Failure(ErrorKind.FORBIDDEN, "Forbidden - cannot delete your own account")
    return None


def can_perform(actor: CurrentUser, action: Action, target: UserRecord | None = None) -> bool:
    return check_access(actor, action, target) is None
