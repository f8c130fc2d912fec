"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func

from app.models.base import Base


class Role(str, enum.Enum):
    """Coarse privilege tag stored on each user."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'USER' or 'ADMIN'. password_hash holds a bcrypt digest and is never
    serialized into responses.
    """

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("role IN ('USER', 'ADMIN')", name="role"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
