"""
User model for identity management.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Enum as SAEnum, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fluent_admin.kernel.models.base import Base, TimestampMixin, generate_uuid


class UserRole(str, Enum):
    """
    Closed set of roles.

    Declaration order is the privilege order: each role satisfies every
    requirement of the roles above it.
    """
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class UserStatus(int, Enum):
    DISABLED = 0
    ENABLED = 1


class User(Base, TimestampMixin):
    """Platform account; operators are users with an administrative role."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(20),
        unique=True,
        nullable=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    # Stored as its string value; unknown values fail on load
    role: Mapped[UserRole] = mapped_column(
        SAEnum(
            UserRole,
            native_enum=False,
            length=50,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        default=UserRole.USER,
        nullable=False,
    )
    status: Mapped[int] = mapped_column(
        Integer,
        default=UserStatus.ENABLED.value,
        nullable=False,
    )
    gender: Mapped[Optional[str]] = mapped_column(
        String(10),
        nullable=True,
    )
    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def is_enabled(self) -> bool:
        return self.status == UserStatus.ENABLED.value

    def __repr__(self) -> str:
        return f"<User {self.username} role={self.role.value}>"
