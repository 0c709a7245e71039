"""
Practice rooms and their members.
"""

import uuid
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fluent_admin.kernel.models.base import Base, TimestampMixin, generate_uuid


class PracticeRoom(Base, TimestampMixin):
    """A live speaking-practice room."""

    __tablename__ = "practice_rooms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=generate_uuid)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    theme: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    max_members: Mapped[int] = mapped_column(Integer, default=10, nullable=False)
    current_members: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<PracticeRoom {self.title} active={self.is_active}>"


class PracticeRoomMember(Base, TimestampMixin):
    __tablename__ = "practice_room_members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=generate_uuid)
    room_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("practice_rooms.id"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)
