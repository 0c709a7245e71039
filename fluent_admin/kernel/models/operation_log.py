"""
Operation log for the admin audit trail.

This table is append-only: rows are inserted by the audit recorder and
never updated or deleted by the application.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from fluent_admin.kernel.models.base import Base, generate_uuid


class OperationOutcome(str, Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"


class OperationLog(Base):
    """One line per top-level administrative mutation."""

    __tablename__ = "operation_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )

    # Actor (denormalised so the record survives account changes)
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid(), nullable=True, index=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    user_role: Mapped[str] = mapped_column(String(50), nullable=False)

    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    resource: Mapped[str] = mapped_column(String(100), nullable=False)
    # Comma-joined for batch operations
    resource_id: Mapped[str] = mapped_column(Text, nullable=False, default="")
    details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    request_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        Index("ix_operation_logs_resource_time", "resource", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<OperationLog {self.action} {self.resource}:{self.resource_id} {self.status}>"
