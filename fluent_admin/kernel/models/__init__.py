"""
Kernel Data Models

SQLAlchemy models for identities, moderated content and the operation log.
"""

from fluent_admin.kernel.models.base import Base, TimestampMixin, generate_uuid
from fluent_admin.kernel.models.user import User, UserRole, UserStatus
from fluent_admin.kernel.models.community import (
    Post,
    PostLike,
    Comment,
    CommentLike,
    PostCollection,
)
from fluent_admin.kernel.models.room import PracticeRoom, PracticeRoomMember
from fluent_admin.kernel.models.training import TrainingRecord, TongueTwister
from fluent_admin.kernel.models.operation_log import OperationLog, OperationOutcome

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "generate_uuid",
    # Identity
    "User",
    "UserRole",
    "UserStatus",
    # Community
    "Post",
    "PostLike",
    "Comment",
    "CommentLike",
    "PostCollection",
    # Rooms
    "PracticeRoom",
    "PracticeRoomMember",
    # Training
    "TrainingRecord",
    "TongueTwister",
    # Audit
    "OperationLog",
    "OperationOutcome",
]
