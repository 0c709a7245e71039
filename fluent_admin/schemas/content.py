"""
Moderated content schemas (rooms, comments, tongue twisters).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    theme: str
    type: str
    description: Optional[str] = None
    max_members: int
    current_members: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CommentUpdateRequest(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    post_id: uuid.UUID
    user_id: uuid.UUID
    content: str
    likes_count: int
    created_at: datetime
    updated_at: datetime


class TongueTwisterCleanupResponse(BaseModel):
    """Counts of rows removed by a cleanup run."""

    deleted_blank_count: int
    deleted_duplicate_count: int
