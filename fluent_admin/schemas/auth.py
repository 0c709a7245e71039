"""
Authentication schemas.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from fluent_admin.kernel.models.user import UserRole


class LoginRequest(BaseModel):
    """Operator login request."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    """Access token plus the identity it was issued to."""

    token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: uuid.UUID
    username: str
    role: UserRole


class SubjectResponse(BaseModel):
    """The caller as seen through their token."""

    user_id: uuid.UUID
    username: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime
