"""
Operator account administration schemas.
"""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from fluent_admin.kernel.identity.identity_service import MIN_PASSWORD_LENGTH
from fluent_admin.kernel.models.user import UserRole


class UserCreateRequest(BaseModel):
    """Create an account. ``role`` must be one of the known roles."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    role: UserRole = UserRole.USER
    status: Literal[0, 1] = 1
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    gender: Optional[str] = Field(None, max_length=10)


class UserUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    username: Optional[str] = Field(None, min_length=1, max_length=50)
    password: Optional[str] = Field(None, min_length=MIN_PASSWORD_LENGTH, max_length=128)
    role: Optional[UserRole] = None
    status: Optional[Literal[0, 1]] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    gender: Optional[str] = Field(None, max_length=10)


class UserResponse(BaseModel):
    """Account view. The password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    role: UserRole
    status: int
    email: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
