"""
Pydantic schemas for API request/response validation.
"""

from fluent_admin.schemas.auth import LoginRequest, LoginResponse, SubjectResponse
from fluent_admin.schemas.common import (
    BatchDeleteRequest,
    BatchDeleteResponse,
    ErrorResponse,
    HealthResponse,
    PaginatedResponse,
)
from fluent_admin.schemas.content import (
    CommentResponse,
    CommentUpdateRequest,
    RoomResponse,
    TongueTwisterCleanupResponse,
)
from fluent_admin.schemas.operation_log import OperationLogResponse
from fluent_admin.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "SubjectResponse",
    # Common
    "BatchDeleteRequest",
    "BatchDeleteResponse",
    "ErrorResponse",
    "HealthResponse",
    "PaginatedResponse",
    # Content
    "CommentResponse",
    "CommentUpdateRequest",
    "RoomResponse",
    "TongueTwisterCleanupResponse",
    # Audit
    "OperationLogResponse",
    # Users
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
]
