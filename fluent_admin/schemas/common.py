"""
Common schema types used across the API.
"""

import uuid
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Body of every error response: a stable code plus a message."""

    code: str
    detail: str
    step: Optional[str] = None
    request_id: Optional[str] = None


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated list response."""

    items: List[T]
    total: int
    page: int = 1
    page_size: int = 20
    has_more: bool = False

    @classmethod
    def create(
        cls,
        items: List[T],
        total: int,
        page: int = 1,
        page_size: int = 20,
    ) -> "PaginatedResponse[T]":
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            has_more=(page * page_size) < total,
        )


class BatchDeleteRequest(BaseModel):
    """Ids to delete, together with everything that depends on them."""

    ids: List[uuid.UUID] = Field(..., min_length=1)


class BatchDeleteResponse(BaseModel):
    message: str
    deleted_ids: List[uuid.UUID]
    rows_deleted: Dict[str, int]
    total_rows: int

    @classmethod
    def from_result(cls, result, message: str) -> "BatchDeleteResponse":
        return cls(
            message=message,
            deleted_ids=result.ids,
            rows_deleted=result.rows_deleted,
            total_rows=result.total_rows,
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    database: str = "connected"
