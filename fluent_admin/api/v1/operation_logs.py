"""
Operation log (audit trail) read endpoints.
"""

import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query

from fluent_admin.api.deps import AdminSubject, Context
from fluent_admin.kernel.models import OperationOutcome
from fluent_admin.schemas.common import PaginatedResponse
from fluent_admin.schemas.operation_log import OperationLogResponse

router = APIRouter()


@router.get("", response_model=PaginatedResponse[OperationLogResponse])
async def list_operation_logs(
    subject: AdminSubject,
    ctx: Context,
    action: Optional[str] = None,
    resource: Optional[str] = None,
    status: Optional[OperationOutcome] = None,
    username: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    """Newest first. ``action`` and ``username`` match as substrings."""
    records, total = await ctx.recorder.list_records(
        action=action,
        resource=resource,
        status=status.value if status else None,
        username=username,
        start=start_date,
        end=end_date,
        page=page,
        page_size=page_size,
    )
    return PaginatedResponse.create(
        items=[OperationLogResponse.model_validate(r) for r in records],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{log_id}", response_model=OperationLogResponse)
async def get_operation_log(log_id: uuid.UUID, subject: AdminSubject, ctx: Context):
    return OperationLogResponse.model_validate(await ctx.recorder.get_record(log_id))
