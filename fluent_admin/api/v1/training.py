"""
Training record endpoints.
"""

from fastapi import APIRouter, Request

from fluent_admin.api.deps import AdminSubject, Context, get_client_ip
from fluent_admin.kernel.mutations import ResourceType
from fluent_admin.schemas.common import BatchDeleteRequest, BatchDeleteResponse
from fluent_admin.services import delete_batch

router = APIRouter()


@router.post("/records/delete-batch", response_model=BatchDeleteResponse)
async def delete_training_records(
    request: Request,
    data: BatchDeleteRequest,
    subject: AdminSubject,
    ctx: Context,
):
    result = await delete_batch(
        ctx.recorder,
        ctx.coordinator,
        subject,
        ResourceType.TRAINING_RECORD,
        data.ids,
        ip_address=get_client_ip(request),
    )
    return BatchDeleteResponse.from_result(result, "Training records deleted")
