"""
Comment moderation endpoints.
"""

import uuid

from fastapi import APIRouter, Request

from fluent_admin.api.deps import AdminSubject, Context, DbSession, get_client_ip
from fluent_admin.kernel.mutations import ResourceType
from fluent_admin.schemas.common import BatchDeleteRequest, BatchDeleteResponse
from fluent_admin.schemas.content import CommentResponse, CommentUpdateRequest
from fluent_admin.services import ModerationService, delete_batch

router = APIRouter()


@router.post("/delete-batch", response_model=BatchDeleteResponse)
async def delete_comments(
    request: Request,
    data: BatchDeleteRequest,
    subject: AdminSubject,
    ctx: Context,
):
    """Delete comments and the likes on them in one transaction."""
    result = await delete_batch(
        ctx.recorder,
        ctx.coordinator,
        subject,
        ResourceType.COMMENT,
        data.ids,
        ip_address=get_client_ip(request),
    )
    return BatchDeleteResponse.from_result(result, "Comments deleted")


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: uuid.UUID,
    data: CommentUpdateRequest,
    request: Request,
    subject: AdminSubject,
    ctx: Context,
    db: DbSession,
):
    """Replace the text of a comment."""
    async with ctx.recorder.audited(
        subject, "UpdateComment", "Comment", comment_id, ip_address=get_client_ip(request)
    ):
        comment = await ModerationService(db).update_comment(comment_id, data.content)
        await db.commit()

    await db.refresh(comment)
    return CommentResponse.model_validate(comment)
