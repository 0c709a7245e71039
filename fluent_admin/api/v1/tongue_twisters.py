"""
Tongue-twister maintenance endpoints.
"""

from fastapi import APIRouter, Request

from fluent_admin.api.deps import AdminSubject, Context, DbSession, SuperAdminSubject, get_client_ip
from fluent_admin.kernel.mutations import ResourceType
from fluent_admin.schemas.common import BatchDeleteRequest, BatchDeleteResponse
from fluent_admin.schemas.content import TongueTwisterCleanupResponse
from fluent_admin.services import ModerationService, delete_batch

router = APIRouter()


@router.post("/delete-batch", response_model=BatchDeleteResponse)
async def delete_tongue_twisters(
    request: Request,
    data: BatchDeleteRequest,
    subject: AdminSubject,
    ctx: Context,
):
    result = await delete_batch(
        ctx.recorder,
        ctx.coordinator,
        subject,
        ResourceType.TONGUE_TWISTER,
        data.ids,
        ip_address=get_client_ip(request),
    )
    return BatchDeleteResponse.from_result(result, "Tongue twisters deleted")


@router.post("/clean", response_model=TongueTwisterCleanupResponse)
async def clean_tongue_twisters(
    request: Request,
    subject: SuperAdminSubject,
    ctx: Context,
    db: DbSession,
):
    """
    Remove blank entries and duplicate contents.

    For each content shared by several rows only the earliest row is kept.
    Runs as one transaction.
    """
    async with ctx.recorder.audited(
        subject, "CleanTongueTwisters", "TongueTwister", ip_address=get_client_ip(request)
    ) as entry:
        report = await ModerationService(db).clean_tongue_twisters()
        await db.commit()
        entry.detail = (
            f"CleanTongueTwisters succeeded: {report.deleted_blank_count} blank, "
            f"{report.deleted_duplicate_count} duplicate"
        )

    return TongueTwisterCleanupResponse(
        deleted_blank_count=report.deleted_blank_count,
        deleted_duplicate_count=report.deleted_duplicate_count,
    )
