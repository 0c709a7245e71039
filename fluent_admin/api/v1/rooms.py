"""
Practice room moderation endpoints.
"""

import uuid

from fastapi import APIRouter, Request

from fluent_admin.api.deps import AdminSubject, Context, DbSession, get_client_ip
from fluent_admin.kernel.mutations import ResourceType
from fluent_admin.schemas.common import BatchDeleteRequest, BatchDeleteResponse
from fluent_admin.schemas.content import RoomResponse
from fluent_admin.services import ModerationService, delete_batch

router = APIRouter()


@router.post("/delete-batch", response_model=BatchDeleteResponse)
async def delete_rooms(
    request: Request,
    data: BatchDeleteRequest,
    subject: AdminSubject,
    ctx: Context,
):
    """Delete rooms and their member rows in one transaction."""
    result = await delete_batch(
        ctx.recorder,
        ctx.coordinator,
        subject,
        ResourceType.ROOM,
        data.ids,
        ip_address=get_client_ip(request),
    )
    return BatchDeleteResponse.from_result(result, "Rooms deleted")


@router.patch("/{room_id}/toggle", response_model=RoomResponse)
async def toggle_room(
    room_id: uuid.UUID,
    request: Request,
    subject: AdminSubject,
    ctx: Context,
    db: DbSession,
):
    """Open a closed room or close an open one."""
    async with ctx.recorder.audited(
        subject, "ToggleRoom", "PracticeRoom", room_id, ip_address=get_client_ip(request)
    ) as entry:
        room = await ModerationService(db).toggle_room(room_id)
        await db.commit()
        entry.detail = f"ToggleRoom succeeded: is_active={room.is_active}"

    await db.refresh(room)
    return RoomResponse.model_validate(room)
