"""
Content moderation: single-row edits and the tongue-twister cleanup.

These run on the request session. Callers commit inside their audit block so
that a failed commit is recorded as a failed operation.
"""

import uuid
from dataclasses import dataclass

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fluent_admin.kernel.errors import NotFound, TransactionError, ValidationError
from fluent_admin.kernel.models import Comment, PracticeRoom, TongueTwister
from fluent_admin.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class TongueTwisterCleanup:
    deleted_blank_count: int = 0
    deleted_duplicate_count: int = 0


class ModerationService:
    """Moderator edits that sit outside the cascade coordinator."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def toggle_room(self, room_id: uuid.UUID) -> PracticeRoom:
        """
        Flip a room's ``is_active`` flag.

        Raises:
            NotFound: no such room
        """
        room = await self.session.get(PracticeRoom, room_id)
        if room is None:
            raise NotFound("Room not found")
        room.is_active = not room.is_active
        await self.session.flush()
        return room

    async def update_comment(self, comment_id: uuid.UUID, content: str) -> Comment:
        """
        Replace a comment's text.

        Raises:
            ValidationError: content is blank
            NotFound: no such comment
        """
        if not content.strip():
            raise ValidationError("Comment content must not be blank")
        comment = await self.session.get(Comment, comment_id)
        if comment is None:
            raise NotFound("Comment not found")
        comment.content = content
        await self.session.flush()
        return comment

    async def clean_tongue_twisters(self) -> TongueTwisterCleanup:
        """
        Remove blank tongue twisters, then duplicates by content.

        The earliest row of each content group is kept (ties broken by id).
        Both deletes happen in the session's transaction; on failure the
        session is rolled back and nothing is removed.

        Raises:
            TransactionError: either delete failed
        """
        report = TongueTwisterCleanup()
        step = "delete_blank"
        try:
            blank = await self.session.execute(
                delete(TongueTwister)
                .where(
                    or_(
                        func.trim(TongueTwister.title) == "",
                        func.trim(TongueTwister.content) == "",
                    )
                )
                .execution_options(synchronize_session=False)
            )
            report.deleted_blank_count = max(blank.rowcount or 0, 0)

            step = "delete_duplicates"
            ranked = select(
                TongueTwister.id,
                func.row_number()
                .over(
                    partition_by=TongueTwister.content,
                    order_by=(TongueTwister.created_at, TongueTwister.id),
                )
                .label("rn"),
            ).subquery()
            duplicates = await self.session.execute(
                delete(TongueTwister)
                .where(TongueTwister.id.in_(select(ranked.c.id).where(ranked.c.rn > 1)))
                .execution_options(synchronize_session=False)
            )
            report.deleted_duplicate_count = max(duplicates.rowcount or 0, 0)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise TransactionError(step) from exc

        logger.info(
            "Tongue twisters cleaned",
            extra={
                "deleted_blank_count": report.deleted_blank_count,
                "deleted_duplicate_count": report.deleted_duplicate_count,
            },
        )
        return report
