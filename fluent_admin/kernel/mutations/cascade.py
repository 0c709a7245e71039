"""
Cascading mutation coordinator.

Deleting a parent row means deleting everything that references it first.
The dependency graph is written down once, per resource type, as an ordered
list of delete steps (children before parents). One routine interprets any
plan inside a single transaction: either every step commits or none does.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fluent_admin.kernel.errors import TransactionError, ValidationError
from fluent_admin.kernel.models import (
    Comment,
    CommentLike,
    PracticeRoom,
    PracticeRoomMember,
    Post,
    PostCollection,
    PostLike,
    TongueTwister,
    TrainingRecord,
)
from fluent_admin.logging_config import get_logger

logger = get_logger(__name__)


class ResourceType(str, Enum):
    """Resource types that can be batch-deleted through the coordinator."""

    POST = "post"
    ROOM = "room"
    COMMENT = "comment"
    TRAINING_RECORD = "training_record"
    POST_LIKE = "post_like"
    POST_COLLECTION = "post_collection"
    TONGUE_TWISTER = "tongue_twister"


class CascadeState(str, Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    IN_TRANSACTION = "in_transaction"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


Criteria = Callable[[Sequence[uuid.UUID]], ColumnElement[bool]]


@dataclass(frozen=True)
class CascadeStep:
    """Delete the rows of ``model`` selected by ``criteria(ids)``."""

    name: str
    model: type
    criteria: Criteria

    def statement(self, ids: Sequence[uuid.UUID]):
        return (
            delete(self.model)
            .where(self.criteria(ids))
            .execution_options(synchronize_session=False)
        )


def _by(column) -> Criteria:
    return lambda ids: column.in_(ids)


def _likes_on_post_comments(ids: Sequence[uuid.UUID]) -> ColumnElement[bool]:
    return CommentLike.comment_id.in_(select(Comment.id).where(Comment.post_id.in_(ids)))


CascadePlan = Tuple[CascadeStep, ...]

CASCADE_PLANS: Dict[ResourceType, CascadePlan] = {
    ResourceType.POST: (
        CascadeStep("post_likes", PostLike, _by(PostLike.post_id)),
        CascadeStep("comment_likes", CommentLike, _likes_on_post_comments),
        CascadeStep("comments", Comment, _by(Comment.post_id)),
        CascadeStep("post_collections", PostCollection, _by(PostCollection.post_id)),
        CascadeStep("posts", Post, _by(Post.id)),
    ),
    ResourceType.ROOM: (
        CascadeStep("practice_room_members", PracticeRoomMember, _by(PracticeRoomMember.room_id)),
        CascadeStep("practice_rooms", PracticeRoom, _by(PracticeRoom.id)),
    ),
    ResourceType.COMMENT: (
        CascadeStep("comment_likes", CommentLike, _by(CommentLike.comment_id)),
        CascadeStep("comments", Comment, _by(Comment.id)),
    ),
    ResourceType.TRAINING_RECORD: (
        CascadeStep("training_records", TrainingRecord, _by(TrainingRecord.id)),
    ),
    ResourceType.POST_LIKE: (
        CascadeStep("post_likes", PostLike, _by(PostLike.id)),
    ),
    ResourceType.POST_COLLECTION: (
        CascadeStep("post_collections", PostCollection, _by(PostCollection.id)),
    ),
    ResourceType.TONGUE_TWISTER: (
        CascadeStep("tongue_twisters", TongueTwister, _by(TongueTwister.id)),
    ),
}


@dataclass
class CascadeResult:
    """Outcome of a committed cascade."""

    resource_type: ResourceType
    ids: List[uuid.UUID]
    rows_deleted: Dict[str, int] = field(default_factory=dict)
    state: CascadeState = CascadeState.COMMITTED

    @property
    def total_rows(self) -> int:
        return sum(self.rows_deleted.values())


@dataclass
class _Progress:
    state: CascadeState = CascadeState.RECEIVED
    step: Optional[str] = None


def normalize_ids(ids: Iterable[Union[str, uuid.UUID]]) -> List[uuid.UUID]:
    """
    Parse and de-duplicate ids, keeping first-seen order.

    Raises:
        ValidationError: no ids, or an id that is not a UUID
    """
    if ids is None:
        raise ValidationError("ids must be a non-empty list")
    seen: Dict[uuid.UUID, None] = {}
    for raw in ids:
        try:
            seen[raw if isinstance(raw, uuid.UUID) else uuid.UUID(str(raw))] = None
        except ValueError:
            raise ValidationError(f"Invalid id: {raw!r}")
    if not seen:
        raise ValidationError("ids must be a non-empty list")
    return list(seen)


class CascadeCoordinator:
    """
    Runs batch deletes with their dependents as one atomic unit.

    Steps run strictly one after another in one transaction; any failure,
    cancellation or deadline overrun rolls the whole batch back.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        timeout_seconds: Optional[float] = None,
        plans: Mapping[ResourceType, Sequence[CascadeStep]] = CASCADE_PLANS,
    ):
        self.session_maker = session_maker
        self.timeout_seconds = timeout_seconds
        self.plans = plans

    async def delete_with_dependents(
        self,
        resource_type: ResourceType,
        ids: Iterable[Union[str, uuid.UUID]],
    ) -> CascadeResult:
        """
        Delete ``ids`` of ``resource_type`` and every dependent row.

        Ids that no longer exist are not an error, so retrying a batch is safe.

        Raises:
            ValidationError: empty or malformed id list (no transaction opened)
            TransactionError: a step failed or the deadline passed; nothing
                was deleted. ``step`` names the failing step.
        """
        progress = _Progress()
        resource_type = ResourceType(resource_type)

        progress.state = CascadeState.VALIDATING
        id_list = normalize_ids(ids)
        plan = tuple(self.plans[resource_type])

        try:
            rows = await asyncio.wait_for(
                self._run(plan, id_list, progress),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            progress.state = CascadeState.ROLLED_BACK
            step = progress.step or plan[0].name
            logger.error(
                "Cascade deadline exceeded, rolled back",
                extra={"resource_type": resource_type.value, "step": step, "count": len(id_list)},
            )
            raise TransactionError(step, f"Transaction timed out at step '{step}'")
        except TransactionError as exc:
            logger.error(
                "Cascade step failed, rolled back",
                extra={"resource_type": resource_type.value, "step": exc.step, "count": len(id_list)},
            )
            raise

        logger.info(
            "Cascade committed",
            extra={"resource_type": resource_type.value, "count": len(id_list), "rows": rows},
        )
        return CascadeResult(
            resource_type=resource_type,
            ids=id_list,
            rows_deleted=rows,
            state=progress.state,
        )

    async def _run(
        self,
        plan: Sequence[CascadeStep],
        ids: List[uuid.UUID],
        progress: _Progress,
    ) -> Dict[str, int]:
        rows: Dict[str, int] = {}
        async with self.session_maker() as session:
            try:
                # begin() rolls back on any exception, cancellation included
                async with session.begin():
                    progress.state = CascadeState.IN_TRANSACTION
                    for step in plan:
                        progress.step = step.name
                        result = await session.execute(step.statement(ids))
                        rows[step.name] = rows.get(step.name, 0) + max(result.rowcount or 0, 0)
                    progress.step = "commit"
            except SQLAlchemyError as exc:
                progress.state = CascadeState.ROLLED_BACK
                raise TransactionError(progress.step or "begin") from exc
        progress.state = CascadeState.COMMITTED
        return rows
