"""Tests for the cascading mutation coordinator."""

import asyncio
import uuid

import pytest
from sqlalchemy import Column, MetaData, Table, Uuid, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fluent_admin.kernel.context import AdminContext
from fluent_admin.kernel.errors import TransactionError, ValidationError
from fluent_admin.kernel.models import (
    Comment,
    CommentLike,
    PracticeRoom,
    PracticeRoomMember,
    Post,
    PostCollection,
    PostLike,
)
from fluent_admin.kernel.mutations import (
    CASCADE_PLANS,
    CascadeCoordinator,
    CascadeState,
    CascadeStep,
    ResourceType,
)

from tests.conftest import count_rows

# Exists in metadata only; deleting from it fails inside the transaction
_missing = Table(
    "missing_table",
    MetaData(),
    Column("id", Uuid(), primary_key=True),
    Column("post_id", Uuid()),
)


def _plan_failing_at_comments() -> dict:
    plan = []
    for step in CASCADE_PLANS[ResourceType.POST]:
        if step.name == "comments":
            step = CascadeStep("comments", _missing, lambda ids: _missing.c.post_id.in_(ids))
        plan.append(step)
    plans = dict(CASCADE_PLANS)
    plans[ResourceType.POST] = tuple(plan)
    return plans


class SlowSession(AsyncSession):
    """Stalls on every statement after the first one."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.statements = 0

    async def execute(self, *args, **kwargs):
        self.statements += 1
        if self.statements > 1:
            await asyncio.sleep(1.0)
        return await super().execute(*args, **kwargs)


class TestPlans:

    def test_every_resource_type_has_a_plan(self):
        assert set(CASCADE_PLANS) == set(ResourceType)

    def test_post_children_before_parent(self):
        names = [step.name for step in CASCADE_PLANS[ResourceType.POST]]

        assert names == ["post_likes", "comment_likes", "comments", "post_collections", "posts"]

    def test_room_members_before_room(self):
        names = [step.name for step in CASCADE_PLANS[ResourceType.ROOM]]

        assert names == ["practice_room_members", "practice_rooms"]

    def test_comment_likes_before_comment(self):
        names = [step.name for step in CASCADE_PLANS[ResourceType.COMMENT]]

        assert names == ["comment_likes", "comments"]


@pytest.mark.asyncio
class TestDeleteWithDependents:

    async def test_post_cascade_removes_exactly_its_rows(self, ctx: AdminContext, post_graph: dict):
        target, bystander = post_graph["target"], post_graph["bystander"]

        result = await ctx.coordinator.delete_with_dependents(ResourceType.POST, [target])

        assert result.state == CascadeState.COMMITTED
        assert result.rows_deleted == {
            "post_likes": 2,
            "comment_likes": 2,
            "comments": 2,
            "post_collections": 1,
            "posts": 1,
        }
        assert result.total_rows == 8

        assert await count_rows(ctx, Post, Post.id == target) == 0
        assert await count_rows(ctx, PostLike, PostLike.post_id == target) == 0
        assert await count_rows(ctx, Comment, Comment.post_id == target) == 0
        assert await count_rows(ctx, PostCollection, PostCollection.post_id == target) == 0
        assert await count_rows(ctx, CommentLike, CommentLike.comment_id.in_(post_graph["target_comments"])) == 0

        # The other post is untouched
        assert await count_rows(ctx, Post, Post.id == bystander) == 1
        assert await count_rows(ctx, PostLike, PostLike.post_id == bystander) == 1
        assert await count_rows(ctx, Comment, Comment.post_id == bystander) == 1
        assert await count_rows(ctx, CommentLike) == 1
        assert await count_rows(ctx, PostCollection) == 1

    async def test_redelete_is_a_successful_no_op(self, ctx: AdminContext, post_graph: dict):
        await ctx.coordinator.delete_with_dependents(ResourceType.POST, [post_graph["target"]])

        again = await ctx.coordinator.delete_with_dependents(ResourceType.POST, [post_graph["target"]])

        assert again.state == CascadeState.COMMITTED
        assert again.total_rows == 0
        assert await count_rows(ctx, Post) == 1

    async def test_unknown_ids_are_not_an_error(self, ctx: AdminContext, post_graph: dict):
        result = await ctx.coordinator.delete_with_dependents(ResourceType.POST, [uuid.uuid4()])

        assert result.total_rows == 0
        assert await count_rows(ctx, Post) == 2

    async def test_batch_of_posts(self, ctx: AdminContext, post_graph: dict):
        ids = [post_graph["target"], post_graph["bystander"]]

        result = await ctx.coordinator.delete_with_dependents(ResourceType.POST, ids)

        assert result.rows_deleted["posts"] == 2
        assert await count_rows(ctx, Post) == 0
        assert await count_rows(ctx, CommentLike) == 0

    async def test_duplicate_and_string_ids_are_normalized(self, ctx: AdminContext, post_graph: dict):
        target = post_graph["target"]

        result = await ctx.coordinator.delete_with_dependents("post", [str(target), target])

        assert result.ids == [target]
        assert result.rows_deleted["posts"] == 1

    async def test_room_cascade(self, ctx: AdminContext, room_graph: dict):
        result = await ctx.coordinator.delete_with_dependents(ResourceType.ROOM, [room_graph["room"]])

        assert result.rows_deleted == {"practice_room_members": 2, "practice_rooms": 1}
        assert await count_rows(ctx, PracticeRoom) == 0
        assert await count_rows(ctx, PracticeRoomMember) == 0

    async def test_comment_cascade(self, ctx: AdminContext, post_graph: dict):
        first, second = post_graph["target_comments"]

        result = await ctx.coordinator.delete_with_dependents(ResourceType.COMMENT, [first])

        assert result.rows_deleted == {"comment_likes": 1, "comments": 1}
        assert await count_rows(ctx, Comment, Comment.id == second) == 1
        assert await count_rows(ctx, CommentLike, CommentLike.comment_id == second) == 1

    async def test_leaf_delete(self, ctx: AdminContext, post_graph: dict):
        async with ctx.session_maker() as session:
            like_ids = list(
                await session.scalars(select(PostLike.id).where(PostLike.post_id == post_graph["target"]))
            )

        result = await ctx.coordinator.delete_with_dependents(ResourceType.POST_LIKE, like_ids)

        assert result.rows_deleted == {"post_likes": 2}
        assert await count_rows(ctx, Post) == 2


@pytest.mark.asyncio
class TestValidation:

    async def test_empty_ids_rejected_before_any_transaction(self, ctx: AdminContext):
        def no_session():
            raise AssertionError("a session was opened")

        coordinator = CascadeCoordinator(no_session, timeout_seconds=5.0)

        with pytest.raises(ValidationError):
            await coordinator.delete_with_dependents(ResourceType.POST, [])

    async def test_malformed_id_rejected(self, ctx: AdminContext):
        with pytest.raises(ValidationError):
            await ctx.coordinator.delete_with_dependents(ResourceType.POST, ["not-a-uuid"])


@pytest.mark.asyncio
class TestRollback:

    async def test_fault_at_comments_leaves_everything(self, ctx: AdminContext, post_graph: dict):
        coordinator = CascadeCoordinator(ctx.session_maker, timeout_seconds=5.0, plans=_plan_failing_at_comments())

        with pytest.raises(TransactionError) as exc_info:
            await coordinator.delete_with_dependents(ResourceType.POST, [post_graph["target"]])

        assert exc_info.value.step == "comments"
        # Steps before the fault were rolled back too
        assert await count_rows(ctx, PostLike) == 3
        assert await count_rows(ctx, CommentLike) == 3
        assert await count_rows(ctx, Comment) == 3
        assert await count_rows(ctx, PostCollection) == 2
        assert await count_rows(ctx, Post) == 2

    async def test_deadline_cancels_and_rolls_back(self, ctx: AdminContext, post_graph: dict):
        slow_maker = async_sessionmaker(ctx.engine, class_=SlowSession, expire_on_commit=False)
        coordinator = CascadeCoordinator(slow_maker, timeout_seconds=0.3)

        with pytest.raises(TransactionError) as exc_info:
            await coordinator.delete_with_dependents(ResourceType.POST, [post_graph["target"]])

        # post_likes ran, then comment_likes stalled past the deadline
        assert exc_info.value.step == "comment_likes"
        assert await count_rows(ctx, PostLike) == 3
        assert await count_rows(ctx, Post) == 2

    async def test_coordinator_usable_after_rollback(self, ctx: AdminContext, post_graph: dict):
        failing = CascadeCoordinator(ctx.session_maker, timeout_seconds=5.0, plans=_plan_failing_at_comments())
        with pytest.raises(TransactionError):
            await failing.delete_with_dependents(ResourceType.POST, [post_graph["target"]])

        result = await ctx.coordinator.delete_with_dependents(ResourceType.POST, [post_graph["target"]])

        assert result.rows_deleted["posts"] == 1
