"""
Pytest fixtures for the admin API tests.

Every test gets its own SQLite file, so tests never share rows.
"""

import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fluent_admin.config import Settings
from fluent_admin.kernel.clock import FrozenClock
from fluent_admin.kernel.context import AdminContext, build_context
from fluent_admin.kernel.identity import PasswordHasher
from fluent_admin.kernel.models import (
    Comment,
    CommentLike,
    PracticeRoom,
    PracticeRoomMember,
    Post,
    PostCollection,
    PostLike,
    User,
    UserRole,
)

TEST_SECRET_KEY = "test-secret-key-for-testing-only-0123456789"
ADMIN_PASSWORD = "operator-pass"
MEMBER_PASSWORD = "member-pass"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'admin_test.db'}",
        secret_key=TEST_SECRET_KEY,
        access_token_expire_minutes=60,
        cascade_timeout_seconds=5.0,
        bootstrap_admin_username="admin",
        bootstrap_admin_password="admin123",
        environment="test",
    )


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def hasher() -> PasswordHasher:
    """Cheap bcrypt cost so the suite stays fast."""
    return PasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def ctx(settings: Settings, clock: FrozenClock, hasher: PasswordHasher) -> AsyncGenerator[AdminContext, None]:
    """Initialized application context (tables plus the bootstrap super admin)."""
    context = build_context(settings, clock=clock, hasher=hasher)
    await context.initialize()
    yield context
    await context.dispose()


@pytest_asyncio.fixture
async def db_session(ctx: AdminContext) -> AsyncGenerator[AsyncSession, None]:
    async with ctx.session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(ctx: AdminContext, settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client talking to the app in-process."""
    from fluent_admin.main import create_app

    app = create_app(settings, context=ctx)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


async def create_account(
    ctx: AdminContext,
    username: str,
    password: str,
    role: UserRole,
    status: int = 1,
) -> User:
    async with ctx.session_maker() as session:
        async with session.begin():
            user = await ctx.identity_service(session).create_user(
                username, password, role=role, status=status
            )
    return user


@pytest_asyncio.fixture
async def admin_user(ctx: AdminContext) -> User:
    return await create_account(ctx, "operator", ADMIN_PASSWORD, UserRole.ADMIN)


@pytest_asyncio.fixture
async def member_user(ctx: AdminContext) -> User:
    return await create_account(ctx, "member", MEMBER_PASSWORD, UserRole.USER)


@pytest_asyncio.fixture
async def super_admin_user(ctx: AdminContext) -> User:
    """The bootstrap account."""
    async with ctx.session_maker() as session:
        return await ctx.identity_service(session).get_user_by_username("admin")


def bearer(ctx: AdminContext, user: User) -> dict:
    token = ctx.token_manager.issue(user.id, user.role, user.username)
    return {"Authorization": f"Bearer {token.token}"}


@pytest.fixture
def admin_headers(ctx: AdminContext, admin_user: User) -> dict:
    return bearer(ctx, admin_user)


@pytest.fixture
def member_headers(ctx: AdminContext, member_user: User) -> dict:
    return bearer(ctx, member_user)


@pytest.fixture
def super_admin_headers(ctx: AdminContext, super_admin_user: User) -> dict:
    return bearer(ctx, super_admin_user)


async def count_rows(ctx: AdminContext, model, *criteria) -> int:
    async with ctx.session_maker() as session:
        query = select(func.count()).select_from(model)
        for criterion in criteria:
            query = query.where(criterion)
        return await session.scalar(query)


@pytest_asyncio.fixture
async def post_graph(ctx: AdminContext) -> dict:
    """
    Two posts with likes, comments, comment likes and collections.

    ``target`` is meant to be deleted; ``bystander`` must survive.
    """
    author = uuid.uuid4()
    fans = [uuid.uuid4() for _ in range(3)]

    async with ctx.session_maker() as session:
        async with session.begin():
            target = Post(user_id=author, content="target post")
            bystander = Post(user_id=author, content="bystander post")
            session.add_all([target, bystander])
            await session.flush()

            session.add_all([PostLike(post_id=target.id, user_id=fan) for fan in fans[:2]])
            session.add(PostLike(post_id=bystander.id, user_id=fans[0]))

            target_comments = [
                Comment(post_id=target.id, user_id=fans[0], content="first"),
                Comment(post_id=target.id, user_id=fans[1], content="second"),
            ]
            bystander_comment = Comment(post_id=bystander.id, user_id=fans[2], content="other")
            session.add_all(target_comments + [bystander_comment])
            await session.flush()

            session.add_all([CommentLike(comment_id=c.id, user_id=fans[2]) for c in target_comments])
            session.add(CommentLike(comment_id=bystander_comment.id, user_id=fans[0]))

            session.add(PostCollection(post_id=target.id, user_id=fans[1]))
            session.add(PostCollection(post_id=bystander.id, user_id=fans[1]))

    return {
        "target": target.id,
        "bystander": bystander.id,
        "target_comments": [c.id for c in target_comments],
        "bystander_comment": bystander_comment.id,
    }


@pytest_asyncio.fixture
async def room_graph(ctx: AdminContext) -> dict:
    """One room with two members."""
    async with ctx.session_maker() as session:
        async with session.begin():
            room = PracticeRoom(user_id=uuid.uuid4(), title="Morning drills", theme="fluency", type="open")
            session.add(room)
            await session.flush()
            session.add_all([PracticeRoomMember(room_id=room.id, user_id=uuid.uuid4()) for _ in range(2)])
    return {"room": room.id}
