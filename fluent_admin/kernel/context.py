"""
Application context.

Everything the request handlers share (engine, session factory, token
manager, clock, audit recorder, cascade coordinator) is built once per
application and passed around explicitly. There are no module-level
singletons to patch in tests; build a context with different settings or a
frozen clock instead.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fluent_admin.config import Settings
from fluent_admin.database import build_engine, build_session_maker, init_db
from fluent_admin.kernel.audit import AuditRecorder
from fluent_admin.kernel.clock import Clock, SystemClock
from fluent_admin.kernel.identity import IdentityService, PasswordHasher, TokenManager
from fluent_admin.kernel.mutations import CascadeCoordinator


@dataclass
class AdminContext:
    settings: Settings
    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    clock: Clock
    hasher: PasswordHasher
    token_manager: TokenManager
    recorder: AuditRecorder
    coordinator: CascadeCoordinator

    def identity_service(self, session: AsyncSession) -> IdentityService:
        """Identity service bound to a request-scoped session."""
        return IdentityService(session, self.hasher, self.token_manager, self.clock)

    async def initialize(self) -> None:
        """Create missing tables and the bootstrap super admin."""
        await init_db(self.engine)
        async with self.session_maker() as session:
            async with session.begin():
                await self.identity_service(session).ensure_bootstrap_admin(
                    self.settings.bootstrap_admin_username,
                    self.settings.bootstrap_admin_password,
                )

    async def dispose(self) -> None:
        await self.engine.dispose()


def build_context(
    settings: Settings,
    clock: Optional[Clock] = None,
    hasher: Optional[PasswordHasher] = None,
) -> AdminContext:
    """Wire up the shared components for one application instance."""
    clock = clock or SystemClock()
    engine = build_engine(settings)
    session_maker = build_session_maker(engine)

    return AdminContext(
        settings=settings,
        engine=engine,
        session_maker=session_maker,
        clock=clock,
        hasher=hasher or PasswordHasher(),
        token_manager=TokenManager(
            secret_key=settings.secret_key,
            clock=clock,
            algorithm=settings.algorithm,
            access_token_expire_minutes=settings.access_token_expire_minutes,
        ),
        recorder=AuditRecorder(session_maker),
        coordinator=CascadeCoordinator(
            session_maker,
            timeout_seconds=settings.cascade_timeout_seconds,
        ),
    )
