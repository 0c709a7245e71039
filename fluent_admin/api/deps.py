"""
FastAPI dependencies for authentication, authorization, and database sessions.
"""

from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fluent_admin.kernel.context import AdminContext
from fluent_admin.kernel.errors import Unauthenticated
from fluent_admin.kernel.identity import TokenSubject
from fluent_admin.kernel.models.user import UserRole
from fluent_admin.kernel.permissions import MINIMUM_ADMIN_ROLE, authorize


# Security scheme
security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AdminContext:
    """The application context built at startup."""
    return request.app.state.context


Context = Annotated[AdminContext, Depends(get_context)]


async def get_db(ctx: Context) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields database sessions."""
    async with ctx.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_subject(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    ctx: Context,
) -> TokenSubject:
    """Validated token subject, or 401."""
    if not credentials:
        raise Unauthenticated()
    return ctx.token_manager.validate(credentials.credentials)


CurrentSubject = Annotated[TokenSubject, Depends(get_current_subject)]


def get_client_ip(request: Request) -> Optional[str]:
    """Extract client IP from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


class RoleChecker:
    """
    Dependency class requiring a minimum role.

    Usage:
        @router.post("/rooms/delete-batch")
        async def delete_rooms(
            subject: Annotated[TokenSubject, Depends(RoleChecker(UserRole.ADMIN))],
        ):
            ...
    """

    def __init__(self, required_role: UserRole):
        self.required_role = required_role

    async def __call__(self, subject: CurrentSubject) -> TokenSubject:
        authorize(subject.role, self.required_role)
        return subject


# Convenience role dependencies
AdminSubject = Annotated[TokenSubject, Depends(RoleChecker(MINIMUM_ADMIN_ROLE))]
SuperAdminSubject = Annotated[TokenSubject, Depends(RoleChecker(UserRole.SUPER_ADMIN))]
