"""
Operator authentication endpoints.
"""

from fastapi import APIRouter

from fluent_admin.api.deps import Context, CurrentSubject, DbSession
from fluent_admin.schemas.auth import LoginRequest, LoginResponse, SubjectResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, ctx: Context, db: DbSession):
    """
    Authenticate an operator and return an access token.

    Only admin and super_admin accounts may log in; every other failure
    returns the same 401.
    """
    user, token = await ctx.identity_service(db).authenticate(data.username, data.password)

    return LoginResponse(
        token=token.token,
        token_type=token.token_type,
        expires_in=token.expires_in,
        user_id=user.id,
        username=user.username,
        role=user.role,
    )


@router.get("/me", response_model=SubjectResponse)
async def get_me(subject: CurrentSubject):
    """Identity and role carried by the presented token."""
    return SubjectResponse(
        user_id=subject.identity_id,
        username=subject.username,
        role=subject.role,
        issued_at=subject.issued_at,
        expires_at=subject.expires_at,
    )
