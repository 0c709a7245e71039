"""
Operator account administration. Super admins only.
"""

import uuid

from fastapi import APIRouter, Request, status

from fluent_admin.api.deps import Context, DbSession, SuperAdminSubject, get_client_ip
from fluent_admin.schemas.user import UserCreateRequest, UserResponse, UserUpdateRequest

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreateRequest,
    request: Request,
    subject: SuperAdminSubject,
    ctx: Context,
    db: DbSession,
):
    """
    Create an account.

    A taken username, email or phone returns 409.
    """
    async with ctx.recorder.audited(
        subject, "CreateUser", "User", ip_address=get_client_ip(request)
    ) as entry:
        user = await ctx.identity_service(db).create_user(
            username=data.username,
            password=data.password,
            role=data.role,
            status=data.status,
            email=data.email,
            phone=data.phone,
            gender=data.gender,
        )
        await db.commit()
        entry.resource_id = str(user.id)
        entry.detail = f"CreateUser succeeded: {user.username} ({user.role.value})"

    await db.refresh(user)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: uuid.UUID,
    data: UserUpdateRequest,
    request: Request,
    subject: SuperAdminSubject,
    ctx: Context,
    db: DbSession,
):
    """Update an account; omitted fields are left unchanged."""
    async with ctx.recorder.audited(
        subject, "UpdateUser", "User", user_id, ip_address=get_client_ip(request)
    ):
        user = await ctx.identity_service(db).update_user(
            user_id,
            username=data.username,
            password=data.password,
            role=data.role,
            status=data.status,
            email=data.email,
            phone=data.phone,
            gender=data.gender,
        )
        await db.commit()

    await db.refresh(user)
    return UserResponse.model_validate(user)
