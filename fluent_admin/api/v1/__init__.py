"""
API v1 routes.
"""

from fastapi import APIRouter

from fluent_admin.api.v1 import (
    auth,
    comments,
    interactions,
    operation_logs,
    posts,
    rooms,
    tongue_twisters,
    training,
    users,
)
from fluent_admin.schemas.common import ErrorResponse

# Every admin route answers failures with the same {code, detail} body
ERROR_RESPONSES = {
    status_code: {"model": ErrorResponse}
    for status_code in (401, 403, 404, 409, 422, 500)
}

router = APIRouter(responses=ERROR_RESPONSES)

router.include_router(auth.router, prefix="/admin", tags=["Authentication"])
router.include_router(posts.router, prefix="/admin/posts", tags=["Posts"])
router.include_router(rooms.router, prefix="/admin/rooms", tags=["Rooms"])
router.include_router(comments.router, prefix="/admin/comments", tags=["Comments"])
router.include_router(training.router, prefix="/admin/training", tags=["Training"])
router.include_router(interactions.router, prefix="/admin", tags=["Likes & Collections"])
router.include_router(tongue_twisters.router, prefix="/admin/tongue-twisters", tags=["Tongue Twisters"])
router.include_router(users.router, prefix="/admin/users", tags=["Users"])
router.include_router(operation_logs.router, prefix="/admin/operation-logs", tags=["Operation Logs"])
