"""
Application services used by the API routers.
"""

from fluent_admin.services.batch_delete import AUDIT_NAMES, delete_batch
from fluent_admin.services.moderation import ModerationService, TongueTwisterCleanup

__all__ = [
    "AUDIT_NAMES",
    "delete_batch",
    "ModerationService",
    "TongueTwisterCleanup",
]
