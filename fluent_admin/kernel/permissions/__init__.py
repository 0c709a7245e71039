"""
Permission Core - role-ordered access control.
"""

from fluent_admin.kernel.permissions.access_control import (
    ADMINISTRATIVE_ROLES,
    MINIMUM_ADMIN_ROLE,
    ROLE_RANK,
    authorize,
    is_administrative,
    role_satisfies,
)

__all__ = [
    "ADMINISTRATIVE_ROLES",
    "MINIMUM_ADMIN_ROLE",
    "ROLE_RANK",
    "authorize",
    "is_administrative",
    "role_satisfies",
]
