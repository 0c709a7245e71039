"""
Role-based access control for the admin surface.

Roles form a total order; a subject is allowed an operation when its role
ranks at or above the operation's required role.
"""

from fluent_admin.kernel.errors import Forbidden
from fluent_admin.kernel.models.user import UserRole


# Role hierarchy - higher ranks include all lower ranks
ROLE_RANK = {
    UserRole.USER: 0,
    UserRole.ADMIN: 1,
    UserRole.SUPER_ADMIN: 2,
}

# Roles allowed through the admin login surface
ADMINISTRATIVE_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})

# Lowest role that may use any admin route
MINIMUM_ADMIN_ROLE = UserRole.ADMIN


def role_satisfies(subject_role: UserRole, required_role: UserRole) -> bool:
    """True when ``subject_role`` ranks at or above ``required_role``."""
    return ROLE_RANK[UserRole(subject_role)] >= ROLE_RANK[UserRole(required_role)]


def authorize(subject_role: UserRole, required_role: UserRole) -> None:
    """
    Allow or deny an operation.

    Raises:
        Forbidden: the subject's role is below the requirement
    """
    if not role_satisfies(subject_role, required_role):
        raise Forbidden()


def is_administrative(role: UserRole) -> bool:
    return UserRole(role) in ADMINISTRATIVE_ROLES
