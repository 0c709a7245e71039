"""
Stable Kernel Layer

Foundational components shared by every admin endpoint:
- Identity Core (operator accounts, credentials, access tokens)
- Permission Core (role-ordered access control)
- Cascading mutations (atomic multi-table deletes)
- Operation audit trail (append-only, best-effort)

Architectural Invariants:
- Every mutating admin call leaves exactly one operation-log row
- A batch delete removes all of its rows or none of them
- Role checks always run after token validation
"""

from fluent_admin.kernel.errors import AdminError, ErrorKind
from fluent_admin.kernel.models import (
    User,
    UserRole,
    UserStatus,
    OperationLog,
    OperationOutcome,
)

__all__ = [
    # Errors
    "AdminError",
    "ErrorKind",
    # Identity
    "User",
    "UserRole",
    "UserStatus",
    # Audit
    "OperationLog",
    "OperationOutcome",
]
