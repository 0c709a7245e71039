"""
Identity Core - credential verification and access tokens.
"""

from fluent_admin.kernel.identity.password import PasswordHasher
from fluent_admin.kernel.identity.tokens import IssuedToken, TokenManager, TokenSubject
from fluent_admin.kernel.identity.identity_service import IdentityService

__all__ = [
    "PasswordHasher",
    "IssuedToken",
    "TokenManager",
    "TokenSubject",
    "IdentityService",
]
