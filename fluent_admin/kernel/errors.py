"""
Error taxonomy for the admin surface.

Every failure the kernel raises is an ``AdminError`` carrying a specific
``ErrorKind``. The API layer maps the kind to a status code and a stable
error code; nothing downstream inspects message text.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Stable error codes exposed to API clients."""

    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSACTION_ERROR = "transaction_error"


class AdminError(Exception):
    """Base class for all kernel failures."""

    kind: ErrorKind = ErrorKind.VALIDATION_ERROR
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(AdminError):
    """Wrong username, wrong password, or no administrative role."""

    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid username or password"


class Unauthenticated(AdminError):
    """Missing, malformed, tampered or expired token."""

    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required"


class Forbidden(AdminError):
    """Valid token whose role is below the operation's requirement."""

    kind = ErrorKind.FORBIDDEN
    default_message = "Insufficient permissions"


class ValidationError(AdminError):
    kind = ErrorKind.VALIDATION_ERROR
    default_message = "Invalid request"


class NotFound(AdminError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class Conflict(AdminError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class TransactionError(AdminError):
    """A step of a multi-table mutation failed and everything was rolled back."""

    kind = ErrorKind.TRANSACTION_ERROR
    default_message = "Transaction failed"

    def __init__(self, step: str, message: Optional[str] = None):
        self.step = step
        super().__init__(message or f"Transaction failed at step '{step}'")
