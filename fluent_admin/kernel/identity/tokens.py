"""
Signed access tokens for the admin API.

Tokens are stateless HS256 JWTs binding an identity to its role. Validity is
a function of signature and expiry only; there is no server-side session,
revocation list or replay cache.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode
from pydantic import BaseModel, ConfigDict

from fluent_admin.kernel.clock import Clock
from fluent_admin.kernel.errors import Unauthenticated
from fluent_admin.kernel.models.user import UserRole

TOKEN_TYPE = "access"


def _is_canonical(token: str) -> bool:
    """
    True when every segment is the one base64url spelling of its bytes.

    A final character can carry unused low bits; other spellings of the same
    bytes would decode to the same signature and still verify.
    """
    for segment in token.split("."):
        raw = segment.encode("ascii")
        if base64url_encode(base64url_decode(raw)) != raw:
            return False
    return True


class IssuedToken(BaseModel):
    """A freshly signed token and when it stops being valid."""

    token: str
    token_type: str = "bearer"
    expires_at: datetime
    expires_in: int  # Seconds until expiry


class TokenSubject(BaseModel):
    """Decoded, verified token claims."""

    model_config = ConfigDict(frozen=True)

    identity_id: uuid.UUID
    username: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime


class TokenManager:
    """
    Issues and validates access tokens.

    The secret, algorithm, lifetime and clock are injected; the manager keeps
    no other state.
    """

    def __init__(
        self,
        secret_key: str,
        clock: Clock,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 1440,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.clock = clock

    def issue(
        self,
        identity_id: uuid.UUID,
        role: UserRole,
        username: str = "",
        expires_delta: Optional[timedelta] = None,
    ) -> IssuedToken:
        """
        Create a signed token for ``identity_id`` holding ``role``.

        Args:
            identity_id: The user's unique identifier
            role: The user's role at issuance
            username: Carried for audit attribution
            expires_delta: Override of the configured lifetime

        Returns:
            IssuedToken with the encoded JWT and its expiry
        """
        now = self.clock.now()
        lifetime = expires_delta or timedelta(minutes=self.access_token_expire_minutes)
        expire = now + lifetime

        payload = {
            "sub": str(identity_id),
            "username": username,
            "role": UserRole(role).value,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "type": TOKEN_TYPE,
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

        return IssuedToken(
            token=token,
            expires_at=expire,
            expires_in=int(lifetime.total_seconds()),
        )

    def validate(self, token: str) -> TokenSubject:
        """
        Verify and decode a presented token.

        Raises:
            Unauthenticated: bad or non-canonical signature, undecodable
                structure, unknown role, wrong token type, or expired
        """
        try:
            if not _is_canonical(token):
                raise Unauthenticated()
            # Expiry is checked against the injected clock below
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
            if payload.get("type") != TOKEN_TYPE:
                raise Unauthenticated()

            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
            subject = TokenSubject(
                identity_id=uuid.UUID(payload["sub"]),
                username=payload.get("username", ""),
                role=UserRole(payload["role"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=expires_at,
            )
        except (JWTError, KeyError, ValueError, TypeError):
            raise Unauthenticated()

        if self.clock.now() >= expires_at:
            raise Unauthenticated()

        return subject
