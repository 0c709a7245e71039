"""
Identity service: credential verification, login and operator account management.
"""

import asyncio
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fluent_admin.kernel.clock import Clock
from fluent_admin.kernel.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from fluent_admin.kernel.identity.password import PasswordHasher
from fluent_admin.kernel.identity.tokens import IssuedToken, TokenManager
from fluent_admin.kernel.models.user import User, UserRole, UserStatus
from fluent_admin.kernel.permissions import is_administrative
from fluent_admin.logging_config import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


class IdentityService:
    """
    Service for operator identity operations.

    Bound to one request-scoped session; the hasher, token manager and clock
    come from the application context.
    """

    def __init__(
        self,
        session: AsyncSession,
        hasher: PasswordHasher,
        token_manager: TokenManager,
        clock: Clock,
    ):
        self.session = session
        self.hasher = hasher
        self.token_manager = token_manager
        self.clock = clock

    async def verify(self, username: str, password: str) -> User:
        """
        Check a username/password pair for the admin login surface.

        Unknown username, wrong password, a non-administrative role and a
        disabled account all fail the same way so the response does not
        reveal which check failed.

        Raises:
            InvalidCredentials
        """
        user = await self.get_user_by_username(username)
        if user is None:
            await asyncio.to_thread(self.hasher.burn, password)
            raise InvalidCredentials()

        matches = await asyncio.to_thread(self.hasher.verify, password, user.password_hash)
        if not matches:
            raise InvalidCredentials()

        if not is_administrative(user.role) or not user.is_enabled:
            raise InvalidCredentials()

        return user

    async def authenticate(self, username: str, password: str) -> tuple[User, IssuedToken]:
        """
        Verify credentials and issue an access token.

        Returns:
            Tuple of (User, IssuedToken)

        Raises:
            InvalidCredentials
        """
        try:
            user = await self.verify(username, password)
        except InvalidCredentials:
            logger.info("Admin login rejected", extra={"username": username})
            raise

        token = self.token_manager.issue(user.id, user.role, user.username)
        user.last_login_at = self.clock.now()

        logger.info(
            "Admin login succeeded",
            extra={"user_id": str(user.id), "role": user.role.value},
        )
        return user, token

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get a user by ID."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by exact username."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        username: str,
        password: str,
        role: UserRole = UserRole.USER,
        status: int = UserStatus.ENABLED.value,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> User:
        """
        Create an account.

        Raises:
            ValidationError: password too short
            Conflict: username, email or phone already taken
        """
        self._check_password(password)
        if await self.get_user_by_username(username) is not None:
            raise Conflict("Username already exists")

        user = User(
            username=username,
            password_hash=await asyncio.to_thread(self.hasher.hash, password),
            role=UserRole(role),
            status=status,
            email=email,
            phone=phone,
            gender=gender,
        )
        self.session.add(user)
        await self._flush_unique()
        return user

    async def update_user(
        self,
        user_id: uuid.UUID,
        username: Optional[str] = None,
        password: Optional[str] = None,
        role: Optional[UserRole] = None,
        status: Optional[int] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> User:
        """
        Update an account; ``None`` leaves a field unchanged.

        Raises:
            NotFound: no such user
            ValidationError: password too short
            Conflict: new username, email or phone already taken
        """
        user = await self.get_user_by_id(user_id)
        if user is None:
            raise NotFound("User not found")

        if username is not None and username != user.username:
            existing = await self.get_user_by_username(username)
            if existing is not None and existing.id != user.id:
                raise Conflict("Username already exists")
            user.username = username
        if password is not None:
            self._check_password(password)
            user.password_hash = await asyncio.to_thread(self.hasher.hash, password)
        if role is not None:
            user.role = UserRole(role)
        if status is not None:
            user.status = status
        if email is not None:
            user.email = email
        if phone is not None:
            user.phone = phone
        if gender is not None:
            user.gender = gender

        await self._flush_unique()
        return user

    async def ensure_bootstrap_admin(self, username: str, password: str) -> Optional[User]:
        """Create the initial super admin when no account has ``username``."""
        if await self.get_user_by_username(username) is not None:
            return None
        user = await self.create_user(username, password, role=UserRole.SUPER_ADMIN)
        logger.warning("Default admin account created", extra={"username": username})
        return user

    def _check_password(self, password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    async def _flush_unique(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise Conflict("Username, email or phone already in use")
