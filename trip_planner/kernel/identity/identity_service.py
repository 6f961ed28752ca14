"""
Identity service for user management operations.
"""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.kernel.models.user import User
from trip_planner.kernel.identity.password import hash_password, needs_rehash, verify_password
from trip_planner.kernel.identity.session import (
    IssuedCredential,
    SessionAuthenticator,
    get_session_authenticator,
)
from trip_planner.logging_config import get_logger

logger = get_logger(__name__)

PROFILE_FIELDS = ("display_name", "home_city", "home_lat", "home_lon", "trip_date", "budget_limit")


class IdentityService:
    """
    Service for user identity operations.

    Handles account creation, password login and profile updates.
    """

    def __init__(
        self,
        session: AsyncSession,
        authenticator: Optional[SessionAuthenticator] = None,
    ):
        self.session = session
        self.authenticator = authenticator or get_session_authenticator()

    async def create_user(
        self,
        username: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> User:
        """
        Create a user account.

        Raises:
            ValueError: If the username is already taken
        """
        username = username.strip()
        if await self.get_user_by_username(username):
            raise ValueError(f"User '{username}' already exists")

        user = User(
            username=username,
            password_hash=hash_password(password),
            display_name=display_name or username,
        )
        self.session.add(user)
        await self.session.flush()

        logger.info("User created", extra={"user_id": user.id})
        return user

    async def authenticate(
        self,
        username: str,
        password: str,
        ip_address: Optional[str] = None,
    ) -> Optional[tuple[User, IssuedCredential]]:
        """
        Check a username/password pair and sign a session credential.

        Returns:
            Tuple of (User, IssuedCredential) if successful, None otherwise
        """
        user = await self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login", extra={"ip_address": ip_address})
            return None

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            await self.session.flush()
            logger.info("Password hash upgraded", extra={"user_id": user.id})

        credential = self.authenticator.issue(user.id, user.username)
        logger.info("User logged in", extra={"user_id": user.id, "ip_address": ip_address})
        return user, credential

    async def update_profile(self, user_id: int, changes: dict[str, Any]) -> Optional[User]:
        """
        Apply a partial profile update.

        ``changes`` may contain any of PROFILE_FIELDS and ``password``;
        a password is re-hashed before it is stored.
        """
        user = await self.get_user_by_id(user_id)
        if not user:
            return None

        password = changes.get("password")
        if password:
            user.password_hash = hash_password(password)

        for field in PROFILE_FIELDS:
            if field in changes:
                setattr(user, field, changes[field])

        await self.session.flush()
        return user

    async def set_password(self, username: str, password: str) -> bool:
        """Replace a user's password. Returns False when the user is unknown."""
        user = await self.get_user_by_username(username)
        if not user:
            return False
        user.password_hash = hash_password(password)
        await self.session.flush()
        return True

    async def delete_user(self, username: str) -> bool:
        """Delete a user and, through the foreign keys, everything they own."""
        user = await self.get_user_by_username(username)
        if not user:
            return False
        await self.session.delete(user)
        await self.session.flush()
        return True

    async def list_users(self) -> List[User]:
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by login name."""
        result = await self.session.execute(
            select(User).where(User.username == username.strip())
        )
        return result.scalar_one_or_none()
