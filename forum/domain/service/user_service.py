"""User domain service."""

from datetime import datetime

import logfire

from forum.domain.error import NotFoundError, ValidationError
from forum.domain.model.common import utc_now
from forum.domain.model.user import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId

from .access_control import reconcile_ban_expiry
from .base import Service


class UserService(Service):
    """Domain service for user operations.

    Every read path runs lazy ban-expiry reconciliation, so callers never
    see a user whose timed ban has already lapsed.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def _reconcile(self, user: User, now: datetime | None = None) -> User:
        """Lift a lapsed ban and persist the change once."""
        reconciled = reconcile_ban_expiry(user, now or utc_now())
        if reconciled is user:
            return user
        saved = await self.user_repository.save(reconciled)
        logfire.info(
            "Expired ban lifted",
            user_id=str(user.id),
            username=str(user.username),
            banned_until=user.banned_until.isoformat() if user.banned_until else None,
        )
        return saved

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Get user by ID, or None.

        Args:
            user_id: User ID

        Returns:
            Reconciled user if found, None otherwise
        """
        with logfire.span("user_service.find_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                return None
            return await self._reconcile(user)

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity with any lapsed ban lifted

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return await self._reconcile(user)

    async def find_by_login(self, login: str) -> User | None:
        """Find a user by username, falling back to email.

        Args:
            login: Username or email address

        Returns:
            Reconciled user if found, None otherwise
        """
        with logfire.span("user_service.find_by_login"):
            user = await self.user_repository.find_by_username(login)
            if not user and "@" in login:
                user = await self.user_repository.find_by_email(login)
            if not user:
                return None
            return await self._reconcile(user)

    async def get_many(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Load several users keyed by ID (no reconciliation).

        Used for author summaries, which do not depend on ban state.
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}
        users = await self.user_repository.find_by_ids(unique_ids)
        return {user.id: user for user in users}

    async def list_users(
        self, include_inactive: bool = False, limit: int = 10, offset: int = 0
    ) -> tuple[list[User], int]:
        """List users with lapsed bans reconciled.

        Args:
            include_inactive: Whether to include banned/deactivated users
            limit: Page size
            offset: Number of users to skip

        Returns:
            Tuple of (users, total count)
        """
        with logfire.span(
            "user_service.list_users",
            include_inactive=include_inactive,
            limit=limit,
            offset=offset,
        ):
            now = utc_now()
            users = await self.user_repository.find_all(
                include_inactive=include_inactive, limit=limit, offset=offset
            )
            reconciled = [await self._reconcile(user, now) for user in users]
            total = await self.user_repository.count(include_inactive=include_inactive)
            return reconciled, total

    async def banned_user_ids(self) -> frozenset[UserId]:
        """IDs of users currently banned (lapsed bans excluded)."""
        with logfire.span("user_service.banned_user_ids"):
            banned = await self.user_repository.find_banned_ids(utc_now())
            return frozenset(banned)

    async def count_members(self) -> int:
        """Number of active (not banned) users."""
        return await self.user_repository.count(include_inactive=False)

    async def is_currently_banned(self, user_id: UserId) -> bool:
        """Whether ``user_id`` is banned right now (missing users count as banned)."""
        user = await self.find_by_id(user_id)
        return user is None or not user.is_active

    async def ensure_available(
        self, username: str, email: str, exclude_id: UserId | None = None
    ) -> None:
        """Check that a username and email are not taken by another user.

        Raises:
            ValidationError: If either is already in use
        """
        existing = await self.user_repository.find_by_username(username)
        if existing and existing.id != exclude_id:
            logfire.warn("Username already taken", username=username)
            raise ValidationError("User with this username already exists")
        existing = await self.user_repository.find_by_email(email)
        if existing and existing.id != exclude_id:
            logfire.warn("Email already registered")
            raise ValidationError("User with this email already exists")

    async def ban(self, user: User, banned_until: datetime | None) -> User:
        """Ban a user until ``banned_until`` (None for permanent).

        Args:
            user: User to ban
            banned_until: Expiry, or None for a permanent ban

        Returns:
            Saved user
        """
        with logfire.span("user_service.ban", user_id=str(user.id)):
            saved = await self.user_repository.save(user.ban(banned_until))
            logfire.info(
                "User banned",
                user_id=str(user.id),
                username=str(user.username),
                banned_until=banned_until.isoformat() if banned_until else "forever",
            )
            return saved

    async def unban(self, user: User) -> User:
        """Lift any ban on a user."""
        with logfire.span("user_service.unban", user_id=str(user.id)):
            saved = await self.user_repository.save(user.unban())
            logfire.info("User unbanned", user_id=str(user.id), username=str(user.username))
            return saved

    async def deactivate(self, user: User) -> User:
        """Soft-delete a user account (a permanent ban without expiry)."""
        with logfire.span("user_service.deactivate", user_id=str(user.id)):
            saved = await self.user_repository.save(user.ban(None))
            logfire.info("User deactivated", user_id=str(user.id))
            return saved

    async def save(self, user: User) -> User:
        """Save user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        with logfire.span(
            "user_service.save", user_id=str(user.id), username=str(user.username)
        ):
            saved = await self.user_repository.save(user)
            logfire.info("User saved", user_id=str(saved.id), role=saved.role.value)
            return saved
