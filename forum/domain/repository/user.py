"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from forum.domain.model.user import User
from forum.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once (missing ids are skipped).

        Args:
            user_ids: User identifiers

        Returns:
            Users found, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username (case-insensitive).

        Args:
            username: The username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive).

        Args:
            email: The email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        include_inactive: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[User]:
        """List users, newest first.

        Args:
            include_inactive: Whether to include banned/deactivated users
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            List of users
        """
        pass

    @abstractmethod
    async def count(self, include_inactive: bool = False) -> int:
        """Count users.

        Args:
            include_inactive: Whether to include banned/deactivated users

        Returns:
            Number of users
        """
        pass

    @abstractmethod
    async def find_banned_ids(self, now: datetime) -> set[UserId]:
        """IDs of users whose ban is still in force at ``now``.

        That is inactive users with no expiry or an expiry after ``now``.
        Lapsed timed bans are not included even before reconciliation.

        Args:
            now: Reference time

        Returns:
            Set of user IDs
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass
