"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username, ignoring case."""
        wanted = username.lower()
        for user in self._users.values():
            if str(user.username).lower() == wanted:
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case."""
        wanted = email.lower()
        for user in self._users.values():
            if user.email.lower() == wanted:
                return user
        return None

    async def find_all(
        self,
        include_inactive: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[User]:
        """List users, newest first."""
        users = [u for u in self._users.values() if include_inactive or u.is_active]
        users.sort(key=lambda u: u.created_at, reverse=True)
        return users[offset : offset + limit]

    async def count(self, include_inactive: bool = False) -> int:
        """Count users."""
        return sum(1 for u in self._users.values() if include_inactive or u.is_active)

    async def find_banned_ids(self, now: datetime) -> set[UserId]:
        """IDs of users whose ban is in force at ``now``."""
        return {
            u.id
            for u in self._users.values()
            if not u.is_active and (u.banned_until is None or u.banned_until > now)
        }

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        self._users[user.id] = user
        return user
