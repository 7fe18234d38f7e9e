"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import desc, func, or_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.persistence.mappers import row_to_user, user_to_dict
from forum.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: list[UserId]) -> list[User]:
        """Find several users at once."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username, ignoring case."""
        stmt = select(users_table).where(
            func.lower(users_table.c.username) == username.lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case."""
        stmt = select(users_table).where(func.lower(users_table.c.email) == email.lower())
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_all(
        self,
        include_inactive: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[User]:
        """List users, newest first."""
        stmt = select(users_table)
        if not include_inactive:
            stmt = stmt.where(users_table.c.is_active.is_(True))
        stmt = stmt.order_by(desc(users_table.c.created_at)).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count(self, include_inactive: bool = False) -> int:
        """Count users."""
        stmt = select(func.count()).select_from(users_table)
        if not include_inactive:
            stmt = stmt.where(users_table.c.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_banned_ids(self, now: datetime) -> set[UserId]:
        """IDs of users whose ban is in force at ``now``."""
        stmt = select(users_table.c.id).where(
            users_table.c.is_active.is_(False),
            or_(
                users_table.c.banned_until.is_(None),
                users_table.c.banned_until > now,
            ),
        )
        result = await self.session.execute(stmt)
        return {UserId(user_id) for user_id in result.scalars().all()}

    async def save(self, user: User) -> User:
        """Insert or update a user."""
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={key: stmt.excluded[key] for key in values if key != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
