"""PostgreSQL implementation of Comment repository."""

from typing import Optional

import logfire
from sqlalchemy import asc, desc, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, ThreadId, UserId
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_comment(dict(row)) if row else None

    async def find_by_thread(
        self,
        thread_id: ThreadId,
        include_inactive: bool = False,
        exclude_author_ids: frozenset[UserId] = frozenset(),
    ) -> list[Comment]:
        """Find all comments of a thread, oldest first."""
        with logfire.span(
            "comment_repository.find_by_thread",
            thread_id=str(thread_id),
            include_inactive=include_inactive,
        ):
            stmt = select(comments_table).where(comments_table.c.thread_id == thread_id)
            if not include_inactive:
                stmt = stmt.where(comments_table.c.is_active.is_(True))
            if exclude_author_ids:
                stmt = stmt.where(
                    comments_table.c.author_id.not_in(list(exclude_author_ids))
                )
            stmt = stmt.order_by(asc(comments_table.c.created_at))

            result = await self.session.execute(stmt)
            return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def find_all(
        self,
        include_inactive: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Comment]:
        """List comments across threads, newest first."""
        stmt = select(comments_table)
        if not include_inactive:
            stmt = stmt.where(comments_table.c.is_active.is_(True))
        stmt = (
            stmt.order_by(desc(comments_table.c.created_at)).limit(limit).offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(dict(row)) for row in result.mappings().all()]

    async def count(self, include_inactive: bool = False) -> int:
        """Count comments across threads."""
        stmt = select(func.count()).select_from(comments_table)
        if not include_inactive:
            stmt = stmt.where(comments_table.c.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Insert or update a comment."""
        values = comment_to_dict(comment)
        stmt = insert(comments_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[comments_table.c.id],
            set_={key: stmt.excluded[key] for key in values if key != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return comment
