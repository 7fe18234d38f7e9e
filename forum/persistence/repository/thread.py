"""PostgreSQL implementation of Thread repository."""

from typing import Optional

import logfire
from sqlalchemy import Select, desc, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Thread
from forum.domain.repository import ThreadFilter, ThreadRepository
from forum.domain.value import ThreadId, ThreadSortOrder, ThreadStatus
from forum.persistence.mappers import row_to_thread, thread_to_dict
from forum.persistence.tables import threads_table


def _apply_filter(stmt: Select, criteria: ThreadFilter) -> Select:
    """Add WHERE clauses for ``criteria`` to ``stmt``."""
    if not criteria.include_inactive:
        stmt = stmt.where(threads_table.c.is_active.is_(True))
    if criteria.statuses is not None:
        stmt = stmt.where(
            threads_table.c.status.in_([status.value for status in criteria.statuses])
        )
    if criteria.category:
        stmt = stmt.where(threads_table.c.category == criteria.category)
    if criteria.author_id:
        stmt = stmt.where(threads_table.c.author_id == criteria.author_id)
    if criteria.exclude_author_ids:
        stmt = stmt.where(
            threads_table.c.author_id.not_in(list(criteria.exclude_author_ids))
        )
    return stmt


_SORT_COLUMNS = {
    ThreadSortOrder.POPULAR: func.cardinality(threads_table.c.likes),
    ThreadSortOrder.VIEWS: threads_table.c.views,
    ThreadSortOrder.REPLIES: threads_table.c.comment_count,
}


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        stmt = select(threads_table).where(threads_table.c.id == thread_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_thread(dict(row)) if row else None

    async def find_all(
        self,
        criteria: ThreadFilter,
        sort: ThreadSortOrder = ThreadSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Thread]:
        """Find threads with filtering, sorting and pagination."""
        with logfire.span(
            "thread_repository.find_all", sort=sort.value, limit=limit, offset=offset
        ):
            stmt = _apply_filter(select(threads_table), criteria)
            if sort in _SORT_COLUMNS:
                stmt = stmt.order_by(desc(_SORT_COLUMNS[sort]))
            stmt = stmt.order_by(desc(threads_table.c.created_at))
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            return [row_to_thread(dict(row)) for row in result.mappings().all()]

    async def count(self, criteria: ThreadFilter) -> int:
        """Count threads matching the filter."""
        stmt = _apply_filter(select(func.count()).select_from(threads_table), criteria)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_status(self) -> dict[ThreadStatus, int]:
        """Count active threads per status."""
        stmt = (
            select(threads_table.c.status, func.count())
            .where(threads_table.c.is_active.is_(True))
            .group_by(threads_table.c.status)
        )
        result = await self.session.execute(stmt)
        counts = {status: 0 for status in ThreadStatus}
        for status, total in result.all():
            counts[ThreadStatus(status)] = total
        return counts

    async def category_stats(self) -> dict[str, tuple[int, int]]:
        """Per-category thread and comment totals over approved threads."""
        stmt = (
            select(
                threads_table.c.category,
                func.count(),
                func.coalesce(func.sum(threads_table.c.comment_count), 0),
            )
            .where(
                threads_table.c.is_active.is_(True),
                threads_table.c.status == ThreadStatus.APPROVED.value,
            )
            .group_by(threads_table.c.category)
        )
        result = await self.session.execute(stmt)
        return {
            category: (threads, int(comments))
            for category, threads, comments in result.all()
        }

    async def save(self, thread: Thread) -> Thread:
        """Insert or update a thread (counters are never overwritten)."""
        values = thread_to_dict(thread)
        stmt = insert(threads_table).values(
            **values, views=thread.views, comment_count=thread.comment_count
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[threads_table.c.id],
            set_={key: stmt.excluded[key] for key in values if key != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return thread

    async def increment_views(self, thread_id: ThreadId) -> None:
        """Atomically increment views by 1."""
        stmt = (
            update(threads_table)
            .where(threads_table.c.id == thread_id)
            .values(views=threads_table.c.views + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def adjust_comment_count(self, thread_id: ThreadId, delta: int) -> None:
        """Atomically shift the comment counter, clamped at zero."""
        stmt = (
            update(threads_table)
            .where(threads_table.c.id == thread_id)
            .values(
                comment_count=func.greatest(threads_table.c.comment_count + delta, 0)
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
