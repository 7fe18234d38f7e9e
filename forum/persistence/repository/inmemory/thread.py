"""In-memory thread repository for testing."""

from collections import defaultdict
from typing import Optional

from forum.domain.model.thread import Thread
from forum.domain.repository.thread import ThreadFilter, ThreadRepository
from forum.domain.value import ThreadId, ThreadSortOrder, ThreadStatus


def _matches(thread: Thread, criteria: ThreadFilter) -> bool:
    if not criteria.include_inactive and not thread.is_active:
        return False
    if criteria.statuses is not None and thread.status not in criteria.statuses:
        return False
    if criteria.category and thread.category != criteria.category:
        return False
    if criteria.author_id and thread.author_id != criteria.author_id:
        return False
    return thread.author_id not in criteria.exclude_author_ids


_SORT_KEYS = {
    ThreadSortOrder.POPULAR: lambda t: t.like_count,
    ThreadSortOrder.VIEWS: lambda t: t.views,
    ThreadSortOrder.REPLIES: lambda t: t.comment_count,
}


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository for testing.

    Mirrors the PostgreSQL repository in never overwriting the view and
    comment counters on save.
    """

    def __init__(self) -> None:
        self._threads: dict[ThreadId, Thread] = {}

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        return self._threads.get(thread_id)

    async def find_all(
        self,
        criteria: ThreadFilter,
        sort: ThreadSortOrder = ThreadSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Thread]:
        """Find threads with filtering, sorting and pagination."""
        threads = [t for t in self._threads.values() if _matches(t, criteria)]
        # Two stable sorts: newest first, then the primary key
        threads.sort(key=lambda t: t.created_at, reverse=True)
        if sort in _SORT_KEYS:
            threads.sort(key=_SORT_KEYS[sort], reverse=True)
        return threads[offset : offset + limit]

    async def count(self, criteria: ThreadFilter) -> int:
        """Count threads matching the filter."""
        return sum(1 for t in self._threads.values() if _matches(t, criteria))

    async def count_by_status(self) -> dict[ThreadStatus, int]:
        """Count active threads per status."""
        counts = {status: 0 for status in ThreadStatus}
        for thread in self._threads.values():
            if thread.is_active:
                counts[thread.status] += 1
        return counts

    async def category_stats(self) -> dict[str, tuple[int, int]]:
        """Per-category thread and comment totals over approved threads."""
        threads: dict[str, int] = defaultdict(int)
        comments: dict[str, int] = defaultdict(int)
        for thread in self._threads.values():
            if thread.is_active and thread.status == ThreadStatus.APPROVED:
                threads[thread.category] += 1
                comments[thread.category] += thread.comment_count
        return {category: (threads[category], comments[category]) for category in threads}

    async def save(self, thread: Thread) -> Thread:
        """Save a thread, keeping the stored counters of an existing one."""
        existing = self._threads.get(thread.id)
        if existing:
            thread = thread.model_copy(
                update={"views": existing.views, "comment_count": existing.comment_count}
            )
        self._threads[thread.id] = thread
        return thread

    async def increment_views(self, thread_id: ThreadId) -> None:
        """Increment views by 1."""
        thread = self._threads.get(thread_id)
        if thread:
            self._threads[thread_id] = thread.model_copy(
                update={"views": thread.views + 1}
            )

    async def adjust_comment_count(self, thread_id: ThreadId, delta: int) -> None:
        """Shift the comment counter, clamped at zero."""
        thread = self._threads.get(thread_id)
        if thread:
            self._threads[thread_id] = thread.model_copy(
                update={"comment_count": max(thread.comment_count + delta, 0)}
            )
