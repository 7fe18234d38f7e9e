"""Thread repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.thread import Thread
from forum.domain.value import ThreadId, ThreadSortOrder, ThreadStatus, UserId
from forum.domain.value.common import ValueObject


class ThreadFilter(ValueObject):
    """Selection criteria shared by ``find_all`` and ``count``.

    Attributes:
        statuses: Allowed moderation statuses (None for any)
        category: Exact category match
        author_id: Only threads by this author
        include_inactive: Whether soft-deleted threads are included
        exclude_author_ids: Authors whose threads are left out (banned users)
    """

    statuses: Optional[frozenset[ThreadStatus]] = None
    category: Optional[str] = None
    author_id: Optional[UserId] = None
    include_inactive: bool = False
    exclude_author_ids: frozenset[UserId] = frozenset()


class ThreadRepository(ABC):
    """Repository for Thread aggregate.

    Defines the contract for thread persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID (active or not).

        Args:
            thread_id: The thread's unique identifier

        Returns:
            The thread if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        criteria: ThreadFilter,
        sort: ThreadSortOrder = ThreadSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Thread]:
        """List threads matching a filter.

        Every sort order falls back to newest first for ties.

        Args:
            criteria: Selection criteria
            sort: Sort order
            limit: Maximum number of threads to return
            offset: Number of threads to skip

        Returns:
            List of threads
        """
        pass

    @abstractmethod
    async def count(self, criteria: ThreadFilter) -> int:
        """Count threads matching a filter."""
        pass

    @abstractmethod
    async def count_by_status(self) -> dict[ThreadStatus, int]:
        """Count active threads per moderation status.

        Returns:
            Mapping with an entry for every status (zero when none)
        """
        pass

    @abstractmethod
    async def category_stats(self) -> dict[str, tuple[int, int]]:
        """Per-category totals over active approved threads.

        Returns:
            Mapping of category to (thread count, comment count)
        """
        pass

    @abstractmethod
    async def save(self, thread: Thread) -> Thread:
        """Save a thread (create or update).

        Args:
            thread: The thread to save

        Returns:
            The saved thread
        """
        pass

    @abstractmethod
    async def increment_views(self, thread_id: ThreadId) -> None:
        """Atomically increment the view counter."""
        pass

    @abstractmethod
    async def adjust_comment_count(self, thread_id: ThreadId, delta: int) -> None:
        """Atomically shift the comment counter (never below zero)."""
        pass
