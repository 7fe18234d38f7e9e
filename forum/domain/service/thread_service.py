"""Thread domain service."""

from uuid import uuid4

import logfire

from forum.domain.error import NotFoundError
from forum.domain.model.common import utc_now
from forum.domain.model.thread import Thread
from forum.domain.repository import ThreadFilter, ThreadRepository
from forum.domain.value import (
    AttachmentId,
    ThreadId,
    ThreadSortOrder,
    ThreadStatus,
    UserId,
)

from .base import Service


class ThreadService(Service):
    """Domain service for thread operations."""

    def __init__(self, thread_repository: ThreadRepository) -> None:
        """Initialize thread service.

        Args:
            thread_repository: Thread repository
        """
        self.thread_repository = thread_repository

    async def create_thread(
        self,
        author_id: UserId,
        title: str,
        content: str,
        category: str,
        attachments: list[AttachmentId] | None = None,
    ) -> Thread:
        """Create a thread awaiting moderation.

        Args:
            author_id: Author user ID
            title: Thread title
            content: Thread body
            category: Category name
            attachments: Already stored attachment IDs

        Returns:
            Saved thread with status pending

        Raises:
            ValidationError: If a field is out of bounds
        """
        with logfire.span(
            "thread_service.create_thread", author_id=str(author_id), category=category
        ):
            thread = Thread.create(
                id=ThreadId(uuid4()),
                title=title.strip(),
                content=content.strip(),
                category=category.strip(),
                author_id=author_id,
                status=ThreadStatus.PENDING,
                attachments=attachments or [],
            )
            saved = await self.thread_repository.save(thread)
            logfire.info(
                "Thread created",
                thread_id=str(saved.id),
                author_id=str(author_id),
                attachments=len(saved.attachments),
            )
            return saved

    async def get_by_id(self, thread_id: ThreadId) -> Thread:
        """Get a thread by ID, active or not.

        Raises:
            NotFoundError: If thread not found
        """
        with logfire.span("thread_service.get_by_id", thread_id=str(thread_id)):
            thread = await self.thread_repository.find_by_id(thread_id)
            if not thread:
                logfire.warn("Thread not found", thread_id=str(thread_id))
                raise NotFoundError("Thread", str(thread_id))
            return thread

    async def list_threads(
        self,
        criteria: ThreadFilter,
        sort: ThreadSortOrder = ThreadSortOrder.RECENT,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Thread], int]:
        """List threads matching ``criteria``.

        Returns:
            Tuple of (threads, total count)
        """
        with logfire.span(
            "thread_service.list_threads",
            sort=sort.value,
            category=criteria.category,
            limit=limit,
            offset=offset,
        ):
            threads = await self.thread_repository.find_all(
                criteria, sort=sort, limit=limit, offset=offset
            )
            total = await self.thread_repository.count(criteria)
            logfire.info("Threads listed", count=len(threads), total=total)
            return threads, total

    async def update_thread(self, thread: Thread, **changes) -> Thread:
        """Apply field changes (title, content, category, attachments, ...).

        Raises:
            ValidationError: If a changed field is out of bounds
        """
        with logfire.span(
            "thread_service.update_thread",
            thread_id=str(thread.id),
            fields=sorted(changes),
        ):
            updated = thread.evolve(**changes, updated_at=utc_now())
            saved = await self.thread_repository.save(updated)
            logfire.info("Thread updated", thread_id=str(thread.id))
            return saved

    async def record_view(self, thread: Thread) -> Thread:
        """Increment the view counter and return the thread as stored."""
        await self.thread_repository.increment_views(thread.id)
        return thread.model_copy(update={"views": thread.views + 1})

    async def toggle_like(self, thread: Thread, user_id: UserId) -> Thread:
        """Add or remove ``user_id`` from the thread's likes."""
        with logfire.span(
            "thread_service.toggle_like", thread_id=str(thread.id), user_id=str(user_id)
        ):
            if thread.is_liked_by(user_id):
                likes = [liker for liker in thread.likes if liker != user_id]
            else:
                likes = [*thread.likes, user_id]
            return await self.thread_repository.save(
                thread.model_copy(update={"likes": likes})
            )

    async def set_status(self, thread: Thread, status: ThreadStatus) -> Thread:
        """Record a moderation decision."""
        with logfire.span(
            "thread_service.set_status", thread_id=str(thread.id), status=status.value
        ):
            saved = await self.thread_repository.save(
                thread.model_copy(update={"status": status, "updated_at": utc_now()})
            )
            logfire.info(
                "Thread moderated", thread_id=str(thread.id), status=status.value
            )
            return saved

    async def soft_delete(self, thread: Thread) -> Thread:
        """Mark a thread inactive."""
        with logfire.span("thread_service.soft_delete", thread_id=str(thread.id)):
            saved = await self.thread_repository.save(thread.soft_delete())
            logfire.info("Thread deleted", thread_id=str(thread.id))
            return saved

    async def restore(self, thread: Thread) -> Thread:
        """Mark a thread active again."""
        with logfire.span("thread_service.restore", thread_id=str(thread.id)):
            saved = await self.thread_repository.save(thread.restore())
            logfire.info("Thread restored", thread_id=str(thread.id))
            return saved

    async def adjust_comment_count(self, thread_id: ThreadId, delta: int) -> None:
        """Shift the cached comment counter of a thread."""
        await self.thread_repository.adjust_comment_count(thread_id, delta)

    async def count_by_status(self) -> dict[ThreadStatus, int]:
        """Active thread totals per moderation status."""
        with logfire.span("thread_service.count_by_status"):
            return await self.thread_repository.count_by_status()

    async def category_stats(self) -> dict[str, tuple[int, int]]:
        """Per-category (threads, comments) over active approved threads."""
        with logfire.span("thread_service.category_stats"):
            return await self.thread_repository.category_stats()
