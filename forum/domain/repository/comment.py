"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, ThreadId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID (active or not).

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_thread(
        self,
        thread_id: ThreadId,
        include_inactive: bool = False,
        exclude_author_ids: frozenset[UserId] = frozenset(),
    ) -> list[Comment]:
        """Find the comments of a thread, flat, oldest first.

        Args:
            thread_id: The thread ID
            include_inactive: Whether to include soft-deleted comments
            exclude_author_ids: Authors whose comments are left out

        Returns:
            List of comments ordered by creation time
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        include_inactive: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Comment]:
        """List comments across threads, newest first.

        Args:
            include_inactive: Whether to include soft-deleted comments
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def count(self, include_inactive: bool = False) -> int:
        """Count comments across threads."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass
