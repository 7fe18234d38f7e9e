"""In-memory comment repository for testing."""

from typing import Optional

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, ThreadId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_thread(
        self,
        thread_id: ThreadId,
        include_inactive: bool = False,
        exclude_author_ids: frozenset[UserId] = frozenset(),
    ) -> list[Comment]:
        """Find all comments of a thread, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.thread_id == thread_id
            and (include_inactive or c.is_active)
            and c.author_id not in exclude_author_ids
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_all(
        self,
        include_inactive: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Comment]:
        """List comments across threads, newest first."""
        comments = [c for c in self._comments.values() if include_inactive or c.is_active]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def count(self, include_inactive: bool = False) -> int:
        """Count comments across threads."""
        return sum(
            1 for c in self._comments.values() if include_inactive or c.is_active
        )

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        self._comments[comment.id] = comment
        return comment
