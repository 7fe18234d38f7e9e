"""Comment domain service."""

from uuid import uuid4

import logfire

from forum.domain.error import NotFoundError, ValidationError
from forum.domain.model.comment import Comment
from forum.domain.model.common import utc_now
from forum.domain.model.thread import Thread
from forum.domain.repository import CommentRepository
from forum.domain.value import AttachmentId, CommentId, ThreadId, UserId

from .base import Service
from .thread_service import ThreadService


class CommentService(Service):
    """Domain service for comment operations.

    Keeps the owning thread's ``comment_count`` in step with the number of
    active comments.
    """

    def __init__(
        self, comment_repository: CommentRepository, thread_service: ThreadService
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            thread_service: Thread service, for the comment counter
        """
        self.comment_repository = comment_repository
        self.thread_service = thread_service

    async def create_comment(
        self,
        thread: Thread,
        author_id: UserId,
        content: str,
        parent_comment_id: CommentId | None = None,
        attachments: list[AttachmentId] | None = None,
    ) -> Comment:
        """Create a comment on a thread or a reply to another comment.

        Args:
            thread: Thread being commented on
            author_id: Author user ID
            content: Comment text
            parent_comment_id: Comment being replied to (None for top-level)
            attachments: Already stored attachment IDs

        Returns:
            Saved comment

        Raises:
            NotFoundError: If the parent comment is missing or inactive
            ValidationError: If the parent belongs to another thread, or the
                content is out of bounds
        """
        with logfire.span(
            "comment_service.create_comment",
            thread_id=str(thread.id),
            author_id=str(author_id),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            if parent_comment_id:
                parent = await self.comment_repository.find_by_id(parent_comment_id)
                if not parent or not parent.is_active:
                    logfire.warn(
                        "Parent comment not found",
                        parent_comment_id=str(parent_comment_id),
                        thread_id=str(thread.id),
                    )
                    raise NotFoundError("Comment", str(parent_comment_id))
                if parent.thread_id != thread.id:
                    logfire.warn(
                        "Parent comment does not belong to thread",
                        parent_comment_id=str(parent_comment_id),
                        parent_thread_id=str(parent.thread_id),
                        thread_id=str(thread.id),
                    )
                    raise ValidationError("Parent comment does not belong to this thread")

            comment = Comment.create(
                id=CommentId(uuid4()),
                content=content.strip(),
                author_id=author_id,
                thread_id=thread.id,
                parent_comment_id=parent_comment_id,
                attachments=attachments or [],
            )
            saved = await self.comment_repository.save(comment)
            await self.thread_service.adjust_comment_count(thread.id, 1)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                thread_id=str(thread.id),
                is_reply=parent_comment_id is not None,
            )
            return saved

    async def get_by_id(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID, active or not.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.get_by_id", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def get_comments_for_thread(
        self,
        thread_id: ThreadId,
        include_inactive: bool = False,
        exclude_author_ids: frozenset[UserId] = frozenset(),
    ) -> list[Comment]:
        """Get a thread's comments, flat and oldest first.

        Args:
            thread_id: Thread ID
            include_inactive: Whether to include soft-deleted comments
            exclude_author_ids: Authors to leave out (banned users)

        Returns:
            List of comments
        """
        with logfire.span(
            "comment_service.get_comments_for_thread",
            thread_id=str(thread_id),
            include_inactive=include_inactive,
        ):
            comments = await self.comment_repository.find_by_thread(
                thread_id,
                include_inactive=include_inactive,
                exclude_author_ids=exclude_author_ids,
            )
            logfire.info(
                "Comments retrieved for thread",
                thread_id=str(thread_id),
                count=len(comments),
            )
            return comments

    async def list_comments(
        self, include_inactive: bool = False, limit: int = 10, offset: int = 0
    ) -> tuple[list[Comment], int]:
        """List comments across all threads, newest first.

        Returns:
            Tuple of (comments, total count)
        """
        with logfire.span(
            "comment_service.list_comments", include_inactive=include_inactive
        ):
            comments = await self.comment_repository.find_all(
                include_inactive=include_inactive, limit=limit, offset=offset
            )
            total = await self.comment_repository.count(include_inactive=include_inactive)
            return comments, total

    async def count_active(self) -> int:
        """Number of active comments across all threads."""
        return await self.comment_repository.count(include_inactive=False)

    async def update_content(self, comment: Comment, content: str) -> Comment:
        """Replace a comment's text.

        Raises:
            ValidationError: If the content is out of bounds
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment.id),
            content_length=len(content),
        ):
            updated = comment.evolve(content=content.strip(), updated_at=utc_now())
            saved = await self.comment_repository.save(updated)
            logfire.info("Comment updated", comment_id=str(comment.id))
            return saved

    async def toggle_like(self, comment: Comment, user_id: UserId) -> Comment:
        """Add or remove ``user_id`` from the comment's likes."""
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment.id),
            user_id=str(user_id),
        ):
            if comment.is_liked_by(user_id):
                likes = [liker for liker in comment.likes if liker != user_id]
            else:
                likes = [*comment.likes, user_id]
            return await self.comment_repository.save(
                comment.model_copy(update={"likes": likes})
            )

    async def soft_delete(self, comment: Comment) -> Comment:
        """Mark a comment inactive. Its replies stay and surface as roots."""
        with logfire.span("comment_service.soft_delete", comment_id=str(comment.id)):
            saved = await self.comment_repository.save(comment.soft_delete())
            if comment.is_active:
                await self.thread_service.adjust_comment_count(comment.thread_id, -1)
            logfire.info("Comment deleted", comment_id=str(comment.id))
            return saved

    async def restore(self, comment: Comment) -> Comment:
        """Mark a comment active again."""
        with logfire.span("comment_service.restore", comment_id=str(comment.id)):
            saved = await self.comment_repository.save(comment.restore())
            if not comment.is_active:
                await self.thread_service.adjust_comment_count(comment.thread_id, 1)
            logfire.info("Comment restored", comment_id=str(comment.id))
            return saved
