"""Create comment use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.common import CommentItem, load_authors, owner_is_active
from forum.domain.model.comment import MAX_COMMENT_LENGTH
from forum.domain.service import (
    CommentService,
    ThreadService,
    UserService,
    require_permission,
)
from forum.domain.value import Action, ActorContext, CommentId, ThreadId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    thread_id: UUID
    actor: ActorContext
    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)
    parent_comment_id: Optional[UUID] = None


class CreateCommentUseCase:
    """Use case for commenting on a thread or replying to a comment.

    Only approved threads accept comments, whoever the actor is.
    """

    def __init__(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            thread_service: Thread domain service
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Raises:
            AuthenticationError: If the actor is anonymous
            NotFoundError: If the thread or parent comment is missing
            PermissionDeniedError: If the thread is not approved
            ValidationError: If the parent belongs to another thread
        """
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        owner_active = await owner_is_active(self.user_service, thread.author_id)
        require_permission(request.actor, Action.COMMENT, thread.to_target(owner_active))

        comment = await self.comment_service.create_comment(
            thread=thread,
            author_id=request.actor.user_id,
            content=request.content,
            parent_comment_id=(
                CommentId(request.parent_comment_id) if request.parent_comment_id else None
            ),
        )
        authors = await load_authors(self.user_service, [comment.author_id])
        return CommentItem.from_domain(comment, authors, request.actor.user_id)
