"""Edit, delete, restore and like comment use cases."""

from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.common import CommentItem, load_authors, owner_is_active
from forum.domain.error import AuthenticationError
from forum.domain.model.comment import Comment, MAX_COMMENT_LENGTH
from forum.domain.service import (
    CommentService,
    UserService,
    require_admin,
    require_permission,
)
from forum.domain.value import Action, ActorContext, CommentId


class CommentActionRequest(BaseModel):
    """Request naming one comment and the actor acting on it."""

    comment_id: UUID
    actor: ActorContext


class UpdateCommentRequest(CommentActionRequest):
    """Update comment request."""

    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)


class CommentLikeResponse(BaseModel):
    """Like state after a toggle."""

    likes: int
    user_liked: bool


class _CommentUseCase:
    def __init__(self, comment_service: CommentService, user_service: UserService) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def _load(self, request: CommentActionRequest, action: Action) -> Comment:
        comment = await self.comment_service.get_by_id(CommentId(request.comment_id))
        owner_active = await owner_is_active(self.user_service, comment.author_id)
        require_permission(request.actor, action, comment.to_target(owner_active))
        return comment

    async def _item(self, comment: Comment, actor: ActorContext) -> CommentItem:
        authors = await load_authors(self.user_service, [comment.author_id])
        return CommentItem.from_domain(comment, authors, actor.user_id)


class UpdateCommentUseCase(_CommentUseCase):
    """Use case for editing a comment (author or any admin)."""

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Replace the comment text.

        Raises:
            NotFoundError: If the comment is missing or deleted
            PermissionDeniedError: If the actor may not edit it
        """
        comment = await self._load(request, Action.EDIT)
        comment = await self.comment_service.update_content(comment, request.content)
        return await self._item(comment, request.actor)


class DeleteCommentUseCase(_CommentUseCase):
    """Use case for soft-deleting a comment.

    Replies are kept; they surface at the top level once their parent is
    hidden.
    """

    async def execute(self, request: CommentActionRequest) -> None:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment is missing or already deleted
            PermissionDeniedError: If the actor may not delete it
        """
        comment = await self._load(request, Action.DELETE)
        await self.comment_service.soft_delete(comment)


class RestoreCommentUseCase(_CommentUseCase):
    """Use case for bringing back a soft-deleted comment (Admin Level 2)."""

    async def execute(self, request: CommentActionRequest) -> CommentItem:
        comment = await self._load(request, Action.RESTORE)
        comment = await self.comment_service.restore(comment)
        return await self._item(comment, request.actor)


class ToggleCommentLikeUseCase(_CommentUseCase):
    """Use case for liking or unliking a visible comment."""

    async def execute(self, request: CommentActionRequest) -> CommentLikeResponse:
        """Flip the actor's like on the comment.

        Raises:
            AuthenticationError: If the actor is anonymous
            NotFoundError: If the comment is missing or hidden
        """
        if not request.actor.is_authenticated:
            raise AuthenticationError("Authentication required")
        comment = await self._load(request, Action.READ)
        comment = await self.comment_service.toggle_like(comment, request.actor.user_id)
        return CommentLikeResponse(
            likes=comment.like_count,
            user_liked=comment.is_liked_by(request.actor.user_id),
        )


class GetCommentUseCase(_CommentUseCase):
    """Use case for an admin inspecting any comment, deleted or not."""

    async def execute(self, request: CommentActionRequest) -> CommentItem:
        """Load one comment.

        Raises:
            PermissionDeniedError: If the actor is not an admin
            NotFoundError: If the comment does not exist
        """
        require_admin(request.actor)
        comment = await self.comment_service.get_by_id(CommentId(request.comment_id))
        return await self._item(comment, request.actor)
