"""Admin list comments use case."""

from pydantic import BaseModel

from forum.application.usecase.common import (
    CommentItem,
    PageInfo,
    PageRequest,
    load_authors,
)
from forum.domain.service import CommentService, UserService, require_admin
from forum.domain.value import ActorContext


class ListCommentsRequest(PageRequest):
    """Admin comment listing request."""

    actor: ActorContext
    include_inactive: bool = True


class ListCommentsResponse(BaseModel):
    """One page of comments."""

    comments: list[CommentItem]
    pagination: PageInfo


class ListCommentsUseCase:
    """Use case for the admin view of all comments, newest first."""

    def __init__(self, comment_service: CommentService, user_service: UserService) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """List comments across threads.

        Raises:
            PermissionDeniedError: If the actor is not an admin
        """
        require_admin(request.actor)
        comments, total = await self.comment_service.list_comments(
            include_inactive=request.include_inactive,
            limit=request.limit,
            offset=request.offset,
        )
        authors = await load_authors(self.user_service, (c.author_id for c in comments))
        return ListCommentsResponse(
            comments=[
                CommentItem.from_domain(c, authors, request.actor.user_id)
                for c in comments
            ],
            pagination=PageInfo.build(request, total),
        )
