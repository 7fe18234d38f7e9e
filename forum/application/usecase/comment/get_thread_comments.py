"""Get thread comments use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import CommentItem, load_authors, owner_is_active
from forum.domain.service import (
    CommentService,
    ThreadService,
    UserService,
    build_comment_forest,
    require_permission,
)
from forum.domain.value import Action, ActorContext, ThreadId


class GetThreadCommentsRequest(BaseModel):
    """Get thread comments request."""

    thread_id: UUID
    actor: ActorContext = ActorContext.anonymous()


class GetThreadCommentsResponse(BaseModel):
    """A thread's comments as a reply forest."""

    comments: list[CommentItem]
    total: int  # Comments in the forest, replies included


class GetThreadCommentsUseCase:
    """Use case for reading the discussion under a thread.

    Regular viewers get active comments by authors who are not banned.
    Admins also see soft-deleted comments and comments by banned users.
    Replies whose parent is not shown are promoted to top level.
    """

    def __init__(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize get thread comments use case.

        Args:
            thread_service: Thread domain service
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: GetThreadCommentsRequest) -> GetThreadCommentsResponse:
        """Load the comments and assemble the forest.

        Raises:
            NotFoundError: If the thread is missing or hidden from the actor
        """
        actor = request.actor
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        owner_active = await owner_is_active(self.user_service, thread.author_id)
        require_permission(actor, Action.READ, thread.to_target(owner_active))

        if actor.is_admin:
            comments = await self.comment_service.get_comments_for_thread(
                thread.id, include_inactive=True
            )
        else:
            comments = await self.comment_service.get_comments_for_thread(
                thread.id, exclude_author_ids=await self.user_service.banned_user_ids()
            )

        forest = build_comment_forest(comments, actor.user_id)
        authors = await load_authors(self.user_service, (c.author_id for c in comments))
        return GetThreadCommentsResponse(
            comments=[CommentItem.from_node(node, authors) for node in forest],
            total=sum(1 for root in forest for _ in root.walk()),
        )
