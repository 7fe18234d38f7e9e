"""Toggle thread like use case."""

from pydantic import BaseModel

from forum.application.usecase.common import owner_is_active
from forum.domain.error import AuthenticationError
from forum.domain.service import ThreadService, UserService, require_permission
from forum.domain.value import Action, ThreadId

from .delete_thread import ThreadActionRequest


class LikeResponse(BaseModel):
    """Like state after a toggle."""

    likes: int
    user_liked: bool


class ToggleThreadLikeUseCase:
    """Use case for liking or unliking a visible thread."""

    def __init__(self, thread_service: ThreadService, user_service: UserService) -> None:
        self.thread_service = thread_service
        self.user_service = user_service

    async def execute(self, request: ThreadActionRequest) -> LikeResponse:
        """Flip the actor's like on the thread.

        Raises:
            AuthenticationError: If the actor is anonymous
            NotFoundError: If the thread is missing or hidden from the actor
        """
        if not request.actor.is_authenticated:
            raise AuthenticationError("Authentication required")
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        owner_active = await owner_is_active(self.user_service, thread.author_id)
        require_permission(request.actor, Action.READ, thread.to_target(owner_active))

        thread = await self.thread_service.toggle_like(thread, request.actor.user_id)
        return LikeResponse(
            likes=thread.like_count,
            user_liked=thread.is_liked_by(request.actor.user_id),
        )
