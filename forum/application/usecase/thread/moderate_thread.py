"""Approve and reject thread use cases."""

from pydantic import BaseModel

from forum.application.usecase.common import ThreadItem, load_authors
from forum.domain.service import ThreadService, UserService, require_permission
from forum.domain.value import Action, ThreadId, ThreadStatus

from .delete_thread import ThreadActionRequest

_OUTCOMES = {
    Action.APPROVE: ThreadStatus.APPROVED,
    Action.REJECT: ThreadStatus.REJECTED,
}


class ModerateThreadRequest(ThreadActionRequest):
    """Moderation decision on a pending thread."""

    action: Action


class ModerateThreadUseCase:
    """Use case for an admin approving or rejecting a pending thread."""

    def __init__(self, thread_service: ThreadService, user_service: UserService) -> None:
        """Initialize moderate thread use case.

        Args:
            thread_service: Thread domain service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.user_service = user_service

    async def execute(self, request: ModerateThreadRequest) -> ThreadItem:
        """Record the decision.

        Raises:
            ValueError: If the action is not approve or reject
            NotFoundError: If the thread is missing or deleted
            PermissionDeniedError: If the actor is not an admin or the
                thread is no longer pending
        """
        if request.action not in _OUTCOMES:
            raise ValueError(f"Not a moderation action: {request.action}")
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        require_permission(request.actor, request.action, thread.to_target())
        thread = await self.thread_service.set_status(thread, _OUTCOMES[request.action])
        authors = await load_authors(self.user_service, [thread.author_id])
        return ThreadItem.from_domain(thread, authors, request.actor.user_id)
