"""Get thread use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import ThreadItem, load_authors, owner_is_active
from forum.domain.service import ThreadService, UserService, require_permission
from forum.domain.value import Action, ActorContext, ThreadId


class GetThreadRequest(BaseModel):
    """Get thread request."""

    thread_id: UUID
    actor: ActorContext = ActorContext.anonymous()
    increment_view: bool = False


class GetThreadUseCase:
    """Use case for reading one thread.

    Deleted threads, unapproved threads and threads by banned authors are
    reported as not found unless the actor is their author or an admin.
    """

    def __init__(self, thread_service: ThreadService, user_service: UserService) -> None:
        """Initialize get thread use case.

        Args:
            thread_service: Thread domain service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.user_service = user_service

    async def execute(self, request: GetThreadRequest) -> ThreadItem:
        """Load the thread, optionally counting a view.

        Raises:
            NotFoundError: If the thread is missing or hidden from the actor
        """
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        owner_active = await owner_is_active(self.user_service, thread.author_id)
        require_permission(request.actor, Action.READ, thread.to_target(owner_active))

        if request.increment_view:
            thread = await self.thread_service.record_view(thread)

        authors = await load_authors(self.user_service, [thread.author_id])
        return ThreadItem.from_domain(thread, authors, request.actor.user_id)
