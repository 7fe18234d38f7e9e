"""Delete and restore thread use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import ThreadItem, load_authors, owner_is_active
from forum.domain.service import ThreadService, UserService, require_permission
from forum.domain.value import Action, ActorContext, ThreadId


class ThreadActionRequest(BaseModel):
    """Request naming one thread and the actor acting on it."""

    thread_id: UUID
    actor: ActorContext


class DeleteThreadUseCase:
    """Use case for soft-deleting a thread.

    Authors may delete their own threads; deleting someone else's needs
    Admin Level 2. The thread's comments are left untouched.
    """

    def __init__(self, thread_service: ThreadService, user_service: UserService) -> None:
        self.thread_service = thread_service
        self.user_service = user_service

    async def execute(self, request: ThreadActionRequest) -> None:
        """Execute delete thread flow.

        Raises:
            NotFoundError: If the thread is missing or already deleted
            PermissionDeniedError: If the actor may not delete it
        """
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        owner_active = await owner_is_active(self.user_service, thread.author_id)
        require_permission(request.actor, Action.DELETE, thread.to_target(owner_active))
        await self.thread_service.soft_delete(thread)


class RestoreThreadUseCase:
    """Use case for bringing back a soft-deleted thread (Admin Level 2)."""

    def __init__(self, thread_service: ThreadService, user_service: UserService) -> None:
        self.thread_service = thread_service
        self.user_service = user_service

    async def execute(self, request: ThreadActionRequest) -> ThreadItem:
        """Execute restore thread flow.

        Raises:
            NotFoundError: If the thread does not exist
            PermissionDeniedError: If the actor is not Admin Level 2
        """
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        require_permission(request.actor, Action.RESTORE, thread.to_target())
        thread = await self.thread_service.restore(thread)
        authors = await load_authors(self.user_service, [thread.author_id])
        return ThreadItem.from_domain(thread, authors, request.actor.user_id)
