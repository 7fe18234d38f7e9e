"""User profile use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import (
    PageInfo,
    PageRequest,
    ThreadItem,
    UserView,
)
from forum.domain.model.user import User
from forum.domain.repository import ThreadFilter
from forum.domain.service import ThreadService, UserService, require_permission
from forum.domain.value import Action, ActorContext, ThreadStatus, UserId


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: UUID
    actor: ActorContext = ActorContext.anonymous()


async def _load_visible_user(
    user_service: UserService, user_id: UUID, actor: ActorContext
) -> User:
    user = await user_service.get_by_id(UserId(user_id))
    require_permission(actor, Action.READ, user.to_target())
    return user


def _sees_private(actor: ActorContext, user: User) -> bool:
    return actor.is_admin or actor.user_id == user.id


class GetUserProfileUseCase:
    """Use case for viewing a profile.

    Banned users are reported as not found to everyone but admins. Email,
    student ID and ban details are only shown to the user and to admins.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> UserView:
        """Load the profile.

        Raises:
            NotFoundError: If the user is missing or hidden from the actor
        """
        user = await _load_visible_user(self.user_service, request.user_id, request.actor)
        return UserView.from_domain(user, include_private=_sees_private(request.actor, user))


class GetUserThreadsRequest(PageRequest):
    """Get a user's threads request."""

    user_id: UUID
    actor: ActorContext = ActorContext.anonymous()


class GetUserThreadsResponse(BaseModel):
    """A user and one page of their threads."""

    user: UserView
    threads: list[ThreadItem]
    pagination: PageInfo


class GetUserThreadsUseCase:
    """Use case for a profile's thread list.

    Other users see approved threads only; the user themselves and admins
    see every moderation status.
    """

    def __init__(self, user_service: UserService, thread_service: ThreadService) -> None:
        """Initialize get user threads use case.

        Args:
            user_service: User domain service
            thread_service: Thread domain service
        """
        self.user_service = user_service
        self.thread_service = thread_service

    async def execute(self, request: GetUserThreadsRequest) -> GetUserThreadsResponse:
        """List the user's threads, newest first.

        Raises:
            NotFoundError: If the user is missing or hidden from the actor
        """
        actor = request.actor
        user = await _load_visible_user(self.user_service, request.user_id, actor)
        private = _sees_private(actor, user)

        criteria = ThreadFilter(
            author_id=user.id,
            statuses=None if private else frozenset({ThreadStatus.APPROVED}),
        )
        threads, total = await self.thread_service.list_threads(
            criteria, limit=request.limit, offset=request.offset
        )
        authors = {user.id: user}
        return GetUserThreadsResponse(
            user=UserView.from_domain(user, include_private=private),
            threads=[ThreadItem.from_domain(t, authors, actor.user_id) for t in threads],
            pagination=PageInfo.build(request, total),
        )
