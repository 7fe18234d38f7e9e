"""List threads use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import (
    PageInfo,
    PageRequest,
    ThreadItem,
    load_authors,
)
from forum.domain.repository import ThreadFilter
from forum.domain.service import ThreadService, UserService, require_admin
from forum.domain.value import ActorContext, ThreadSortOrder, ThreadStatus, UserId

ALL_CATEGORIES = "all"


class ListThreadsRequest(PageRequest):
    """List threads request.

    ``status`` and ``include_inactive`` are honoured for admins only.
    """

    actor: ActorContext = ActorContext.anonymous()
    sort: ThreadSortOrder = ThreadSortOrder.RECENT
    category: Optional[str] = None
    author_id: Optional[UUID] = None
    status: Optional[ThreadStatus] = None
    include_inactive: bool = False


class ListThreadsResponse(BaseModel):
    """List threads response."""

    threads: list[ThreadItem]
    pagination: PageInfo


class ListThreadsUseCase:
    """Use case for browsing threads.

    Regular users see approved threads of authors who are not banned, plus
    all of their own threads when filtering by themselves. Admins see every
    status and may include deleted threads.
    """

    def __init__(self, thread_service: ThreadService, user_service: UserService) -> None:
        """Initialize list threads use case.

        Args:
            thread_service: Thread domain service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.user_service = user_service

    async def _criteria(self, request: ListThreadsRequest) -> ThreadFilter:
        actor = request.actor
        category = (
            None
            if not request.category or request.category == ALL_CATEGORIES
            else request.category
        )
        author_id = UserId(request.author_id) if request.author_id else None

        if actor.is_admin:
            return ThreadFilter(
                statuses=frozenset({request.status}) if request.status else None,
                category=category,
                author_id=author_id,
                include_inactive=request.include_inactive,
            )
        if actor.is_authenticated and author_id == actor.user_id:
            return ThreadFilter(category=category, author_id=author_id)
        return ThreadFilter(
            statuses=frozenset({ThreadStatus.APPROVED}),
            category=category,
            author_id=author_id,
            exclude_author_ids=await self.user_service.banned_user_ids(),
        )

    async def execute(self, request: ListThreadsRequest) -> ListThreadsResponse:
        """List one page of threads visible to the actor."""
        criteria = await self._criteria(request)
        threads, total = await self.thread_service.list_threads(
            criteria, sort=request.sort, limit=request.limit, offset=request.offset
        )
        authors = await load_authors(self.user_service, (t.author_id for t in threads))
        return ListThreadsResponse(
            threads=[
                ThreadItem.from_domain(t, authors, request.actor.user_id) for t in threads
            ],
            pagination=PageInfo.build(request, total),
        )


class ListPendingThreadsRequest(PageRequest):
    """Moderation queue request."""

    actor: ActorContext


class ListPendingThreadsUseCase:
    """Use case for the admin moderation queue (oldest first)."""

    def __init__(self, thread_service: ThreadService, user_service: UserService) -> None:
        self.thread_service = thread_service
        self.user_service = user_service

    async def execute(self, request: ListPendingThreadsRequest) -> ListThreadsResponse:
        """List pending threads.

        Raises:
            PermissionDeniedError: If the actor is not an admin
        """
        require_admin(request.actor)
        threads, total = await self.thread_service.list_threads(
            ThreadFilter(statuses=frozenset({ThreadStatus.PENDING})),
            limit=request.limit,
            offset=request.offset,
        )
        authors = await load_authors(self.user_service, (t.author_id for t in threads))
        return ListThreadsResponse(
            threads=[
                ThreadItem.from_domain(t, authors, request.actor.user_id) for t in threads
            ],
            pagination=PageInfo.build(request, total),
        )
