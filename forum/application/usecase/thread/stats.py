"""Forum statistics use cases."""

from pydantic import BaseModel

from forum.domain.service import (
    CommentService,
    ThreadService,
    UserService,
    require_admin,
)
from forum.domain.value import ActorContext, ThreadStatus


class CategoryStats(BaseModel):
    """Activity in one category."""

    threads: int
    posts: int  # Threads plus their comments


class PublicStatsResponse(BaseModel):
    """Landing-page statistics."""

    total_members: int
    total_threads: int
    total_posts: int
    categories: dict[str, CategoryStats]


class PublicStatsUseCase:
    """Use case for the public forum counters.

    Only approved, active threads and active comments are counted.
    """

    def __init__(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        self.thread_service = thread_service
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self) -> PublicStatsResponse:
        members = await self.user_service.count_members()
        by_status = await self.thread_service.count_by_status()
        comments = await self.comment_service.count_active()
        by_category = await self.thread_service.category_stats()

        approved = by_status.get(ThreadStatus.APPROVED, 0)
        return PublicStatsResponse(
            total_members=members,
            total_threads=approved,
            total_posts=approved + comments,
            categories={
                category: CategoryStats(threads=threads, posts=threads + replies)
                for category, (threads, replies) in sorted(by_category.items())
            },
        )


class ThreadStatsRequest(BaseModel):
    """Admin statistics request."""

    actor: ActorContext


class ThreadStatsResponse(BaseModel):
    """Moderation queue counters."""

    total: int
    pending: int
    approved: int
    rejected: int


class ThreadStatsUseCase:
    """Use case for the admin moderation counters."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: ThreadStatsRequest) -> ThreadStatsResponse:
        """Count active threads per status.

        Raises:
            PermissionDeniedError: If the actor is not an admin
        """
        require_admin(request.actor)
        by_status = await self.thread_service.count_by_status()
        pending = by_status.get(ThreadStatus.PENDING, 0)
        approved = by_status.get(ThreadStatus.APPROVED, 0)
        rejected = by_status.get(ThreadStatus.REJECTED, 0)
        return ThreadStatsResponse(
            total=pending + approved + rejected,
            pending=pending,
            approved=approved,
            rejected=rejected,
        )
