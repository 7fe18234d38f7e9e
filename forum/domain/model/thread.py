"""Thread aggregate root.

Threads are the top-level discussions of the forum. New threads wait in a
moderation queue until an admin approves or rejects them.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import ModeratableEntity, utc_now
from forum.domain.value import (
    AttachmentId,
    TargetContext,
    TargetKind,
    ThreadId,
    ThreadStatus,
    UserId,
)


class Thread(ModeratableEntity):
    """Thread aggregate root."""

    id: ThreadId
    title: str = Field(min_length=3, max_length=200)
    content: str = Field(min_length=10)
    category: str = Field(min_length=1, max_length=100)
    author_id: UserId
    status: ThreadStatus = ThreadStatus.PENDING
    likes: list[UserId] = Field(default_factory=list)
    views: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)  # Active comments, kept by CommentService
    attachments: list[AttachmentId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def is_liked_by(self, user_id: UserId | None) -> bool:
        return user_id is not None and user_id in self.likes

    def to_target(self, owner_active: bool = True) -> TargetContext:
        return TargetContext(
            kind=TargetKind.THREAD,
            target_id=self.id,
            owner_id=self.author_id,
            is_active=self.is_active,
            status=self.status,
            owner_active=owner_active,
        )
