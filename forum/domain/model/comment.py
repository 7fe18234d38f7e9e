"""Comment entity.

Comments belong to one thread and may reply to another comment of the same
thread. Storage is flat; the reply tree is rebuilt per request.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import ModeratableEntity, utc_now
from forum.domain.value import (
    AttachmentId,
    CommentId,
    TargetContext,
    TargetKind,
    ThreadId,
    UserId,
)

MAX_COMMENT_LENGTH = 2000


class Comment(ModeratableEntity):
    """Comment entity.

    ``parent_comment_id`` is fixed at creation and may only reference an
    existing active comment, so the parent links always form a tree.
    """

    id: CommentId
    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)
    author_id: UserId
    thread_id: ThreadId
    parent_comment_id: Optional[CommentId] = None
    likes: list[UserId] = Field(default_factory=list)
    attachments: list[AttachmentId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def like_count(self) -> int:
        return len(self.likes)

    def is_liked_by(self, user_id: UserId | None) -> bool:
        return user_id is not None and user_id in self.likes

    def to_target(self, owner_active: bool = True) -> TargetContext:
        return TargetContext(
            kind=TargetKind.COMMENT,
            target_id=self.id,
            owner_id=self.author_id,
            is_active=self.is_active,
            owner_active=owner_active,
        )
