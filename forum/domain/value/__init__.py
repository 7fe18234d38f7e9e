"""Domain value objects for the forum."""

from forum.domain.value.access import (
    Action,
    ActorContext,
    Decision,
    DenialKind,
    Deny,
    Permit,
    TargetContext,
    TargetKind,
)
from forum.domain.value.identifiers import (
    AttachmentId,
    CommentId,
    ThreadId,
    UserId,
)
from forum.domain.value.types import Role, ThreadSortOrder, ThreadStatus, Username

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "CommentId",
    "AttachmentId",
    # Types
    "Role",
    "ThreadStatus",
    "ThreadSortOrder",
    "Username",
    # Access control
    "Action",
    "ActorContext",
    "Decision",
    "DenialKind",
    "Deny",
    "Permit",
    "TargetContext",
    "TargetKind",
]
