"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from forum.domain.repository.attachment import AttachmentStore
from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.thread import ThreadFilter, ThreadRepository
from forum.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "ThreadRepository",
    "ThreadFilter",
    "CommentRepository",
    "AttachmentStore",
]
