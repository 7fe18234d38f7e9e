"""Repository implementations."""

from forum.persistence.repository.attachment import PostgresAttachmentStore
from forum.persistence.repository.comment import PostgresCommentRepository
from forum.persistence.repository.thread import PostgresThreadRepository
from forum.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresAttachmentStore",
    "PostgresCommentRepository",
    "PostgresThreadRepository",
    "PostgresUserRepository",
]
