"""In-memory repository implementations for testing."""

from .attachment import InMemoryAttachmentStore
from .comment import InMemoryCommentRepository
from .thread import InMemoryThreadRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAttachmentStore",
    "InMemoryCommentRepository",
    "InMemoryThreadRepository",
    "InMemoryUserRepository",
]
