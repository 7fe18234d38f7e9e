"""Mock persistence providers for testing."""

from dishka import Scope, provide

from forum.domain.repository import (
    AttachmentStore,
    CommentRepository,
    ThreadRepository,
    UserRepository,
)
from forum.persistence.repository.inmemory import (
    InMemoryAttachmentStore,
    InMemoryCommentRepository,
    InMemoryThreadRepository,
    InMemoryUserRepository,
)
from forum.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so data outlives a single request: E2E tests drive several
    HTTP calls against one container. Each test builds its own container,
    which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_thread_repository(self) -> ThreadRepository:
        """Provide in-memory thread repository."""
        return InMemoryThreadRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_attachment_store(self) -> AttachmentStore:
        """Provide in-memory attachment store."""
        return InMemoryAttachmentStore()
