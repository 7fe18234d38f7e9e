"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AttachmentSettings, AuthSettings
from forum.domain.repository import (
    AttachmentStore,
    CommentRepository,
    ThreadRepository,
    UserRepository,
)
from forum.domain.service import (
    AttachmentService,
    AuthService,
    CommentService,
    JWTService,
    ThreadService,
    UserService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_auth_service(
        self, user_service: UserService, auth_settings: AuthSettings
    ) -> AuthService:
        """Provide password authentication domain service."""
        return AuthService(user_service=user_service, auth_settings=auth_settings)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_thread_service(self, thread_repository: ThreadRepository) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(thread_repository=thread_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, thread_service: ThreadService
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository, thread_service=thread_service
        )

    @provide
    def get_attachment_service(
        self, store: AttachmentStore, settings: AttachmentSettings
    ) -> AttachmentService:
        """Provide attachment domain service."""
        return AttachmentService(store=store, settings=settings)
