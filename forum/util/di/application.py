"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.admin import (
    AdminUpdateUserUseCase,
    BanUserUseCase,
    CreateAdminUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RestoreUserUseCase,
    UnbanUserUseCase,
)
from forum.application.usecase.attachment import (
    DownloadAttachmentUseCase,
    GetAttachmentInfoUseCase,
)
from forum.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    RegisterUseCase,
)
from forum.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    GetThreadCommentsUseCase,
    ListCommentsUseCase,
    RestoreCommentUseCase,
    ToggleCommentLikeUseCase,
    UpdateCommentUseCase,
)
from forum.application.usecase.thread import (
    CreateThreadUseCase,
    DeleteThreadUseCase,
    GetThreadUseCase,
    ListPendingThreadsUseCase,
    ListThreadsUseCase,
    ModerateThreadUseCase,
    PublicStatsUseCase,
    RestoreThreadUseCase,
    ThreadStatsUseCase,
    ToggleThreadLikeUseCase,
    UpdateThreadUseCase,
)
from forum.application.usecase.user import (
    GetUserProfileUseCase,
    GetUserThreadsUseCase,
    UpdateUserProfileUseCase,
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


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases whose constructors take only domain services are wired from
    their type hints; the auth flows are spelled out.
    """

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_register_use_case(
        self, auth_service: AuthService, jwt_service: JWTService
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(auth_service=auth_service, jwt_service=jwt_service)

    @provide
    def get_login_use_case(
        self, auth_service: AuthService, jwt_service: JWTService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(auth_service=auth_service, jwt_service=jwt_service)

    @provide
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Thread use cases
    @provide
    def get_create_thread_use_case(
        self,
        thread_service: ThreadService,
        attachment_service: AttachmentService,
        user_service: UserService,
    ) -> CreateThreadUseCase:
        """Provide create thread use case."""
        return CreateThreadUseCase(
            thread_service=thread_service,
            attachment_service=attachment_service,
            user_service=user_service,
        )

    @provide
    def get_update_thread_use_case(
        self,
        thread_service: ThreadService,
        attachment_service: AttachmentService,
        user_service: UserService,
    ) -> UpdateThreadUseCase:
        """Provide update thread use case."""
        return UpdateThreadUseCase(
            thread_service=thread_service,
            attachment_service=attachment_service,
            user_service=user_service,
        )

    @provide
    def get_thread_comments_use_case(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> GetThreadCommentsUseCase:
        """Provide get thread comments use case."""
        return GetThreadCommentsUseCase(
            thread_service=thread_service,
            comment_service=comment_service,
            user_service=user_service,
        )

    list_threads = provide(ListThreadsUseCase)
    list_pending_threads = provide(ListPendingThreadsUseCase)
    get_thread = provide(GetThreadUseCase)
    delete_thread = provide(DeleteThreadUseCase)
    restore_thread = provide(RestoreThreadUseCase)
    toggle_thread_like = provide(ToggleThreadLikeUseCase)
    moderate_thread = provide(ModerateThreadUseCase)
    thread_stats = provide(ThreadStatsUseCase)
    public_stats = provide(PublicStatsUseCase)

    # Comment use cases
    create_comment = provide(CreateCommentUseCase)
    update_comment = provide(UpdateCommentUseCase)
    delete_comment = provide(DeleteCommentUseCase)
    restore_comment = provide(RestoreCommentUseCase)
    toggle_comment_like = provide(ToggleCommentLikeUseCase)
    list_comments = provide(ListCommentsUseCase)
    get_comment = provide(GetCommentUseCase)

    # User use cases
    get_user_profile = provide(GetUserProfileUseCase)
    get_user_threads = provide(GetUserThreadsUseCase)
    update_user_profile = provide(UpdateUserProfileUseCase)

    # Admin use cases
    list_users = provide(ListUsersUseCase)
    get_user = provide(GetUserUseCase)
    create_admin = provide(CreateAdminUseCase)
    admin_update_user = provide(AdminUpdateUserUseCase)
    delete_user = provide(DeleteUserUseCase)
    restore_user = provide(RestoreUserUseCase)
    ban_user = provide(BanUserUseCase)
    unban_user = provide(UnbanUserUseCase)

    # Attachment use cases
    get_attachment_info = provide(GetAttachmentInfoUseCase)
    download_attachment = provide(DownloadAttachmentUseCase)
