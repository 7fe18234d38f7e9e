"""Admin routes.

Every route requires an authenticated admin; finer rules (level 2 only,
who may ban whom) are enforced by the use cases.
"""

from typing import Any, Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, status
from pydantic import BaseModel, EmailStr, Field

from forum.application.usecase.admin import (
    AdminUpdateUserRequest,
    AdminUpdateUserUseCase,
    BanUserRequest,
    BanUserUseCase,
    CreateAdminRequest,
    CreateAdminUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
    RestoreUserUseCase,
    UnbanUserUseCase,
    UserActionRequest,
)
from forum.application.usecase.auth import GetCurrentUserUseCase
from forum.application.usecase.comment import (
    CommentActionRequest,
    DeleteCommentUseCase,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    RestoreCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.application.usecase.common import CommentItem, ThreadItem, UserView
from forum.application.usecase.thread import (
    DeleteThreadUseCase,
    GetThreadRequest,
    GetThreadUseCase,
    ListThreadsRequest,
    ListThreadsUseCase,
    RestoreThreadUseCase,
    ThreadActionRequest,
    UpdateThreadRequest,
    UpdateThreadUseCase,
)
from forum.config import Settings
from forum.domain.error import DomainError
from forum.domain.model.comment import MAX_COMMENT_LENGTH
from forum.domain.service import require_admin
from forum.domain.value import ActorContext, Role, ThreadSortOrder, ThreadStatus
from forum.interface.api.auth import require_actor
from forum.interface.api.envelope import ApiResponse, ok, page_params
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


async def require_admin_actor(
    get_current_user_use_case: GetCurrentUserUseCase, authorization: Optional[str]
) -> ActorContext:
    """Resolve the caller and refuse non-admins with 403."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        require_admin(actor)
    except DomainError as e:
        raise to_http_exception(e) from e
    return actor


# Users


class CreateAdminAPIRequest(BaseModel):
    """API request for creating an admin account."""

    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role


class AdminUpdateUserAPIRequest(BaseModel):
    """Fields an admin may change on a user; only the fields sent are changed."""

    username: Optional[str] = Field(default=None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    major: Optional[str] = None
    class_year: Optional[str] = None
    location: Optional[str] = None
    role: Optional[Role] = None


class BanAPIRequest(BaseModel):
    """Ban length in hours, or ``"forever"``; omitted means permanent."""

    duration: Any = None


@router.get("/users", response_model=ApiResponse[list[UserView]])
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[list[UserView]]:
    """All users, including banned ones, with ban details."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        result = await list_users_use_case.execute(
            ListUsersRequest(**page_params(page, limit, settings.pagination), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result.users, pagination=result.pagination)


@router.get("/users/{user_id}", response_model=ApiResponse[UserView])
async def get_user(
    user_id: UUID,
    get_user_use_case: FromDishka[GetUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """One user with private fields and ban details."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        user = await get_user_use_case.execute(UserActionRequest(user_id=user_id, actor=actor))
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user)


@router.post(
    "/users",
    response_model=ApiResponse[UserView],
    status_code=status.HTTP_201_CREATED,
)
async def create_admin(
    request: CreateAdminAPIRequest,
    create_admin_use_case: FromDishka[CreateAdminUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Create an admin account (Admin Level 2 only)."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        user = await create_admin_use_case.execute(
            CreateAdminRequest(actor=actor, **request.model_dump())
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user, message="Admin user created successfully")


@router.put("/users/{user_id}", response_model=ApiResponse[UserView])
async def update_user(
    user_id: UUID,
    request: AdminUpdateUserAPIRequest,
    update_user_use_case: FromDishka[AdminUpdateUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Edit a user. Changing the role needs Admin Level 2."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        user = await update_user_use_case.execute(
            AdminUpdateUserRequest(
                user_id=user_id, actor=actor, **request.model_dump(exclude_unset=True)
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user, message="User updated successfully")


@router.delete("/users/{user_id}", response_model=ApiResponse[UserView])
async def delete_user(
    user_id: UUID,
    delete_user_use_case: FromDishka[DeleteUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Deactivate a user (Admin Level 2 only)."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        user = await delete_user_use_case.execute(
            UserActionRequest(user_id=user_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user, message="User deactivated successfully")


@router.post("/users/{user_id}/restore", response_model=ApiResponse[UserView])
async def restore_user(
    user_id: UUID,
    restore_user_use_case: FromDishka[RestoreUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Reactivate a user (Admin Level 2 only)."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        user = await restore_user_use_case.execute(
            UserActionRequest(user_id=user_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user, message="User restored successfully")


@router.post("/users/{user_id}/ban", response_model=ApiResponse[UserView])
async def ban_user(
    user_id: UUID,
    ban_user_use_case: FromDishka[BanUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    request: Optional[BanAPIRequest] = None,
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Ban a user for ``duration`` hours, or permanently."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    duration = request.duration if request else None
    try:
        user = await ban_user_use_case.execute(
            BanUserRequest(user_id=user_id, actor=actor, duration=duration)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    if user.banned_until is None:
        return ok(user, message="User banned permanently")
    return ok(user, message=f"User banned until {user.banned_until.isoformat()}")


@router.post("/users/{user_id}/unban", response_model=ApiResponse[UserView])
async def unban_user(
    user_id: UUID,
    unban_user_use_case: FromDishka[UnbanUserUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Lift a ban."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        user = await unban_user_use_case.execute(
            UserActionRequest(user_id=user_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user, message="User unbanned successfully")


# Threads


class AdminUpdateThreadAPIRequest(BaseModel):
    """Thread fields an admin may change."""

    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    content: Optional[str] = Field(default=None, min_length=10)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)


@router.get("/threads", response_model=ApiResponse[list[ThreadItem]])
async def list_threads(
    list_threads_use_case: FromDishka[ListThreadsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    sort: ThreadSortOrder = ThreadSortOrder.RECENT,
    category: Optional[str] = None,
    author_id: Optional[UUID] = None,
    status_filter: Optional[ThreadStatus] = Query(default=None, alias="status"),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[list[ThreadItem]]:
    """All threads, deleted ones included."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        result = await list_threads_use_case.execute(
            ListThreadsRequest(
                **page_params(page, limit, settings.pagination),
                actor=actor,
                sort=sort,
                category=category,
                author_id=author_id,
                status=status_filter,
                include_inactive=True,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result.threads, pagination=result.pagination)


@router.get("/threads/{thread_id}", response_model=ApiResponse[ThreadItem])
async def get_thread(
    thread_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Any thread, deleted or not."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        thread = await get_thread_use_case.execute(
            GetThreadRequest(thread_id=thread_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(thread)


@router.put("/threads/{thread_id}", response_model=ApiResponse[ThreadItem])
async def update_thread(
    thread_id: UUID,
    request: AdminUpdateThreadAPIRequest,
    update_thread_use_case: FromDishka[UpdateThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Edit a thread's text fields."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        thread = await update_thread_use_case.execute(
            UpdateThreadRequest(
                thread_id=thread_id, actor=actor, **request.model_dump(exclude_none=True)
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(thread, message="Thread updated successfully")


@router.delete("/threads/{thread_id}", response_model=ApiResponse[None])
async def delete_thread(
    thread_id: UUID,
    delete_thread_use_case: FromDishka[DeleteThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[None]:
    """Soft-delete any thread (Admin Level 2 only)."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        await delete_thread_use_case.execute(
            ThreadActionRequest(thread_id=thread_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(message="Thread deleted successfully")


@router.post("/threads/{thread_id}/restore", response_model=ApiResponse[ThreadItem])
async def restore_thread(
    thread_id: UUID,
    restore_thread_use_case: FromDishka[RestoreThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Restore a deleted thread (Admin Level 2 only)."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        thread = await restore_thread_use_case.execute(
            ThreadActionRequest(thread_id=thread_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(thread, message="Thread restored successfully")


# Comments


class AdminUpdateCommentAPIRequest(BaseModel):
    """Comment text as edited by an admin."""

    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)


@router.get("/comments", response_model=ApiResponse[list[CommentItem]])
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[list[CommentItem]]:
    """All comments, newest first, deleted ones included."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        result = await list_comments_use_case.execute(
            ListCommentsRequest(**page_params(page, limit, settings.pagination), actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result.comments, pagination=result.pagination)


@router.get("/comments/{comment_id}", response_model=ApiResponse[CommentItem])
async def get_comment(
    comment_id: UUID,
    get_comment_use_case: FromDishka[GetCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[CommentItem]:
    """Any comment, deleted or not."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        comment = await get_comment_use_case.execute(
            CommentActionRequest(comment_id=comment_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(comment)


@router.put("/comments/{comment_id}", response_model=ApiResponse[CommentItem])
async def update_comment(
    comment_id: UUID,
    request: AdminUpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[CommentItem]:
    """Edit a comment's text."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        comment = await update_comment_use_case.execute(
            UpdateCommentRequest(comment_id=comment_id, actor=actor, content=request.content)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(comment, message="Comment updated successfully")


@router.delete("/comments/{comment_id}", response_model=ApiResponse[None])
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[None]:
    """Soft-delete any comment (Admin Level 2 only)."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        await delete_comment_use_case.execute(
            CommentActionRequest(comment_id=comment_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(message="Comment deleted successfully")


@router.post("/comments/{comment_id}/restore", response_model=ApiResponse[CommentItem])
async def restore_comment(
    comment_id: UUID,
    restore_comment_use_case: FromDishka[RestoreCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[CommentItem]:
    """Restore a deleted comment (Admin Level 2 only)."""
    actor = await require_admin_actor(get_current_user_use_case, authorization)
    try:
        comment = await restore_comment_use_case.execute(
            CommentActionRequest(comment_id=comment_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(comment, message="Comment restored successfully")
