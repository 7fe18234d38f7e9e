"""Comment routes."""

from typing import Any, Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel, Field, field_validator

from forum.application.usecase.auth import GetCurrentUserUseCase
from forum.application.usecase.comment import (
    CommentActionRequest,
    CommentLikeResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetThreadCommentsRequest,
    GetThreadCommentsUseCase,
    ToggleCommentLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.application.usecase.common import CommentItem
from forum.domain.error import DomainError
from forum.domain.model.comment import MAX_COMMENT_LENGTH
from forum.interface.api.auth import optional_actor, require_actor
from forum.interface.api.envelope import ApiResponse, ok
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)
    parent_comment_id: Optional[UUID] = None

    @field_validator("parent_comment_id", mode="before")
    @classmethod
    def blank_parent_is_root(cls, value: Any) -> Any:
        """An empty parent ID means a top-level comment."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)


@router.get("/thread/{thread_id}", response_model=ApiResponse[list[CommentItem]])
async def get_thread_comments(
    thread_id: UUID,
    get_comments_use_case: FromDishka[GetThreadCommentsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[list[CommentItem]]:
    """Get a thread's comments as a nested reply tree, oldest first."""
    actor = await optional_actor(get_current_user_use_case, authorization)
    try:
        result = await get_comments_use_case.execute(
            GetThreadCommentsRequest(thread_id=thread_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result.comments)


@router.post(
    "/thread/{thread_id}",
    response_model=ApiResponse[CommentItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    thread_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[CommentItem]:
    """Comment on an approved thread, optionally replying to a comment."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        comment = await create_comment_use_case.execute(
            CreateCommentRequest(
                thread_id=thread_id,
                actor=actor,
                content=request.content,
                parent_comment_id=request.parent_comment_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(comment, message="Comment created successfully")


@router.put("/{comment_id}", response_model=ApiResponse[CommentItem])
async def update_comment(
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[CommentItem]:
    """Edit a comment (author or admin)."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        comment = await update_comment_use_case.execute(
            UpdateCommentRequest(comment_id=comment_id, actor=actor, content=request.content)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(comment, message="Comment updated successfully")


@router.delete("/{comment_id}", response_model=ApiResponse[None])
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[None]:
    """Soft-delete a comment. Its replies stay visible."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        await delete_comment_use_case.execute(
            CommentActionRequest(comment_id=comment_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(message="Comment deleted successfully")


@router.post("/{comment_id}/like", response_model=ApiResponse[CommentLikeResponse])
async def toggle_comment_like(
    comment_id: UUID,
    toggle_like_use_case: FromDishka[ToggleCommentLikeUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[CommentLikeResponse]:
    """Like or unlike a comment."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        result = await toggle_like_use_case.execute(
            CommentActionRequest(comment_id=comment_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result)
