"""User profile routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from pydantic import BaseModel, Field

from forum.application.usecase.auth import GetCurrentUserUseCase
from forum.application.usecase.common import UserView
from forum.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    GetUserThreadsRequest,
    GetUserThreadsResponse,
    GetUserThreadsUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
)
from forum.config import Settings
from forum.domain.error import DomainError
from forum.interface.api.auth import optional_actor, require_actor
from forum.interface.api.envelope import ApiResponse, ok, page_params
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """Profile fields; only the fields sent are changed."""

    profile_picture_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    major: Optional[str] = None
    class_year: Optional[str] = None
    location: Optional[str] = None
    emplid: Optional[int] = Field(default=None, gt=0)


@router.patch("/me", response_model=ApiResponse[UserView])
async def update_my_profile(
    request: UpdateProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Update the caller's own profile."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        user = await update_profile_use_case.execute(
            UpdateUserProfileRequest(
                actor=actor, **request.model_dump(exclude_unset=True)
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user, message="Profile updated successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserView])
async def get_user_profile(
    user_id: UUID,
    get_profile_use_case: FromDishka[GetUserProfileUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """Public profile. Banned users are not found except for admins."""
    actor = await optional_actor(get_current_user_use_case, authorization)
    try:
        user = await get_profile_use_case.execute(
            GetUserProfileRequest(user_id=user_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(user)


@router.get("/{user_id}/threads", response_model=ApiResponse[GetUserThreadsResponse])
async def get_user_threads(
    user_id: UUID,
    get_threads_use_case: FromDishka[GetUserThreadsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[GetUserThreadsResponse]:
    """A user's threads, newest first."""
    actor = await optional_actor(get_current_user_use_case, authorization)
    try:
        result = await get_threads_use_case.execute(
            GetUserThreadsRequest(
                **page_params(page, limit, settings.pagination),
                user_id=user_id,
                actor=actor,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result, pagination=result.pagination)
