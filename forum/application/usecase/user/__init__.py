"""User use cases."""

from .get_profile import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    GetUserThreadsRequest,
    GetUserThreadsResponse,
    GetUserThreadsUseCase,
)
from .update_profile import UpdateUserProfileRequest, UpdateUserProfileUseCase

__all__ = [
    "GetUserProfileRequest",
    "GetUserProfileUseCase",
    "GetUserThreadsRequest",
    "GetUserThreadsResponse",
    "GetUserThreadsUseCase",
    "UpdateUserProfileRequest",
    "UpdateUserProfileUseCase",
]
