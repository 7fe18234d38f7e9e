"""Admin use cases."""

from .bans import BanUserRequest, BanUserUseCase, UnbanUserUseCase
from .users import (
    AdminUpdateUserRequest,
    AdminUpdateUserUseCase,
    CreateAdminRequest,
    CreateAdminUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    RestoreUserUseCase,
    UserActionRequest,
)

__all__ = [
    "AdminUpdateUserRequest",
    "AdminUpdateUserUseCase",
    "BanUserRequest",
    "BanUserUseCase",
    "CreateAdminRequest",
    "CreateAdminUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "RestoreUserUseCase",
    "UnbanUserUseCase",
    "UserActionRequest",
]
