"""Admin user management use cases."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from forum.application.usecase.common import PageInfo, PageRequest, UserView
from forum.domain.model.common import utc_now
from forum.domain.model.user import User
from forum.domain.service import (
    AuthService,
    UserService,
    require_admin,
    require_permission,
)
from forum.domain.value import Action, ActorContext, Role, UserId


class UserActionRequest(BaseModel):
    """Request naming one user and the admin acting on them."""

    user_id: UUID
    actor: ActorContext


async def load_target(
    user_service: UserService, request: UserActionRequest, action: Action
) -> User:
    user = await user_service.get_by_id(UserId(request.user_id))
    require_permission(request.actor, action, user.to_target())
    return user


class ListUsersRequest(PageRequest):
    """Admin user listing request."""

    actor: ActorContext
    include_inactive: bool = True


class ListUsersResponse(BaseModel):
    """One page of users with their private fields."""

    users: list[UserView]
    pagination: PageInfo


class ListUsersUseCase:
    """Use case for the admin user table.

    Lapsed timed bans are lifted while listing, so the page shows current
    ban state.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        """List one page of users.

        Raises:
            PermissionDeniedError: If the actor is not an admin
        """
        require_admin(request.actor)
        users, total = await self.user_service.list_users(
            include_inactive=request.include_inactive,
            limit=request.limit,
            offset=request.offset,
        )
        return ListUsersResponse(
            users=[UserView.from_domain(user, include_private=True) for user in users],
            pagination=PageInfo.build(request, total),
        )


class GetUserUseCase:
    """Use case for an admin inspecting one user, banned or not."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UserActionRequest) -> UserView:
        require_admin(request.actor)
        user = await self.user_service.get_by_id(UserId(request.user_id))
        return UserView.from_domain(user, include_private=True)


class CreateAdminRequest(BaseModel):
    """Create admin request."""

    actor: ActorContext
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role

    @field_validator("role")
    @classmethod
    def validate_admin_role(cls, v: Role) -> Role:
        """Only admin roles can be created here."""
        if not v.is_admin:
            raise ValueError("Role must be an admin role")
        return v


class CreateAdminUseCase:
    """Use case for Admin Level 2 creating another admin account."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize create admin use case.

        Args:
            auth_service: Authentication domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: CreateAdminRequest) -> UserView:
        """Create the admin account.

        Raises:
            PermissionDeniedError: If the actor is not Admin Level 2
            ValidationError: If the username or email is taken
        """
        require_permission(request.actor, Action.CREATE_ADMIN)
        user = await self.auth_service.create_account(
            username=request.username,
            email=request.email,
            password=request.password,
            role=request.role,
        )
        return UserView.from_domain(user, include_private=True)


class AdminUpdateUserRequest(UserActionRequest):
    """Fields an admin may change. Fields left out of the request are kept."""

    username: Optional[str] = Field(default=None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    major: Optional[str] = None
    class_year: Optional[str] = None
    location: Optional[str] = None
    role: Optional[Role] = None


class AdminUpdateUserUseCase:
    """Use case for an admin editing a user.

    Admins may edit users ranked below them. Changing a role additionally
    needs Admin Level 2, and never applies to yourself or to another
    Admin Level 2.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize admin update user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: AdminUpdateUserRequest) -> UserView:
        """Apply the submitted fields.

        Raises:
            PermissionDeniedError: If the edit or role change is not allowed
            ValidationError: If the new username or email is taken
        """
        require_admin(request.actor)
        user = await load_target(self.user_service, request, Action.EDIT)

        changes = request.model_dump(
            exclude={"user_id", "actor"}, exclude_unset=True, exclude_none=True
        )
        if "role" in changes and changes["role"] != user.role:
            require_permission(request.actor, Action.PROMOTE, user.to_target())
        if "email" in changes:
            changes["email"] = changes["email"].lower()
        if "username" in changes or "email" in changes:
            await self.user_service.ensure_available(
                changes.get("username", str(user.username)),
                changes.get("email", user.email),
                exclude_id=user.id,
            )

        if changes:
            user = await self.user_service.save(user.evolve(**changes, updated_at=utc_now()))
        return UserView.from_domain(user, include_private=True)


class DeleteUserUseCase:
    """Use case for Admin Level 2 deactivating an account."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UserActionRequest) -> UserView:
        """Deactivate the account (a permanent ban).

        Raises:
            PermissionDeniedError: If the actor may not delete this user
        """
        user = await load_target(self.user_service, request, Action.DELETE)
        user = await self.user_service.deactivate(user)
        return UserView.from_domain(user, include_private=True)


class RestoreUserUseCase:
    """Use case for Admin Level 2 reactivating an account."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UserActionRequest) -> UserView:
        user = await load_target(self.user_service, request, Action.RESTORE)
        user = await self.user_service.save(user.restore())
        return UserView.from_domain(user, include_private=True)
