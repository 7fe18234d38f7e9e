"""Ban and unban use cases."""

from typing import Any

from forum.application.usecase.common import UserView
from forum.domain.model.common import utc_now
from forum.domain.service import UserService, parse_ban_duration
from forum.domain.value import Action

from .users import UserActionRequest, load_target


class BanUserRequest(UserActionRequest):
    """Ban request.

    ``duration`` is a positive number of hours or ``"forever"``; omitted
    means permanent. It is typed loosely so the duration parser sees the
    raw value.
    """

    duration: Any = None


class BanUserUseCase:
    """Use case for an admin banning a user.

    Admin Level 1 may only ban regular users. Nobody can ban themselves or
    an Admin Level 2.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize ban user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: BanUserRequest) -> UserView:
        """Ban the user.

        Raises:
            PermissionDeniedError: If the actor may not ban this user
            ValidationError: If the duration is not valid
        """
        user = await load_target(self.user_service, request, Action.BAN)
        banned_until = parse_ban_duration(request.duration, utc_now())
        user = await self.user_service.ban(user, banned_until)
        return UserView.from_domain(user, include_private=True)


class UnbanUserUseCase:
    """Use case for lifting a ban, under the same rules as banning."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UserActionRequest) -> UserView:
        """Unban the user.

        Raises:
            PermissionDeniedError: If the actor may not unban this user
        """
        user = await load_target(self.user_service, request, Action.UNBAN)
        user = await self.user_service.unban(user)
        return UserView.from_domain(user, include_private=True)
