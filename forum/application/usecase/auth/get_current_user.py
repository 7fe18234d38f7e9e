"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import UserView
from forum.domain.error import AccountDisabledError, AuthenticationError, NotFoundError
from forum.domain.service import JWTService, UserService
from forum.domain.value import ActorContext, UserId
from forum.util.jwt import JWTError


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """The authenticated actor and their profile."""

    actor: ActorContext
    user: UserView


class GetCurrentUserUseCase:
    """Use case for resolving the caller behind a token.

    The user is reloaded on every request (running lazy ban reconciliation),
    so the actor's role and ban state are always current.
    """

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token
        2. Load the user (lifting a lapsed ban)
        3. Refuse banned or deactivated accounts

        Raises:
            AuthenticationError: If the token is invalid or the user is gone
            AccountDisabledError: If the user is banned
        """
        try:
            payload = self.jwt_service.verify_token(request.token)
            user_id = UserId(UUID(payload.user_id))
        except (JWTError, ValueError) as e:
            raise AuthenticationError("Invalid token. Please authenticate again.") from e

        try:
            user = await self.user_service.get_by_id(user_id)
        except NotFoundError as e:
            raise AuthenticationError("User no longer exists") from e

        if not user.is_active:
            raise AccountDisabledError(str(user.id))

        return GetCurrentUserResponse(
            actor=user.as_actor(),
            user=UserView.from_domain(user, include_private=True),
        )
