"""Login use case."""

from pydantic import BaseModel, Field

from forum.application.usecase.auth.register import AuthResponse
from forum.application.usecase.common import UserView
from forum.domain.service import AuthService, JWTService


class LoginRequest(BaseModel):
    """Login request. ``username`` may also be an email address."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginUseCase:
    """Use case for password login."""

    def __init__(self, auth_service: AuthService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> AuthResponse:
        """Check credentials and issue a token.

        Raises:
            AuthenticationError: If the credentials are wrong
            AccountDisabledError: If the account is banned
        """
        user = await self.auth_service.authenticate(request.username, request.password)
        return AuthResponse(
            token=self.jwt_service.create_token(user),
            user=UserView.from_domain(user, include_private=True),
        )
