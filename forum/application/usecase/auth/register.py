"""Register use case."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from forum.application.usecase.common import UserView
from forum.domain.service import AuthService, JWTService


class RegisterRequest(BaseModel):
    """Register request."""

    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6)
    emplid: Optional[int] = Field(default=None, gt=0)  # Student ID


class AuthResponse(BaseModel):
    """Token plus the authenticated user."""

    token: str
    user: UserView


class RegisterUseCase:
    """Use case for creating a regular user account."""

    def __init__(self, auth_service: AuthService, jwt_service: JWTService) -> None:
        """Initialize register use case.

        Args:
            auth_service: Authentication domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service

    async def execute(self, request: RegisterRequest) -> AuthResponse:
        """Create the account and sign the user in.

        Raises:
            ValidationError: If the username or email is taken
        """
        user = await self.auth_service.create_account(
            username=request.username,
            email=request.email,
            password=request.password,
            emplid=request.emplid,
        )
        return AuthResponse(
            token=self.jwt_service.create_token(user),
            user=UserView.from_domain(user, include_private=True),
        )
