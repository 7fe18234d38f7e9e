"""Authentication domain service."""

from uuid import uuid4

import logfire

from forum.config import AuthSettings
from forum.domain.error import AccountDisabledError, AuthenticationError
from forum.domain.model.user import User
from forum.domain.value import Role, UserId
from forum.util.password import hash_password, verify_password

from .base import Service
from .user_service import UserService


class AuthService(Service):
    """Domain service for password-based accounts.

    Handles account creation and credential checks. Tokens are issued
    separately by ``JWTService``.
    """

    def __init__(self, user_service: UserService, auth_settings: AuthSettings) -> None:
        """Initialize auth service.

        Args:
            user_service: User service
            auth_settings: Authentication settings
        """
        self.user_service = user_service
        self.auth_settings = auth_settings

    async def create_account(
        self,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
        emplid: int | None = None,
    ) -> User:
        """Create a new account with a hashed password.

        Args:
            username: Unique username
            email: Unique email address
            password: Plain-text password
            role: Initial role (admins create other admins)
            emplid: Optional student ID

        Returns:
            Saved user

        Raises:
            ValidationError: If username or email is taken, or a field is invalid
        """
        with logfire.span("auth_service.create_account", username=username, role=role.value):
            await self.user_service.ensure_available(username, email)
            user = User.create(
                id=UserId(uuid4()),
                username=username,
                email=email.lower(),
                password_hash=hash_password(
                    password, rounds=self.auth_settings.password_hash_rounds
                ),
                role=role,
                emplid=emplid,
            )
            saved = await self.user_service.save(user)
            logfire.info(
                "Account created", user_id=str(saved.id), username=username, role=role.value
            )
            return saved

    async def authenticate(self, login: str, password: str) -> User:
        """Check credentials and return the user.

        Args:
            login: Username or email
            password: Plain-text password

        Returns:
            Authenticated, active user

        Raises:
            AuthenticationError: If the login or password is wrong
            AccountDisabledError: If the account is banned or deactivated
        """
        with logfire.span("auth_service.authenticate"):
            user = await self.user_service.find_by_login(login)
            if not user or not verify_password(password, user.password_hash):
                logfire.warn("Login failed: invalid credentials")
                raise AuthenticationError("Invalid credentials")
            if not user.is_active:
                logfire.warn("Login refused: account disabled", user_id=str(user.id))
                raise AccountDisabledError(str(user.id))
            logfire.info("User authenticated", user_id=str(user.id))
            return user

    def hash_password(self, password: str) -> str:
        """Hash a new password with the configured cost."""
        return hash_password(password, rounds=self.auth_settings.password_hash_rounds)
