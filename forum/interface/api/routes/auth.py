"""Authentication routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, Field, model_validator

from forum.application.usecase.auth import (
    AuthResponse,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from forum.application.usecase.common import UserView
from forum.domain.error import DomainError
from forum.interface.api.auth import bearer_token
from forum.interface.api.envelope import ApiResponse, ok
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LoginAPIRequest(BaseModel):
    """Credentials: a username or an email, plus the password."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: str = Field(min_length=1)

    @model_validator(mode="after")
    def require_login(self) -> "LoginAPIRequest":
        if not (self.username or self.email):
            raise ValueError("Username or email is required")
        return self


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> ApiResponse[AuthResponse]:
    """Create a regular account and return a token for it."""
    try:
        result = await register_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result, message="User registered successfully")


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    request: LoginAPIRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> ApiResponse[AuthResponse]:
    """Log in with username or email. Banned accounts get 403."""
    try:
        result = await login_use_case.execute(
            LoginRequest(
                username=request.username or request.email, password=request.password
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result, message="Login successful")


@router.get("/me", response_model=ApiResponse[UserView])
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[UserView]:
    """The authenticated user's own profile."""
    token = bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        result = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result.user)
