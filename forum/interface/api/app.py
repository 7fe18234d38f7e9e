"""FastAPI application."""

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from forum.config import AuthSettings, Settings
from forum.interface.api.envelope import failure
from forum.interface.api.routes import (
    admin,
    attachments,
    auth,
    comments,
    health,
    threads,
    users,
)
from forum.util.di.container import create_container, setup_di
from forum.util.error import ConfigurationError
from forum.util.observability import instrument_fastapi

VALIDATION_MESSAGE = "Validation error"


def check_settings(settings: Settings) -> None:
    """Refuse to start production with development secrets.

    Raises:
        ConfigurationError: If the JWT secret is still the placeholder
    """
    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == AuthSettings().jwt_secret
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")


def _describe_errors(errors: list[dict]) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in errors
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors in the response envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError | PydanticValidationError
) -> JSONResponse:
    """Render request validation failures as 400."""
    error = _describe_errors(exc.errors())
    logfire.warn("Request validation failed", path=request.url.path, error=error)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=failure(VALIDATION_MESSAGE, error=error),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and hide their details from the client."""
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        _exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=failure("Server error"),
    )


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; in
    production start_app.py does so.

    Args:
        settings: Settings to use (loaded from the environment if omitted)
        container: DI container (the production container if omitted)

    Raises:
        ConfigurationError: If the settings are unsafe for the environment
    """
    settings = settings or Settings()
    check_settings(settings)

    app_instance = FastAPI(
        title="Campus Forum API",
        description="Backend API for a university discussion forum with moderated threads, nested comments and role-based administration",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        expose_headers=["Content-Length", "Content-Type", "Content-Disposition"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    app_instance.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app_instance.add_exception_handler(RequestValidationError, validation_exception_handler)
    app_instance.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app_instance.add_exception_handler(Exception, unhandled_exception_handler)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(threads.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(attachments.router)
    app_instance.include_router(users.router)
    app_instance.include_router(admin.router)

    return app_instance
