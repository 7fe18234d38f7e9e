#!/usr/bin/env python3
"""Run database migrations and seed the first admin, with Logfire error tracking."""

import asyncio
import sys

import logfire
from alembic import command
from alembic.config import Config

from forum.config import Settings
from forum.domain.service import AuthService, UserService
from forum.domain.value import Role
from forum.util.di.container import create_container
from forum.util.observability import configure_logfire


async def ensure_bootstrap_admin(settings: Settings) -> None:
    """Create the configured Admin Level 2 account unless it already exists.

    Admins can only be created by an Admin Level 2, so a fresh database
    needs one seeded from the environment.
    """
    bootstrap = settings.bootstrap
    if not bootstrap.enabled:
        logfire.info("No bootstrap admin configured")
        return

    container = create_container()
    try:
        async with container() as request_container:
            user_service = await request_container.get(UserService)
            if await user_service.find_by_login(bootstrap.admin_username):
                logfire.info(
                    "Bootstrap admin already exists", username=bootstrap.admin_username
                )
                return

            auth_service = await request_container.get(AuthService)
            user = await auth_service.create_account(
                bootstrap.admin_username,
                bootstrap.admin_email,
                bootstrap.admin_password,
                role=Role.ADMIN_LEVEL_2,
            )
            logfire.info("Bootstrap admin created", user_id=str(user.id))
    finally:
        await container.close()


def main() -> int:
    """Run migrations, seed the first admin and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", environment=settings.environment)
        command.upgrade(Config("alembic.ini"), "head")
        logfire.info("Database migrations completed successfully")

        asyncio.run(ensure_bootstrap_admin(settings))
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
