"""Test harness for unit, integration and E2E tests.

Integration tests assume a PostgreSQL instance is reachable at
``DATABASE__URL`` with migrations applied.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from forum.config import Settings
from forum.domain.service import AuthService
from forum.domain.value import Role
from forum.interface.api.app import create_app
from forum.util.di import Component
from tests.di import build_test_container

PASSWORD = "password123"


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a test container with the given
    unmocking and yields a request-scoped container for service access.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_thread(unit_env):
            service = await unit_env.get(ThreadService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_client_fixture(unmock: set[Component] | None = None):
    """Factory for E2E fixtures yielding a ``TestClient``.

    Every test gets a fresh app and container, so in-memory data never
    leaks between tests.
    """

    @pytest.fixture
    def _client():
        settings = Settings()
        app = create_app(settings, container=build_test_container(unmock=unmock))
        with TestClient(app) as client:
            yield client

    return _client


def seed_account(client: TestClient, username: str, role: Role = Role.USER) -> str:
    """Create an account behind the API's back and return a bearer header value.

    Admin accounts cannot be registered through the API, so E2E tests seed
    them straight into the app's container.
    """
    container = client.app.state.dishka_container

    async def _create() -> None:
        async with container() as request_container:
            auth_service = await request_container.get(AuthService)
            await auth_service.create_account(
                username, f"{username}@university.edu", PASSWORD, role=role
            )

    client.portal.call(_create)
    response = client.post(
        "/auth/login", json={"username": username, "password": PASSWORD}
    )
    return f"Bearer {response.json()['data']['token']}"
