"""Integration tests for the PostgreSQL thread and user repositories.

Requires a PostgreSQL database at ``DATABASE__URL`` with migrations applied.
"""

from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import utc_now
from forum.domain.repository import ThreadFilter, ThreadRepository, UserRepository
from forum.domain.value import ThreadSortOrder, ThreadStatus
from tests.conftest import make_thread, make_user
from tests.harness import create_env_fixture

# Real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(
        text("TRUNCATE TABLE attachments, comments, threads, users CASCADE")
    )
    await session.commit()
    yield


class TestThreadRepositoryIntegration:
    """Integration tests for PostgresThreadRepository."""

    @pytest.mark.asyncio
    async def test_filters_and_counts(self, integration_env):
        """Status, category and banned-author filters should apply in SQL."""
        # Arrange
        users = await integration_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        bob = await users.save(make_user("bob"))
        repo = await integration_env.get(ThreadRepository)
        await repo.save(make_thread(alice))
        await repo.save(make_thread(alice, status=ThreadStatus.PENDING))
        await repo.save(make_thread(bob, category="housing"))

        # Act
        approved = ThreadFilter(statuses=frozenset({ThreadStatus.APPROVED}))
        without_bob = approved.model_copy(
            update={"exclude_author_ids": frozenset({bob.id})}
        )
        by_status = await repo.count_by_status()

        # Assert
        assert await repo.count(approved) == 2
        assert await repo.count(without_bob) == 1
        assert len(await repo.find_all(ThreadFilter(category="housing"))) == 1
        assert by_status[ThreadStatus.PENDING] == 1
        assert by_status[ThreadStatus.APPROVED] == 2

    @pytest.mark.asyncio
    async def test_counters_are_atomic_and_clamped(self, integration_env):
        """View and reply counters should update in place and never go negative."""
        # Arrange
        users = await integration_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        repo = await integration_env.get(ThreadRepository)
        thread = await repo.save(make_thread(alice))

        # Act
        await repo.increment_views(thread.id)
        await repo.increment_views(thread.id)
        await repo.adjust_comment_count(thread.id, 1)
        await repo.adjust_comment_count(thread.id, -5)
        saved = await repo.find_by_id(thread.id)

        # Assert
        assert saved.views == 2
        assert saved.comment_count == 0

    @pytest.mark.asyncio
    async def test_sort_by_views(self, integration_env):
        """The views sort should put the most viewed thread first."""
        users = await integration_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        repo = await integration_env.get(ThreadRepository)
        quiet = await repo.save(make_thread(alice, title="Quiet thread"))
        busy = await repo.save(make_thread(alice, title="Busy thread"))
        await repo.increment_views(busy.id)

        threads = await repo.find_all(ThreadFilter(), sort=ThreadSortOrder.VIEWS)

        assert [t.id for t in threads] == [busy.id, quiet.id]


class TestUserRepositoryIntegration:
    """Integration tests for PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_banned_ids_skip_lapsed_bans(self, integration_env):
        """Only bans still in force should be reported."""
        # Arrange
        users = await integration_env.get(UserRepository)
        now = utc_now()
        permanent = await users.save(make_user("perm").ban(None))
        running = await users.save(make_user("running").ban(now + timedelta(hours=1)))
        await users.save(make_user("lapsed").ban(now - timedelta(hours=1)))
        await users.save(make_user("fine"))

        # Act
        banned = await users.find_banned_ids(now)

        # Assert
        assert banned == {permanent.id, running.id}

    @pytest.mark.asyncio
    async def test_login_lookups_ignore_case(self, integration_env):
        """Username and email lookups should be case-insensitive."""
        users = await integration_env.get(UserRepository)
        alice = await users.save(make_user("alice"))

        assert (await users.find_by_username("ALICE")).id == alice.id
        assert (await users.find_by_email("Alice@University.EDU")).id == alice.id
