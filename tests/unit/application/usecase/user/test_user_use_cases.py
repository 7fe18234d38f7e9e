"""Unit tests for the user profile use cases."""

import pytest

from forum.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    GetUserThreadsRequest,
    GetUserThreadsUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
)
from forum.domain.error import AuthenticationError, NotFoundError
from forum.domain.repository import ThreadRepository, UserRepository
from forum.domain.value import ActorContext, Role, ThreadStatus
from tests.conftest import make_thread, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetUserProfile:
    """Tests for GetUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_private_fields_for_self_only(self, unit_env):
        """Email and student ID should be shown to the user, not to strangers."""
        # Arrange
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice", emplid=12345678))
        bob = await users.save(make_user("bob"))
        use_case = await unit_env.get(GetUserProfileUseCase)

        # Act
        own = await use_case.execute(
            GetUserProfileRequest(user_id=alice.id, actor=alice.as_actor())
        )
        seen = await use_case.execute(
            GetUserProfileRequest(user_id=alice.id, actor=bob.as_actor())
        )

        # Assert
        assert own.email == "alice@university.edu"
        assert own.emplid == 12345678
        assert seen.username == "alice"
        assert seen.email is None
        assert seen.emplid is None

    @pytest.mark.asyncio
    async def test_banned_profile_hidden_from_public(self, unit_env):
        """A permanently banned user should 404 publicly and show "Permanent" to admins."""
        users = await unit_env.get(UserRepository)
        banned = await users.save(make_user("banned").ban(None))
        admin = await users.save(make_user("mod", role=Role.ADMIN_LEVEL_1))
        use_case = await unit_env.get(GetUserProfileUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetUserProfileRequest(user_id=banned.id))
        view = await use_case.execute(
            GetUserProfileRequest(user_id=banned.id, actor=admin.as_actor())
        )
        assert view.ban_expiry == "Permanent"


class TestGetUserThreads:
    """Tests for GetUserThreadsUseCase."""

    @pytest.mark.asyncio
    async def test_others_see_only_approved(self, unit_env):
        """Visitors should see approved threads; the owner sees everything."""
        # Arrange
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice"))
        threads = await unit_env.get(ThreadRepository)
        await threads.save(make_thread(alice))
        await threads.save(make_thread(alice, status=ThreadStatus.PENDING))
        use_case = await unit_env.get(GetUserThreadsUseCase)

        # Act
        public = await use_case.execute(GetUserThreadsRequest(user_id=alice.id))
        own = await use_case.execute(
            GetUserThreadsRequest(user_id=alice.id, actor=alice.as_actor())
        )

        # Assert
        assert public.pagination.total == 1
        assert own.pagination.total == 2
        assert public.user.username == "alice"

    @pytest.mark.asyncio
    async def test_banned_user_threads_hidden_from_non_admins(self, unit_env):
        """A banned user's thread list should 404 for users and show ban details to admins."""
        # Arrange
        users = await unit_env.get(UserRepository)
        banned = await users.save(make_user("banned").ban(None))
        reader = await users.save(make_user("reader"))
        admin = await users.save(make_user("mod", role=Role.ADMIN_LEVEL_1))
        await (await unit_env.get(ThreadRepository)).save(make_thread(banned))
        use_case = await unit_env.get(GetUserThreadsUseCase)

        # Act / Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetUserThreadsRequest(user_id=banned.id, actor=reader.as_actor())
            )
        with pytest.raises(NotFoundError):
            await use_case.execute(GetUserThreadsRequest(user_id=banned.id))
        seen = await use_case.execute(
            GetUserThreadsRequest(user_id=banned.id, actor=admin.as_actor())
        )
        assert seen.pagination.total == 1
        assert seen.user.is_active is False
        assert seen.user.ban_expiry == "Permanent"


class TestUpdateUserProfile:
    """Tests for UpdateUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_partial_update(self, unit_env):
        """Should change only the submitted fields."""
        # Arrange
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice", major="Physics"))
        use_case = await unit_env.get(UpdateUserProfileUseCase)

        # Act
        view = await use_case.execute(
            UpdateUserProfileRequest(actor=alice.as_actor(), bio="Hello campus")
        )

        # Assert
        assert view.bio == "Hello campus"
        assert view.major == "Physics"

    @pytest.mark.asyncio
    async def test_explicit_null_clears_field(self, unit_env):
        """Sending None for a field should clear it."""
        users = await unit_env.get(UserRepository)
        alice = await users.save(make_user("alice", location="Dorm B"))
        use_case = await unit_env.get(UpdateUserProfileUseCase)

        view = await use_case.execute(
            UpdateUserProfileRequest(actor=alice.as_actor(), location=None)
        )

        assert view.location is None

    @pytest.mark.asyncio
    async def test_anonymous_refused(self, unit_env):
        """Should require authentication."""
        use_case = await unit_env.get(UpdateUserProfileUseCase)

        with pytest.raises(AuthenticationError):
            await use_case.execute(
                UpdateUserProfileRequest(actor=ActorContext.anonymous(), bio="Hi")
            )
