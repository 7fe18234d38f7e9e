"""Unit tests for UserService."""

from datetime import timedelta

import pytest

from forum.domain.error import NotFoundError, ValidationError
from forum.domain.model import utc_now
from forum.domain.repository import UserRepository
from forum.domain.service import UserService
from forum.persistence.repository.inmemory import InMemoryUserRepository
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class CountingUserRepository(InMemoryUserRepository):
    """In-memory repository that counts saves."""

    def __init__(self) -> None:
        super().__init__()
        self.saves = 0

    async def save(self, user):
        self.saves += 1
        return await super().save(user)


class TestBanReconciliation:
    """Lazy ban expiry on user reads."""

    @pytest.mark.asyncio
    async def test_lapsed_ban_lifted_and_persisted_once(self):
        """Should lift an expired ban on read and write it back exactly once."""
        # Arrange
        repo = CountingUserRepository()
        user = make_user("bob").ban(utc_now() - timedelta(minutes=5))
        await repo.save(user)
        repo.saves = 0
        service = UserService(user_repository=repo)

        # Act
        first = await service.get_by_id(user.id)
        second = await service.get_by_id(user.id)

        # Assert
        assert first.is_active is True
        assert first.banned_until is None
        assert second.is_active is True
        assert repo.saves == 1

    @pytest.mark.asyncio
    async def test_running_ban_untouched(self):
        """Should leave a ban in force and not write anything."""
        repo = CountingUserRepository()
        user = make_user("bob").ban(utc_now() + timedelta(hours=2))
        await repo.save(user)
        repo.saves = 0
        service = UserService(user_repository=repo)

        result = await service.get_by_id(user.id)

        assert result.is_active is False
        assert repo.saves == 0

    @pytest.mark.asyncio
    async def test_login_lookup_reconciles(self):
        """Should reconcile users found by username or email."""
        repo = CountingUserRepository()
        user = make_user("bob").ban(utc_now() - timedelta(seconds=1))
        await repo.save(user)
        service = UserService(user_repository=repo)

        by_name = await service.find_by_login("BOB")
        by_email = await service.find_by_login("bob@university.edu")

        assert by_name.is_active is True
        assert by_email.id == user.id

    @pytest.mark.asyncio
    async def test_banned_user_ids_excludes_lapsed_bans(self, unit_env):
        """Should list only users whose ban is still in force."""
        # Arrange
        service = await unit_env.get(UserService)
        repo = await unit_env.get(UserRepository)
        permanent = make_user("perm").ban(None)
        timed = make_user("timed").ban(utc_now() + timedelta(days=1))
        lapsed = make_user("lapsed").ban(utc_now() - timedelta(days=1))
        active = make_user("active")
        for user in (permanent, timed, lapsed, active):
            await repo.save(user)

        # Act
        banned = await service.banned_user_ids()

        # Assert
        assert banned == frozenset({permanent.id, timed.id})


class TestUserService:
    """Lookups, bans and uniqueness checks."""

    @pytest.mark.asyncio
    async def test_get_missing_user_raises(self, unit_env):
        """Should raise NotFoundError for an unknown ID."""
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await service.get_by_id(make_user("ghost").id)

    @pytest.mark.asyncio
    async def test_ban_and_unban(self, unit_env):
        """Should persist ban state and clear it again."""
        # Arrange
        service = await unit_env.get(UserService)
        user = await service.save(make_user("bob"))
        until = utc_now() + timedelta(hours=24)

        # Act
        banned = await service.ban(user, until)
        unbanned = await service.unban(banned)

        # Assert
        assert banned.is_active is False
        assert banned.banned_until == until
        assert unbanned.is_active is True
        assert unbanned.banned_until is None
        assert (await service.get_by_id(user.id)).is_active is True

    @pytest.mark.asyncio
    async def test_missing_user_counts_as_banned(self, unit_env):
        """Should treat an unknown owner as banned."""
        service = await unit_env.get(UserService)

        assert await service.is_currently_banned(make_user("ghost").id) is True

    @pytest.mark.asyncio
    async def test_ensure_available_rejects_duplicates(self, unit_env):
        """Should reject a taken username or email, ignoring case."""
        # Arrange
        service = await unit_env.get(UserService)
        user = await service.save(make_user("bob"))

        # Act / Assert
        with pytest.raises(ValidationError, match="username"):
            await service.ensure_available("BOB", "new@university.edu")
        with pytest.raises(ValidationError, match="email"):
            await service.ensure_available("robert", "Bob@University.edu")
        await service.ensure_available("bob", "bob@university.edu", exclude_id=user.id)

    @pytest.mark.asyncio
    async def test_count_members_excludes_banned(self, unit_env):
        """Should count only active users."""
        service = await unit_env.get(UserService)
        await service.save(make_user("bob"))
        await service.save(make_user("carol").ban(None))

        assert await service.count_members() == 1
