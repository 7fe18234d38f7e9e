"""Unit tests for the admin user-management use cases."""

from datetime import timedelta

import pydantic
import pytest

from forum.application.usecase.admin import (
    AdminUpdateUserRequest,
    AdminUpdateUserUseCase,
    BanUserRequest,
    BanUserUseCase,
    CreateAdminRequest,
    CreateAdminUseCase,
    DeleteUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
    RestoreUserUseCase,
    UnbanUserUseCase,
    UserActionRequest,
)
from forum.domain.error import PermissionDeniedError, ValidationError
from forum.domain.model import utc_now
from forum.domain.repository import UserRepository
from forum.domain.service import UserService
from forum.domain.value import Role
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(env, *users):
    repo = await env.get(UserRepository)
    return [await repo.save(user) for user in users]


class TestBanUser:
    """Tests for BanUserUseCase and UnbanUserUseCase."""

    @pytest.mark.asyncio
    async def test_timed_ban(self, unit_env):
        """Should ban for the given number of hours."""
        # Arrange
        admin, student = await _seed(
            unit_env, make_user("mod", role=Role.ADMIN_LEVEL_1), make_user("student")
        )
        use_case = await unit_env.get(BanUserUseCase)
        before = utc_now()

        # Act
        view = await use_case.execute(
            BanUserRequest(user_id=student.id, actor=admin.as_actor(), duration=24)
        )

        # Assert
        assert view.is_active is False
        assert before + timedelta(hours=24) <= view.banned_until
        assert view.banned_until <= utc_now() + timedelta(hours=24)

    @pytest.mark.asyncio
    async def test_permanent_ban_by_default(self, unit_env):
        """Omitting the duration should ban permanently."""
        admin, student = await _seed(
            unit_env, make_user("mod", role=Role.ADMIN_LEVEL_1), make_user("student")
        )
        use_case = await unit_env.get(BanUserUseCase)

        view = await use_case.execute(
            BanUserRequest(user_id=student.id, actor=admin.as_actor())
        )

        assert view.banned_until is None
        assert view.ban_expiry == "Permanent"

    @pytest.mark.asyncio
    async def test_invalid_duration(self, unit_env):
        """Should reject a non-positive duration without banning."""
        admin, student = await _seed(
            unit_env, make_user("mod", role=Role.ADMIN_LEVEL_1), make_user("student")
        )
        use_case = await unit_env.get(BanUserUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                BanUserRequest(user_id=student.id, actor=admin.as_actor(), duration=-1)
            )
        assert (await (await unit_env.get(UserService)).get_by_id(student.id)).is_active

    @pytest.mark.asyncio
    async def test_admin_level_1_cannot_ban_peer(self, unit_env):
        """Admin Level 1 should only ban regular users."""
        admin, peer = await _seed(
            unit_env,
            make_user("mod", role=Role.ADMIN_LEVEL_1),
            make_user("mod2", role=Role.ADMIN_LEVEL_1),
        )
        use_case = await unit_env.get(BanUserUseCase)

        with pytest.raises(PermissionDeniedError):
            await use_case.execute(BanUserRequest(user_id=peer.id, actor=admin.as_actor()))

    @pytest.mark.asyncio
    async def test_unban(self, unit_env):
        """Should lift a ban."""
        admin, student = await _seed(
            unit_env,
            make_user("mod", role=Role.ADMIN_LEVEL_1),
            make_user("student").ban(None),
        )
        use_case = await unit_env.get(UnbanUserUseCase)

        view = await use_case.execute(
            UserActionRequest(user_id=student.id, actor=admin.as_actor())
        )

        assert view.is_active is True
        assert view.ban_expiry is None


class TestCreateAdmin:
    """Tests for CreateAdminUseCase."""

    @pytest.mark.asyncio
    async def test_admin_level_2_creates_admin(self, unit_env):
        """Admin Level 2 should be able to create admins."""
        (root,) = await _seed(unit_env, make_user("root", role=Role.ADMIN_LEVEL_2))
        use_case = await unit_env.get(CreateAdminUseCase)

        view = await use_case.execute(
            CreateAdminRequest(
                actor=root.as_actor(),
                username="newmod",
                email="newmod@university.edu",
                password="secret123",
                role=Role.ADMIN_LEVEL_1,
            )
        )

        assert view.role == Role.ADMIN_LEVEL_1

    @pytest.mark.asyncio
    async def test_admin_level_1_refused(self, unit_env):
        """Admin Level 1 should not create admins."""
        (mod,) = await _seed(unit_env, make_user("mod", role=Role.ADMIN_LEVEL_1))
        use_case = await unit_env.get(CreateAdminUseCase)

        with pytest.raises(PermissionDeniedError):
            await use_case.execute(
                CreateAdminRequest(
                    actor=mod.as_actor(),
                    username="newmod",
                    email="newmod@university.edu",
                    password="secret123",
                    role=Role.ADMIN_LEVEL_1,
                )
            )

    def test_role_must_be_admin(self):
        """The request should reject the regular user role."""
        with pytest.raises(pydantic.ValidationError):
            CreateAdminRequest(
                actor=make_user("root", role=Role.ADMIN_LEVEL_2).as_actor(),
                username="newmod",
                email="newmod@university.edu",
                password="secret123",
                role=Role.USER,
            )


class TestAdminUpdateUser:
    """Tests for AdminUpdateUserUseCase."""

    @pytest.mark.asyncio
    async def test_admin_edits_profile_fields(self, unit_env):
        """Any admin should edit a regular user's profile."""
        admin, student = await _seed(
            unit_env, make_user("mod", role=Role.ADMIN_LEVEL_1), make_user("student")
        )
        use_case = await unit_env.get(AdminUpdateUserUseCase)

        view = await use_case.execute(
            AdminUpdateUserRequest(
                user_id=student.id, actor=admin.as_actor(), major="History"
            )
        )

        assert view.major == "History"

    @pytest.mark.asyncio
    async def test_role_change_needs_admin_level_2(self, unit_env):
        """Only Admin Level 2 should promote users."""
        # Arrange
        mod, root, student = await _seed(
            unit_env,
            make_user("mod", role=Role.ADMIN_LEVEL_1),
            make_user("root", role=Role.ADMIN_LEVEL_2),
            make_user("student"),
        )
        use_case = await unit_env.get(AdminUpdateUserUseCase)

        # Act / Assert
        with pytest.raises(PermissionDeniedError):
            await use_case.execute(
                AdminUpdateUserRequest(
                    user_id=student.id, actor=mod.as_actor(), role=Role.ADMIN_LEVEL_1
                )
            )
        view = await use_case.execute(
            AdminUpdateUserRequest(
                user_id=student.id, actor=root.as_actor(), role=Role.ADMIN_LEVEL_1
            )
        )
        assert view.role == Role.ADMIN_LEVEL_1

    @pytest.mark.asyncio
    async def test_taken_email_rejected(self, unit_env):
        """Should refuse an email that belongs to another user."""
        root, student, _ = await _seed(
            unit_env,
            make_user("root", role=Role.ADMIN_LEVEL_2),
            make_user("student"),
            make_user("other"),
        )
        use_case = await unit_env.get(AdminUpdateUserUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                AdminUpdateUserRequest(
                    user_id=student.id,
                    actor=root.as_actor(),
                    email="Other@University.edu",
                )
            )


class TestDeleteAndListUsers:
    """Tests for DeleteUserUseCase, RestoreUserUseCase and ListUsersUseCase."""

    @pytest.mark.asyncio
    async def test_delete_restore_and_list(self, unit_env):
        """Deleted users stay in the admin listing and can be restored."""
        # Arrange
        root, student = await _seed(
            unit_env, make_user("root", role=Role.ADMIN_LEVEL_2), make_user("student")
        )
        request = UserActionRequest(user_id=student.id, actor=root.as_actor())

        # Act
        deleted = await (await unit_env.get(DeleteUserUseCase)).execute(request)
        listing = await (await unit_env.get(ListUsersUseCase)).execute(
            ListUsersRequest(actor=root.as_actor())
        )
        restored = await (await unit_env.get(RestoreUserUseCase)).execute(request)

        # Assert
        assert deleted.is_active is False
        assert listing.pagination.total == 2
        assert restored.is_active is True

    @pytest.mark.asyncio
    async def test_admin_level_1_cannot_delete(self, unit_env):
        """Admin Level 1 should not delete accounts."""
        mod, student = await _seed(
            unit_env, make_user("mod", role=Role.ADMIN_LEVEL_1), make_user("student")
        )

        with pytest.raises(PermissionDeniedError):
            await (await unit_env.get(DeleteUserUseCase)).execute(
                UserActionRequest(user_id=student.id, actor=mod.as_actor())
            )
