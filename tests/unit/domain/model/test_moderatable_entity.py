"""Unit tests for the shared moderation behaviour of entities."""

import pytest

from forum.domain.model.common import ModeratableEntity
from tests.conftest import make_thread, make_user


class TestModeratableEntity:
    """Tests for ModeratableEntity."""

    def test_base_cannot_be_instantiated(self):
        """Every moderatable entity must describe itself as a target."""
        with pytest.raises(TypeError):
            ModeratableEntity()

    def test_soft_delete_and_restore(self):
        """Soft delete and restore should flip is_active on a copy."""
        # Arrange
        thread = make_thread(make_user())

        # Act
        deleted = thread.soft_delete()
        restored = deleted.restore()

        # Assert
        assert thread.is_active is True
        assert deleted.is_active is False
        assert restored.is_active is True
        assert deleted.to_target().is_active is False
