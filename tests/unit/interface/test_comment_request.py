"""Unit tests for the comment API request models."""

from uuid import uuid4

import pytest

from forum.interface.api.routes.comments import CreateCommentAPIRequest


class TestCreateCommentAPIRequest:
    """Tests for CreateCommentAPIRequest."""

    @pytest.mark.parametrize("parent", ["", "   ", None])
    def test_blank_parent_is_root(self, parent):
        """A missing or blank parent should leave the comment at top level."""
        request = CreateCommentAPIRequest(content="Hello", parent_comment_id=parent)

        assert request.parent_comment_id is None

    def test_parent_id_kept(self):
        """A real parent ID should be parsed as a UUID."""
        parent = uuid4()

        request = CreateCommentAPIRequest(content="Hello", parent_comment_id=str(parent))

        assert request.parent_comment_id == parent
