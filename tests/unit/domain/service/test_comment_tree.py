"""Unit tests for comment forest assembly."""

import random
from uuid import uuid4

from forum.domain.service import build_comment_forest
from forum.domain.value import CommentId, UserId
from tests.conftest import make_comment, make_thread, make_user


def _ids(nodes):
    return [node.comment.id for node in nodes]


class TestBuildCommentForest:
    """Tests for build_comment_forest."""

    def setup_method(self):
        self.author = make_user("author")
        self.thread = make_thread(self.author)

    def test_empty_input_gives_empty_forest(self):
        """Should return no roots for no comments."""
        assert build_comment_forest([]) == []

    def test_nests_replies_under_parents(self):
        """Should attach each reply to its parent."""
        # Arrange
        root = make_comment(self.thread, self.author, minutes=0)
        reply = make_comment(self.thread, self.author, parent=root, minutes=1)
        nested = make_comment(self.thread, self.author, parent=reply, minutes=2)

        # Act
        forest = build_comment_forest([nested, reply, root])

        # Assert
        assert _ids(forest) == [root.id]
        assert _ids(forest[0].replies) == [reply.id]
        assert _ids(forest[0].replies[0].replies) == [nested.id]
        assert forest[0].reply_count == 1

    def test_every_comment_appears_exactly_once(self):
        """Should place every input comment in the forest once."""
        # Arrange
        comments = []
        for minute in range(30):
            parent = random.choice(comments) if comments and minute % 3 else None
            comments.append(
                make_comment(self.thread, self.author, parent=parent, minutes=minute)
            )
        random.shuffle(comments)

        # Act
        forest = build_comment_forest(comments)

        # Assert
        seen = [node.comment.id for root in forest for node in root.walk()]
        assert sorted(seen) == sorted(c.id for c in comments)
        assert len(seen) == len(set(seen))

    def test_roots_and_replies_sorted_by_creation(self):
        """Should order roots and each replies list oldest first."""
        # Arrange
        first = make_comment(self.thread, self.author, minutes=0)
        second = make_comment(self.thread, self.author, minutes=5)
        late_reply = make_comment(self.thread, self.author, parent=first, minutes=9)
        early_reply = make_comment(self.thread, self.author, parent=first, minutes=2)

        # Act
        forest = build_comment_forest([late_reply, second, early_reply, first])

        # Assert
        assert _ids(forest) == [first.id, second.id]
        assert _ids(forest[0].replies) == [early_reply.id, late_reply.id]

    def test_reply_to_missing_parent_becomes_root(self):
        """Should promote a reply whose parent is not in the input."""
        # Arrange
        deleted_parent = make_comment(self.thread, self.author, minutes=0)
        orphan = make_comment(
            self.thread, self.author, parent=deleted_parent, minutes=1
        )
        other = make_comment(self.thread, self.author, minutes=2)

        # Act
        forest = build_comment_forest([other, orphan])

        # Assert
        assert _ids(forest) == [orphan.id, other.id]
        assert forest[0].replies == []

    def test_reply_to_unknown_id_becomes_root(self):
        """Should treat a dangling parent ID like a missing parent."""
        comment = make_comment(
            self.thread,
            self.author,
            parent_comment_id=CommentId(uuid4()),
        )

        forest = build_comment_forest([comment])

        assert _ids(forest) == [comment.id]

    def test_malformed_cycle_does_not_lose_comments(self):
        """Should still emit both comments when parent links form a cycle."""
        # Arrange
        a_id, b_id = CommentId(uuid4()), CommentId(uuid4())
        a = make_comment(
            self.thread, self.author, minutes=0, id=a_id, parent_comment_id=b_id
        )
        b = make_comment(
            self.thread, self.author, minutes=1, id=b_id, parent_comment_id=a_id
        )

        # Act
        forest = build_comment_forest([a, b])

        # Assert
        seen = [node.comment.id for root in forest for node in root.walk()]
        assert sorted(seen) == sorted([a_id, b_id])

    def test_building_twice_gives_same_shape(self):
        """Should be deterministic for the same input."""
        root = make_comment(self.thread, self.author, minutes=0)
        replies = [
            make_comment(self.thread, self.author, parent=root, minutes=m)
            for m in range(1, 4)
        ]
        comments = [root, *replies]

        first = build_comment_forest(comments)
        second = build_comment_forest(list(reversed(comments)))

        assert _ids(first) == _ids(second)
        assert _ids(first[0].replies) == _ids(second[0].replies)

    def test_like_summary_for_requester(self):
        """Should report like counts and whether the requester liked each comment."""
        # Arrange
        viewer = UserId(uuid4())
        liked = make_comment(
            self.thread, self.author, minutes=0, likes=[viewer, UserId(uuid4())]
        )
        not_liked = make_comment(self.thread, self.author, minutes=1)

        # Act
        forest = build_comment_forest([liked, not_liked], requester_id=viewer)
        anonymous = build_comment_forest([liked, not_liked])

        # Assert
        assert forest[0].like_count == 2
        assert forest[0].liked_by_requester is True
        assert forest[1].liked_by_requester is False
        assert anonymous[0].liked_by_requester is False
