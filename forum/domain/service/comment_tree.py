"""Comment tree assembly.

Comments are stored flat with a parent pointer. Each request rebuilds the
reply forest for the comments it is allowed to see.
"""

from dataclasses import dataclass, field
from typing import Iterable

import logfire

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, UserId


@dataclass
class CommentNode:
    """Node in a thread's comment forest.

    Holds one comment, its like summary for the requester, and its direct
    replies in creation order.
    """

    comment: Comment
    like_count: int
    liked_by_requester: bool
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def reply_count(self) -> int:
        """Number of direct replies (the length of ``replies``)."""
        return len(self.replies)

    def walk(self) -> Iterable["CommentNode"]:
        """Yield this node and all descendants, depth first."""
        yield self
        for reply in self.replies:
            yield from reply.walk()


def build_comment_forest(
    comments: Iterable[Comment], requester_id: UserId | None = None
) -> list[CommentNode]:
    """Arrange a flat list of comments into a reply forest.

    Every input comment appears exactly once in the output. A comment whose
    parent is missing from the input (deleted, hidden, or never existed)
    becomes a root. Roots and every ``replies`` list are ordered by
    ``created_at``; ties keep their input order.

    Args:
        comments: Comments of one thread, in any order
        requester_id: Viewer for ``liked_by_requester`` (None if anonymous)

    Returns:
        Root nodes in ascending creation order
    """
    ordered = sorted(comments, key=lambda c: c.created_at)

    nodes: dict[CommentId, CommentNode] = {}
    position: dict[CommentId, int] = {}
    for index, comment in enumerate(ordered):
        nodes[comment.id] = CommentNode(
            comment=comment,
            like_count=comment.like_count,
            liked_by_requester=comment.is_liked_by(requester_id),
        )
        position[comment.id] = index

    roots: list[CommentNode] = []
    orphans = 0
    # Walking in creation order keeps every replies list sorted too.
    # A parent must precede its reply, so malformed links cannot form a cycle.
    for index, comment in enumerate(ordered):
        node = nodes[comment.id]
        parent_id = comment.parent_comment_id
        if parent_id is not None and position.get(parent_id, index) < index:
            nodes[parent_id].replies.append(node)
            continue
        if parent_id is not None:
            orphans += 1
        roots.append(node)

    if orphans:
        logfire.debug(
            "Promoted orphaned replies to roots",
            orphans=orphans,
            total=len(ordered),
        )
    return roots
