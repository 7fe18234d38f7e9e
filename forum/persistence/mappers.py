"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict

from forum.domain.model import Attachment, Comment, Thread, User
from forum.domain.value import (
    AttachmentId,
    CommentId,
    Role,
    ThreadId,
    ThreadStatus,
    UserId,
    Username,
)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        username=Username(row["username"]),
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=row["is_active"],
        banned_until=row.get("banned_until"),
        profile_picture_url=row.get("profile_picture_url"),
        bio=row.get("bio"),
        major=row.get("major"),
        class_year=row.get("class_year"),
        location=row.get("location"),
        emplid=row.get("emplid"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_thread(row: Dict[str, Any]) -> Thread:
    """Convert database row to Thread domain model.

    Args:
        row: Database row as dict

    Returns:
        Thread domain model
    """
    return Thread(
        id=ThreadId(row["id"]),
        title=row["title"],
        content=row["content"],
        category=row["category"],
        author_id=UserId(row["author_id"]),
        status=ThreadStatus(row["status"]),
        is_active=row["is_active"],
        likes=[UserId(liker) for liker in row.get("likes") or []],
        views=row["views"],
        comment_count=row["comment_count"],
        attachments=[AttachmentId(a) for a in row.get("attachments") or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def thread_to_dict(thread: Thread) -> Dict[str, Any]:
    """Convert Thread domain model to database dict.

    ``views`` and ``comment_count`` are left out: both are maintained with
    atomic increments and must not be overwritten by a stale copy.
    """
    data = thread.model_dump(exclude={"views", "comment_count"})
    data["status"] = thread.status.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_comment_id")
    return Comment(
        id=CommentId(row["id"]),
        content=row["content"],
        author_id=UserId(row["author_id"]),
        thread_id=ThreadId(row["thread_id"]),
        parent_comment_id=CommentId(parent_id) if parent_id else None,
        is_active=row["is_active"],
        likes=[UserId(liker) for liker in row.get("likes") or []],
        attachments=[AttachmentId(a) for a in row.get("attachments") or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_attachment(row: Dict[str, Any]) -> Attachment:
    """Convert attachment metadata row to Attachment domain model."""
    return Attachment(
        id=AttachmentId(row["id"]),
        filename=row["filename"],
        content_type=row["content_type"],
        size=row["size"],
        uploaded_at=row["uploaded_at"],
    )
