"""Test configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import logfire

# Test defaults, applied before any Settings() is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__PASSWORD_HASH_ROUNDS", "4")

from forum.domain.model import Comment, Thread, User  # noqa: E402
from forum.domain.value import (  # noqa: E402
    CommentId,
    Role,
    ThreadId,
    ThreadStatus,
    UserId,
    Username,
)
from forum.util.password import hash_password  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)

PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD, rounds=4)


def make_user(
    username: str = "alice", role: Role = Role.USER, **overrides: Any
) -> User:
    """Build a user whose password is ``PASSWORD``."""
    fields = {
        "id": UserId(uuid4()),
        "username": Username(username),
        "email": f"{username}@university.edu",
        "password_hash": PASSWORD_HASH,
        "role": role,
    }
    fields.update(overrides)
    return User(**fields)


def make_thread(
    author: User, status: ThreadStatus = ThreadStatus.APPROVED, **overrides: Any
) -> Thread:
    """Build a thread by ``author``, approved unless told otherwise."""
    fields = {
        "id": ThreadId(uuid4()),
        "title": "Study group for calculus",
        "content": "Anyone up for a weekly study group before the midterm?",
        "category": "academics",
        "author_id": author.id,
        "status": status,
    }
    fields.update(overrides)
    return Thread(**fields)


def make_comment(
    thread: Thread,
    author: User,
    parent: Comment | None = None,
    minutes: int = 0,
    **overrides: Any,
) -> Comment:
    """Build a comment created ``minutes`` after a fixed base time."""
    base = datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)
    fields = {
        "id": CommentId(uuid4()),
        "content": f"Comment at minute {minutes}",
        "author_id": author.id,
        "thread_id": thread.id,
        "parent_comment_id": parent.id if parent else None,
        "created_at": base + timedelta(minutes=minutes),
    }
    fields.update(overrides)
    return Comment(**fields)
