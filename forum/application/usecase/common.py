"""Response models and helpers shared by the use cases."""

import math
from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from forum.domain.model import Attachment, Comment, Thread, User
from forum.domain.service import CommentNode, UserService
from forum.domain.value import Role, ThreadStatus, UserId

PERMANENT_BAN = "Permanent"


class PageRequest(BaseModel):
    """Paging parameters (1-based page)."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageInfo(BaseModel):
    """Paging metadata returned with list results."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: PageRequest, total: int) -> "PageInfo":
        return cls(
            page=page.page,
            limit=page.limit,
            total=total,
            total_pages=math.ceil(total / page.limit) if total else 0,
        )


class AuthorSummary(BaseModel):
    """Author shown next to a thread or comment."""

    id: str
    username: str
    profile_picture_url: Optional[str] = None

    @classmethod
    def from_domain(cls, user: User) -> "AuthorSummary":
        return cls(
            id=str(user.id),
            username=str(user.username),
            profile_picture_url=user.profile_picture_url,
        )


class UserView(BaseModel):
    """A user as returned by the API.

    Private fields (email, student ID, ban state) are only filled in for the
    user themselves and for admins; otherwise they are None.
    """

    id: str
    username: str
    role: Role
    profile_picture_url: Optional[str] = None
    bio: Optional[str] = None
    major: Optional[str] = None
    class_year: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime
    email: Optional[str] = None
    emplid: Optional[int] = None
    is_active: Optional[bool] = None
    banned_until: Optional[datetime] = None
    ban_expiry: Optional[str] = None  # "Permanent" or ISO timestamp

    @classmethod
    def from_domain(cls, user: User, include_private: bool = False) -> "UserView":
        """Convert a domain user.

        Args:
            user: Domain user
            include_private: Whether to include email, student ID and ban state
        """
        view = cls(
            id=str(user.id),
            username=str(user.username),
            role=user.role,
            profile_picture_url=user.profile_picture_url,
            bio=user.bio,
            major=user.major,
            class_year=user.class_year,
            location=user.location,
            created_at=user.created_at,
        )
        if not include_private:
            return view
        ban_expiry = None
        if not user.is_active:
            ban_expiry = (
                user.banned_until.isoformat() if user.banned_until else PERMANENT_BAN
            )
        return view.model_copy(
            update={
                "email": user.email,
                "emplid": user.emplid,
                "is_active": user.is_active,
                "banned_until": user.banned_until,
                "ban_expiry": ban_expiry,
            }
        )


class ThreadItem(BaseModel):
    """A thread as returned by the API."""

    id: str
    title: str
    content: str
    category: str
    status: ThreadStatus
    author: Optional[AuthorSummary]
    likes: int
    user_liked: bool
    views: int
    replies: int
    attachments: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(
        cls,
        thread: Thread,
        authors: dict[UserId, User],
        requester_id: UserId | None = None,
    ) -> "ThreadItem":
        author = authors.get(thread.author_id)
        return cls(
            id=str(thread.id),
            title=thread.title,
            content=thread.content,
            category=thread.category,
            status=thread.status,
            author=AuthorSummary.from_domain(author) if author else None,
            likes=thread.like_count,
            user_liked=thread.is_liked_by(requester_id),
            views=thread.views,
            replies=thread.comment_count,
            attachments=[str(a) for a in thread.attachments],
            is_active=thread.is_active,
            created_at=thread.created_at,
            updated_at=thread.updated_at,
        )


class CommentItem(BaseModel):
    """A comment as returned by the API, with its nested replies."""

    id: str
    content: str
    thread_id: str
    parent_comment_id: Optional[str]
    author: Optional[AuthorSummary]
    likes: int
    user_liked: bool
    attachments: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    replies: list["CommentItem"] = Field(default_factory=list)
    reply_count: int = 0

    @classmethod
    def from_domain(
        cls,
        comment: Comment,
        authors: dict[UserId, User],
        requester_id: UserId | None = None,
    ) -> "CommentItem":
        """Convert a single comment (no replies)."""
        author = authors.get(comment.author_id)
        return cls(
            id=str(comment.id),
            content=comment.content,
            thread_id=str(comment.thread_id),
            parent_comment_id=(
                str(comment.parent_comment_id) if comment.parent_comment_id else None
            ),
            author=AuthorSummary.from_domain(author) if author else None,
            likes=comment.like_count,
            user_liked=comment.is_liked_by(requester_id),
            attachments=[str(a) for a in comment.attachments],
            is_active=comment.is_active,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    @classmethod
    def from_node(cls, node: CommentNode, authors: dict[UserId, User]) -> "CommentItem":
        """Convert a tree node recursively.

        Args:
            node: Comment forest node
            authors: Author lookup

        Returns:
            Comment with nested replies
        """
        author = authors.get(node.comment.author_id)
        return cls(
            id=str(node.comment.id),
            content=node.comment.content,
            thread_id=str(node.comment.thread_id),
            parent_comment_id=(
                str(node.comment.parent_comment_id)
                if node.comment.parent_comment_id
                else None
            ),
            author=AuthorSummary.from_domain(author) if author else None,
            likes=node.like_count,
            user_liked=node.liked_by_requester,
            attachments=[str(a) for a in node.comment.attachments],
            is_active=node.comment.is_active,
            created_at=node.comment.created_at,
            updated_at=node.comment.updated_at,
            replies=[cls.from_node(reply, authors) for reply in node.replies],
            reply_count=node.reply_count,
        )


class AttachmentInfo(BaseModel):
    """Attachment metadata as returned by the API."""

    id: str
    filename: str
    content_type: str
    size: int
    uploaded_at: datetime

    @classmethod
    def from_domain(cls, attachment: Attachment) -> "AttachmentInfo":
        return cls(
            id=str(attachment.id),
            filename=attachment.filename,
            content_type=attachment.content_type,
            size=attachment.size,
            uploaded_at=attachment.uploaded_at,
        )


async def load_authors(
    user_service: UserService, author_ids: Iterable[UserId]
) -> dict[UserId, User]:
    """Batch-load the authors of a page of threads or comments."""
    return await user_service.get_many(list(author_ids))


async def owner_is_active(user_service: UserService, owner_id: UserId) -> bool:
    """Whether the owner of a thread or comment is currently not banned."""
    return not await user_service.is_currently_banned(owner_id)
