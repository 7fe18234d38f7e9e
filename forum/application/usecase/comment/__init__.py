"""Comment use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .get_thread_comments import (
    GetThreadCommentsRequest,
    GetThreadCommentsResponse,
    GetThreadCommentsUseCase,
)
from .list_comments import ListCommentsRequest, ListCommentsResponse, ListCommentsUseCase
from .manage_comment import (
    CommentActionRequest,
    CommentLikeResponse,
    DeleteCommentUseCase,
    GetCommentUseCase,
    RestoreCommentUseCase,
    ToggleCommentLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)

__all__ = [
    "CommentActionRequest",
    "CommentLikeResponse",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentUseCase",
    "GetCommentUseCase",
    "GetThreadCommentsRequest",
    "GetThreadCommentsResponse",
    "GetThreadCommentsUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "RestoreCommentUseCase",
    "ToggleCommentLikeUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]
