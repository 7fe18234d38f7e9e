"""Thread use cases."""

from .create_thread import CreateThreadRequest, CreateThreadUseCase
from .delete_thread import DeleteThreadUseCase, RestoreThreadUseCase, ThreadActionRequest
from .get_thread import GetThreadRequest, GetThreadUseCase
from .like_thread import LikeResponse, ToggleThreadLikeUseCase
from .list_threads import (
    ListPendingThreadsRequest,
    ListPendingThreadsUseCase,
    ListThreadsRequest,
    ListThreadsResponse,
    ListThreadsUseCase,
)
from .moderate_thread import ModerateThreadRequest, ModerateThreadUseCase
from .stats import (
    CategoryStats,
    PublicStatsResponse,
    PublicStatsUseCase,
    ThreadStatsRequest,
    ThreadStatsResponse,
    ThreadStatsUseCase,
)
from .update_thread import UpdateThreadRequest, UpdateThreadUseCase

__all__ = [
    "CategoryStats",
    "CreateThreadRequest",
    "CreateThreadUseCase",
    "DeleteThreadUseCase",
    "GetThreadRequest",
    "GetThreadUseCase",
    "LikeResponse",
    "ListPendingThreadsRequest",
    "ListPendingThreadsUseCase",
    "ListThreadsRequest",
    "ListThreadsResponse",
    "ListThreadsUseCase",
    "ModerateThreadRequest",
    "ModerateThreadUseCase",
    "PublicStatsResponse",
    "PublicStatsUseCase",
    "RestoreThreadUseCase",
    "ThreadActionRequest",
    "ThreadStatsRequest",
    "ThreadStatsResponse",
    "ThreadStatsUseCase",
    "ToggleThreadLikeUseCase",
    "UpdateThreadRequest",
    "UpdateThreadUseCase",
]
