"""Thread routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, File, Form, Header, Query, UploadFile, status
from pydantic import TypeAdapter

from forum.application.usecase.auth import GetCurrentUserUseCase
from forum.application.usecase.common import ThreadItem
from forum.application.usecase.thread import (
    CreateThreadRequest,
    CreateThreadUseCase,
    DeleteThreadUseCase,
    GetThreadRequest,
    GetThreadUseCase,
    LikeResponse,
    ListPendingThreadsRequest,
    ListPendingThreadsUseCase,
    ListThreadsRequest,
    ListThreadsUseCase,
    ModerateThreadRequest,
    ModerateThreadUseCase,
    PublicStatsResponse,
    PublicStatsUseCase,
    ThreadActionRequest,
    ThreadStatsRequest,
    ThreadStatsResponse,
    ThreadStatsUseCase,
    ToggleThreadLikeUseCase,
    UpdateThreadRequest,
    UpdateThreadUseCase,
)
from forum.config import Settings
from forum.domain.error import DomainError
from forum.domain.model import AttachmentUpload
from forum.domain.value import Action, ThreadSortOrder, ThreadStatus
from forum.interface.api.auth import optional_actor, require_actor
from forum.interface.api.envelope import ApiResponse, ok, page_params
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/threads", tags=["threads"], route_class=DishkaRoute)

_ATTACHMENT_IDS = TypeAdapter(list[UUID])


async def read_uploads(files: list[UploadFile]) -> list[AttachmentUpload]:
    """Read multipart files into domain uploads."""
    uploads = []
    for upload in files:
        uploads.append(
            AttachmentUpload(
                filename=upload.filename or "upload",
                content_type=upload.content_type or "application/octet-stream",
                data=await upload.read(),
            )
        )
    return uploads


@router.get("", response_model=ApiResponse[list[ThreadItem]])
async def list_threads(
    list_threads_use_case: FromDishka[ListThreadsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    sort: ThreadSortOrder = ThreadSortOrder.RECENT,
    category: Optional[str] = None,
    author_id: Optional[UUID] = None,
    status_filter: Optional[ThreadStatus] = Query(default=None, alias="status"),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[list[ThreadItem]]:
    """List threads.

    Anonymous callers and regular users see approved threads. A user
    filtering by their own ``author_id`` sees all of their threads; admins
    may filter by ``status``.
    """
    actor = await optional_actor(get_current_user_use_case, authorization)
    try:
        result = await list_threads_use_case.execute(
            ListThreadsRequest(
                **page_params(page, limit, settings.pagination),
                actor=actor,
                sort=sort,
                category=category,
                author_id=author_id,
                status=status_filter,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result.threads, pagination=result.pagination)


@router.get("/stats/public", response_model=ApiResponse[PublicStatsResponse])
async def public_stats(
    public_stats_use_case: FromDishka[PublicStatsUseCase],
) -> ApiResponse[PublicStatsResponse]:
    """Member, thread and post counters for the landing page."""
    return ok(await public_stats_use_case.execute())


@router.get("/admin/pending", response_model=ApiResponse[list[ThreadItem]])
async def list_pending_threads(
    list_pending_use_case: FromDishka[ListPendingThreadsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[list[ThreadItem]]:
    """Moderation queue, oldest first (admin)."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        result = await list_pending_use_case.execute(
            ListPendingThreadsRequest(
                **page_params(page, limit, settings.pagination), actor=actor
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result.threads, pagination=result.pagination)


@router.get("/admin/stats", response_model=ApiResponse[ThreadStatsResponse])
async def thread_stats(
    thread_stats_use_case: FromDishka[ThreadStatsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadStatsResponse]:
    """Thread totals per moderation status (admin)."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        result = await thread_stats_use_case.execute(ThreadStatsRequest(actor=actor))
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result)


async def _moderate(
    thread_id: UUID,
    action: Action,
    moderate_use_case: ModerateThreadUseCase,
    get_current_user_use_case: GetCurrentUserUseCase,
    authorization: Optional[str],
) -> ThreadItem:
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        return await moderate_use_case.execute(
            ModerateThreadRequest(thread_id=thread_id, actor=actor, action=action)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/admin/{thread_id}/approve", response_model=ApiResponse[ThreadItem])
async def approve_thread(
    thread_id: UUID,
    moderate_use_case: FromDishka[ModerateThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Approve a pending thread (admin)."""
    thread = await _moderate(
        thread_id, Action.APPROVE, moderate_use_case, get_current_user_use_case, authorization
    )
    return ok(thread, message="Thread approved successfully")


@router.post("/admin/{thread_id}/reject", response_model=ApiResponse[ThreadItem])
async def reject_thread(
    thread_id: UUID,
    moderate_use_case: FromDishka[ModerateThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Reject a pending thread (admin)."""
    thread = await _moderate(
        thread_id, Action.REJECT, moderate_use_case, get_current_user_use_case, authorization
    )
    return ok(thread, message="Thread rejected successfully")


@router.get("/{thread_id}", response_model=ApiResponse[ThreadItem])
async def get_thread(
    thread_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    increment_view: bool = False,
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Get a thread; ``increment_view=true`` counts a view."""
    actor = await optional_actor(get_current_user_use_case, authorization)
    try:
        thread = await get_thread_use_case.execute(
            GetThreadRequest(thread_id=thread_id, actor=actor, increment_view=increment_view)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(thread)


@router.post(
    "",
    response_model=ApiResponse[ThreadItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_thread(
    create_thread_use_case: FromDishka[CreateThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    title: str = Form(min_length=3, max_length=200),
    content: str = Form(min_length=10),
    category: str = Form(min_length=1, max_length=100),
    files: list[UploadFile] = File(default=[]),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Create a thread (multipart). New threads wait for moderation."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        thread = await create_thread_use_case.execute(
            CreateThreadRequest(
                actor=actor,
                title=title,
                content=content,
                category=category,
                files=await read_uploads(files),
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(thread, message="Thread created successfully and is pending approval")


@router.put("/{thread_id}", response_model=ApiResponse[ThreadItem])
async def update_thread(
    thread_id: UUID,
    update_thread_use_case: FromDishka[UpdateThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    title: Optional[str] = Form(default=None, min_length=3, max_length=200),
    content: Optional[str] = Form(default=None, min_length=10),
    category: Optional[str] = Form(default=None, min_length=1, max_length=100),
    deleted_attachments: Optional[str] = Form(default=None),
    files: list[UploadFile] = File(default=[]),
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[ThreadItem]:
    """Update a thread (author or admin).

    ``deleted_attachments`` is a JSON array of attachment IDs to remove.
    """
    actor = await require_actor(get_current_user_use_case, authorization)
    removed = (
        _ATTACHMENT_IDS.validate_json(deleted_attachments) if deleted_attachments else []
    )
    try:
        thread = await update_thread_use_case.execute(
            UpdateThreadRequest(
                thread_id=thread_id,
                actor=actor,
                title=title,
                content=content,
                category=category,
                files=await read_uploads(files),
                deleted_attachments=removed,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(thread, message="Thread updated successfully")


@router.delete("/{thread_id}", response_model=ApiResponse[None])
async def delete_thread(
    thread_id: UUID,
    delete_thread_use_case: FromDishka[DeleteThreadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[None]:
    """Soft-delete a thread."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        await delete_thread_use_case.execute(
            ThreadActionRequest(thread_id=thread_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(message="Thread deleted successfully")


@router.post("/{thread_id}/like", response_model=ApiResponse[LikeResponse])
async def toggle_thread_like(
    thread_id: UUID,
    toggle_like_use_case: FromDishka[ToggleThreadLikeUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[LikeResponse]:
    """Like or unlike a thread."""
    actor = await require_actor(get_current_user_use_case, authorization)
    try:
        result = await toggle_like_use_case.execute(
            ThreadActionRequest(thread_id=thread_id, actor=actor)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(result)
