"""Attachment routes."""

from urllib.parse import quote
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response

from forum.application.usecase.attachment import (
    DownloadAttachmentUseCase,
    GetAttachmentInfoUseCase,
    GetAttachmentRequest,
)
from forum.application.usecase.common import AttachmentInfo
from forum.domain.error import DomainError
from forum.interface.api.envelope import ApiResponse, ok
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/attachments", tags=["attachments"], route_class=DishkaRoute)


@router.get("/{attachment_id}/info", response_model=ApiResponse[AttachmentInfo])
async def get_attachment_info(
    attachment_id: UUID,
    get_info_use_case: FromDishka[GetAttachmentInfoUseCase],
) -> ApiResponse[AttachmentInfo]:
    """Attachment metadata."""
    try:
        info = await get_info_use_case.execute(
            GetAttachmentRequest(attachment_id=attachment_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return ok(info)


@router.get("/{attachment_id}")
async def download_attachment(
    attachment_id: UUID,
    download_use_case: FromDishka[DownloadAttachmentUseCase],
) -> Response:
    """Attachment content, served inline with its original file name."""
    try:
        content = await download_use_case.execute(
            GetAttachmentRequest(attachment_id=attachment_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
    return Response(
        content=content.data,
        media_type=content.info.content_type,
        headers={
            "Content-Disposition": f"inline; filename*=UTF-8''{quote(content.info.filename)}",
            "Cache-Control": "public, max-age=31536000",
        },
    )
