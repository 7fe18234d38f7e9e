"""Attachment read use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import AttachmentInfo
from forum.domain.service import AttachmentService
from forum.domain.value import AttachmentId


class GetAttachmentRequest(BaseModel):
    """Attachment lookup request."""

    attachment_id: UUID


class AttachmentContent(BaseModel):
    """Attachment metadata plus its bytes."""

    info: AttachmentInfo
    data: bytes


class GetAttachmentInfoUseCase:
    """Use case for attachment metadata."""

    def __init__(self, attachment_service: AttachmentService) -> None:
        self.attachment_service = attachment_service

    async def execute(self, request: GetAttachmentRequest) -> AttachmentInfo:
        """Raises NotFoundError if the attachment does not exist."""
        info = await self.attachment_service.get_info(AttachmentId(request.attachment_id))
        return AttachmentInfo.from_domain(info)


class DownloadAttachmentUseCase:
    """Use case for streaming an attachment back to the client."""

    def __init__(self, attachment_service: AttachmentService) -> None:
        self.attachment_service = attachment_service

    async def execute(self, request: GetAttachmentRequest) -> AttachmentContent:
        """Raises NotFoundError if the attachment does not exist."""
        info, data = await self.attachment_service.read(AttachmentId(request.attachment_id))
        return AttachmentContent(info=AttachmentInfo.from_domain(info), data=data)
