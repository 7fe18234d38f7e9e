"""Attachment use cases."""

from .get_attachment import (
    AttachmentContent,
    DownloadAttachmentUseCase,
    GetAttachmentInfoUseCase,
    GetAttachmentRequest,
)

__all__ = [
    "AttachmentContent",
    "DownloadAttachmentUseCase",
    "GetAttachmentInfoUseCase",
    "GetAttachmentRequest",
]
