"""Attachment domain service."""

import logfire

from forum.config import AttachmentSettings
from forum.domain.error import AttachmentError, NotFoundError
from forum.domain.model.attachment import Attachment, AttachmentUpload
from forum.domain.repository import AttachmentStore
from forum.domain.value import AttachmentId

from .base import Service


class AttachmentService(Service):
    """Stores, serves and removes uploaded files."""

    def __init__(self, store: AttachmentStore, settings: AttachmentSettings) -> None:
        """Initialize attachment service.

        Args:
            store: Blob store
            settings: Upload limits
        """
        self.store = store
        self.settings = settings

    def check_limits(self, uploads: list[AttachmentUpload]) -> None:
        """Reject a batch that breaks the count or size limits.

        Raises:
            AttachmentError: If there are too many files or one is too large
        """
        if len(uploads) > self.settings.max_files:
            raise AttachmentError(
                f"Too many files: at most {self.settings.max_files} per request"
            )
        for upload in uploads:
            if upload.size > self.settings.max_file_size:
                max_mb = self.settings.max_file_size // (1024 * 1024)
                raise AttachmentError(
                    f"File {upload.filename} is too large: limit is {max_mb}MB"
                )

    async def store_all(self, uploads: list[AttachmentUpload]) -> list[Attachment]:
        """Store a batch of uploads in order.

        A failure part-way aborts the batch; blobs already written are left
        in place.

        Args:
            uploads: Files received from the client

        Returns:
            Stored attachment metadata, in upload order

        Raises:
            AttachmentError: If the batch breaks the limits
        """
        self.check_limits(uploads)
        with logfire.span("attachment_service.store_all", count=len(uploads)):
            stored: list[Attachment] = []
            for upload in uploads:
                try:
                    attachment = await self.store.put(
                        upload.filename, upload.content_type, upload.data
                    )
                except Exception as e:
                    logfire.error(
                        "Attachment upload failed",
                        filename=upload.filename,
                        stored_before_failure=len(stored),
                        error=str(e),
                    )
                    raise
                stored.append(attachment)
            logfire.info("Attachments stored", count=len(stored))
            return stored

    async def get_info(self, attachment_id: AttachmentId) -> Attachment:
        """Metadata for an attachment.

        Raises:
            NotFoundError: If the attachment does not exist
        """
        info = await self.store.get_info(attachment_id)
        if not info:
            raise NotFoundError("Attachment", str(attachment_id))
        return info

    async def read(self, attachment_id: AttachmentId) -> tuple[Attachment, bytes]:
        """Metadata and content of an attachment.

        Raises:
            NotFoundError: If the attachment does not exist
        """
        with logfire.span("attachment_service.read", attachment_id=str(attachment_id)):
            info = await self.get_info(attachment_id)
            data = await self.store.read(attachment_id)
            if data is None:
                raise NotFoundError("Attachment", str(attachment_id))
            return info, data

    async def delete_all(self, attachment_ids: list[AttachmentId]) -> int:
        """Physically delete attachments, skipping ones already gone.

        Returns:
            Number of blobs removed
        """
        with logfire.span("attachment_service.delete_all", count=len(attachment_ids)):
            removed = 0
            for attachment_id in attachment_ids:
                if await self.store.delete(attachment_id):
                    removed += 1
                else:
                    logfire.warn(
                        "Attachment already missing", attachment_id=str(attachment_id)
                    )
            return removed
