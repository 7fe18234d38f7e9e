"""Attachment store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.attachment import Attachment
from forum.domain.value import AttachmentId


class AttachmentStore(ABC):
    """Blob store for thread and comment attachments.

    Content is written and read in one piece; the store keeps metadata
    alongside the bytes.
    """

    @abstractmethod
    async def put(self, filename: str, content_type: str, data: bytes) -> Attachment:
        """Store a blob.

        Args:
            filename: Original file name
            content_type: MIME type
            data: File content

        Returns:
            Metadata of the stored blob
        """
        pass

    @abstractmethod
    async def get_info(self, attachment_id: AttachmentId) -> Optional[Attachment]:
        """Metadata for a blob, None if absent."""
        pass

    @abstractmethod
    async def read(self, attachment_id: AttachmentId) -> Optional[bytes]:
        """Content of a blob, None if absent."""
        pass

    @abstractmethod
    async def delete(self, attachment_id: AttachmentId) -> bool:
        """Physically remove a blob.

        Returns:
            True if a blob was removed
        """
        pass
