"""In-memory attachment store for testing."""

from typing import Optional
from uuid import uuid4

from forum.domain.model.attachment import Attachment
from forum.domain.repository.attachment import AttachmentStore
from forum.domain.value import AttachmentId


class InMemoryAttachmentStore(AttachmentStore):
    """In-memory implementation of AttachmentStore for testing."""

    def __init__(self) -> None:
        self._blobs: dict[AttachmentId, tuple[Attachment, bytes]] = {}

    async def put(self, filename: str, content_type: str, data: bytes) -> Attachment:
        """Store a blob."""
        attachment = Attachment.create(
            id=AttachmentId(uuid4()),
            filename=filename,
            content_type=content_type,
            size=len(data),
        )
        self._blobs[attachment.id] = (attachment, data)
        return attachment

    async def get_info(self, attachment_id: AttachmentId) -> Optional[Attachment]:
        """Metadata for a blob."""
        entry = self._blobs.get(attachment_id)
        return entry[0] if entry else None

    async def read(self, attachment_id: AttachmentId) -> Optional[bytes]:
        """Content of a blob."""
        entry = self._blobs.get(attachment_id)
        return entry[1] if entry else None

    async def delete(self, attachment_id: AttachmentId) -> bool:
        """Remove a blob."""
        return self._blobs.pop(attachment_id, None) is not None
