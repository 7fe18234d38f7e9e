"""Attachment metadata.

The binary content lives in the attachment store; this model is what the
rest of the domain sees.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel, utc_now
from forum.domain.value import AttachmentId


class Attachment(DomainModel):
    """Uploaded file metadata."""

    id: AttachmentId
    filename: str = Field(min_length=1, max_length=255)  # Original file name
    content_type: str = "application/octet-stream"
    size: int = Field(ge=0)
    uploaded_at: datetime = Field(default_factory=utc_now)


class AttachmentUpload(DomainModel):
    """A file received from a client, not yet stored."""

    filename: str = Field(min_length=1, max_length=255)
    content_type: str = "application/octet-stream"
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
