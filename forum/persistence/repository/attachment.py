"""PostgreSQL implementation of the attachment store.

Blobs live in the ``attachments`` table next to their metadata.
"""

from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Attachment
from forum.domain.model.common import utc_now
from forum.domain.repository import AttachmentStore
from forum.domain.value import AttachmentId
from forum.persistence.mappers import row_to_attachment
from forum.persistence.tables import attachments_table

_METADATA_COLUMNS = (
    attachments_table.c.id,
    attachments_table.c.filename,
    attachments_table.c.content_type,
    attachments_table.c.size,
    attachments_table.c.uploaded_at,
)


class PostgresAttachmentStore(AttachmentStore):
    """Attachment store backed by a BYTEA column."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize store with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def put(self, filename: str, content_type: str, data: bytes) -> Attachment:
        """Store a blob and return its metadata."""
        attachment = Attachment.create(
            id=AttachmentId(uuid4()),
            filename=filename,
            content_type=content_type,
            size=len(data),
            uploaded_at=utc_now(),
        )
        with logfire.span(
            "attachment_store.put", attachment_id=str(attachment.id), size=attachment.size
        ):
            stmt = insert(attachments_table).values(**attachment.model_dump(), data=data)
            await self.session.execute(stmt)
            await self.session.flush()
            return attachment

    async def get_info(self, attachment_id: AttachmentId) -> Optional[Attachment]:
        """Metadata for a blob, without loading its content."""
        stmt = select(*_METADATA_COLUMNS).where(attachments_table.c.id == attachment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_attachment(dict(row)) if row else None

    async def read(self, attachment_id: AttachmentId) -> Optional[bytes]:
        """Content of a blob."""
        stmt = select(attachments_table.c.data).where(
            attachments_table.c.id == attachment_id
        )
        result = await self.session.execute(stmt)
        return result.scalar()

    async def delete(self, attachment_id: AttachmentId) -> bool:
        """Remove a blob permanently."""
        stmt = delete(attachments_table).where(attachments_table.c.id == attachment_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
