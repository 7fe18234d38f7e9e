"""Unit tests for AttachmentService."""

from uuid import uuid4

import pytest

from forum.config import AttachmentSettings
from forum.domain.error import AttachmentError, NotFoundError
from forum.domain.model import AttachmentUpload
from forum.domain.service import AttachmentService
from forum.domain.value import AttachmentId
from forum.persistence.repository.inmemory import InMemoryAttachmentStore


def _upload(name: str = "notes.pdf", size: int = 16) -> AttachmentUpload:
    return AttachmentUpload(
        filename=name, content_type="application/pdf", data=b"x" * size
    )


class TestAttachmentService:
    """Tests for AttachmentService."""

    def setup_method(self):
        self.store = InMemoryAttachmentStore()
        self.service = AttachmentService(
            store=self.store,
            settings=AttachmentSettings(max_file_size=64, max_files=2),
        )

    @pytest.mark.asyncio
    async def test_store_all_keeps_upload_order(self):
        """Should store every upload and return metadata in order."""
        stored = await self.service.store_all([_upload("a.pdf"), _upload("b.pdf")])

        assert [a.filename for a in stored] == ["a.pdf", "b.pdf"]
        info, data = await self.service.read(stored[1].id)
        assert info.size == 16
        assert data == b"x" * 16

    @pytest.mark.asyncio
    async def test_too_many_files_rejected(self):
        """Should refuse a batch over the file count limit before storing."""
        with pytest.raises(AttachmentError, match="Too many files"):
            await self.service.store_all([_upload(), _upload(), _upload()])

        assert self.store._blobs == {}

    @pytest.mark.asyncio
    async def test_oversized_file_rejected(self):
        """Should refuse a file over the size limit."""
        with pytest.raises(AttachmentError, match="too large"):
            await self.service.store_all([_upload(size=65)])

    @pytest.mark.asyncio
    async def test_missing_attachment(self):
        """Should raise NotFoundError for unknown IDs."""
        with pytest.raises(NotFoundError):
            await self.service.get_info(AttachmentId(uuid4()))

    @pytest.mark.asyncio
    async def test_delete_all_skips_missing(self):
        """Should count only the blobs actually removed."""
        (stored,) = await self.service.store_all([_upload()])

        removed = await self.service.delete_all([stored.id, AttachmentId(uuid4())])

        assert removed == 1
        with pytest.raises(NotFoundError):
            await self.service.read(stored.id)
