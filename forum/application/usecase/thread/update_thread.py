"""Update thread use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.common import ThreadItem, load_authors, owner_is_active
from forum.domain.model import AttachmentUpload
from forum.domain.service import (
    AttachmentService,
    ThreadService,
    UserService,
    require_permission,
)
from forum.domain.value import Action, ActorContext, AttachmentId, ThreadId


class UpdateThreadRequest(BaseModel):
    """Update thread request. Omitted fields are left unchanged."""

    thread_id: UUID
    actor: ActorContext
    title: Optional[str] = Field(default=None, min_length=3, max_length=200)
    content: Optional[str] = Field(default=None, min_length=10)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    files: list[AttachmentUpload] = Field(default_factory=list)
    deleted_attachments: list[UUID] = Field(default_factory=list)


class UpdateThreadUseCase:
    """Use case for editing a thread (author or any admin).

    New files are appended after the kept attachments; removed attachments
    are deleted from the store once the thread is saved.
    """

    def __init__(
        self,
        thread_service: ThreadService,
        attachment_service: AttachmentService,
        user_service: UserService,
    ) -> None:
        """Initialize update thread use case.

        Args:
            thread_service: Thread domain service
            attachment_service: Attachment domain service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.attachment_service = attachment_service
        self.user_service = user_service

    async def execute(self, request: UpdateThreadRequest) -> ThreadItem:
        """Execute update thread flow.

        Raises:
            NotFoundError: If the thread is missing or hidden from the actor
            PermissionDeniedError: If the actor may not edit it
            AttachmentError: If the new files break the upload limits
        """
        thread = await self.thread_service.get_by_id(ThreadId(request.thread_id))
        owner_active = await owner_is_active(self.user_service, thread.author_id)
        require_permission(request.actor, Action.EDIT, thread.to_target(owner_active))
        self.attachment_service.check_limits(request.files)

        changes = request.model_dump(
            include={"title", "content", "category"}, exclude_none=True
        )
        changes = {key: value.strip() for key, value in changes.items()}

        removed = {AttachmentId(a) for a in request.deleted_attachments}
        removed &= set(thread.attachments)
        if removed or request.files:
            stored = await self.attachment_service.store_all(request.files)
            changes["attachments"] = [
                a for a in thread.attachments if a not in removed
            ] + [attachment.id for attachment in stored]

        if changes:
            thread = await self.thread_service.update_thread(thread, **changes)
        if removed:
            await self.attachment_service.delete_all(sorted(removed, key=str))

        authors = await load_authors(self.user_service, [thread.author_id])
        return ThreadItem.from_domain(thread, authors, request.actor.user_id)
