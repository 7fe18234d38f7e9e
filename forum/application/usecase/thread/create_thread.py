"""Create thread use case."""

from pydantic import BaseModel, Field

from forum.application.usecase.common import ThreadItem, load_authors
from forum.domain.error import AuthenticationError
from forum.domain.model import AttachmentUpload
from forum.domain.service import AttachmentService, ThreadService, UserService
from forum.domain.value import ActorContext


class CreateThreadRequest(BaseModel):
    """Create thread request."""

    actor: ActorContext
    title: str = Field(min_length=3, max_length=200)
    content: str = Field(min_length=10)
    category: str = Field(min_length=1, max_length=100)
    files: list[AttachmentUpload] = Field(default_factory=list)


class CreateThreadUseCase:
    """Use case for starting a thread.

    Files are stored first; the thread then enters the moderation queue
    with status pending.
    """

    def __init__(
        self,
        thread_service: ThreadService,
        attachment_service: AttachmentService,
        user_service: UserService,
    ) -> None:
        """Initialize create thread use case.

        Args:
            thread_service: Thread domain service
            attachment_service: Attachment domain service
            user_service: User domain service
        """
        self.thread_service = thread_service
        self.attachment_service = attachment_service
        self.user_service = user_service

    async def execute(self, request: CreateThreadRequest) -> ThreadItem:
        """Execute create thread flow.

        Raises:
            AuthenticationError: If the actor is anonymous
            AttachmentError: If the files break the upload limits
            ValidationError: If a field is out of bounds
        """
        if not request.actor.is_authenticated:
            raise AuthenticationError("Authentication required")

        stored = await self.attachment_service.store_all(request.files)
        thread = await self.thread_service.create_thread(
            author_id=request.actor.user_id,
            title=request.title,
            content=request.content,
            category=request.category,
            attachments=[attachment.id for attachment in stored],
        )
        authors = await load_authors(self.user_service, [thread.author_id])
        return ThreadItem.from_domain(thread, authors, request.actor.user_id)
