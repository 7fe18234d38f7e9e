"""Domain model entities for the forum."""

from forum.domain.model.attachment import Attachment, AttachmentUpload
from forum.domain.model.comment import Comment
from forum.domain.model.common import DomainModel, ModeratableEntity, utc_now
from forum.domain.model.thread import Thread
from forum.domain.model.user import User

__all__ = [
    "Attachment",
    "AttachmentUpload",
    "Comment",
    "DomainModel",
    "ModeratableEntity",
    "Thread",
    "User",
    "utc_now",
]
