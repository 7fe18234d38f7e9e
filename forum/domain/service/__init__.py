"""Domain services."""

from .access_control import (
    evaluate,
    parse_ban_duration,
    reconcile_ban_expiry,
    require_admin,
    require_permission,
)
from .attachment_service import AttachmentService
from .auth_service import AuthService
from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentNode, build_comment_forest
from .jwt_service import JWTService
from .thread_service import ThreadService
from .user_service import UserService

__all__ = [
    "AttachmentService",
    "AuthService",
    "CommentNode",
    "CommentService",
    "JWTService",
    "Service",
    "ThreadService",
    "UserService",
    "build_comment_forest",
    "evaluate",
    "parse_ban_duration",
    "reconcile_ban_expiry",
    "require_admin",
    "require_permission",
]
