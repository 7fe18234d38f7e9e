"""Value objects consumed and produced by the access-control evaluator."""

from enum import Enum
from typing import Union
from uuid import UUID

from forum.domain.value.common import ValueObject
from forum.domain.value.identifiers import UserId
from forum.domain.value.types import Role, ThreadStatus


class Action(str, Enum):
    """Actions an actor can request on a target."""

    READ = "read"
    EDIT = "edit"
    DELETE = "delete"
    RESTORE = "restore"
    BAN = "ban"
    UNBAN = "unban"
    APPROVE = "approve"
    REJECT = "reject"
    PROMOTE = "promote"  # Change a user's role
    CREATE_ADMIN = "create_admin"
    COMMENT = "comment"


class TargetKind(str, Enum):
    """Kind of entity an action is aimed at."""

    USER = "user"
    THREAD = "thread"
    COMMENT = "comment"


class DenialKind(str, Enum):
    """How a denial should be surfaced to the caller."""

    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"  # Information hiding: report as absent
    UNAUTHENTICATED = "unauthenticated"


class ActorContext(ValueObject):
    """Identity of whoever is asking.

    Built from an already-validated token and the freshly loaded user; the
    evaluator never verifies credentials itself.
    """

    user_id: UserId | None = None
    role: Role | None = None

    @classmethod
    def anonymous(cls) -> "ActorContext":
        """Actor for unauthenticated requests."""
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None and self.role is not None

    @property
    def is_admin(self) -> bool:
        return self.role is not None and self.role.is_admin

    def has_role(self, minimum: Role) -> bool:
        """Whether the actor holds at least ``minimum`` privilege."""
        return self.role is not None and self.role >= minimum


class TargetContext(ValueObject):
    """State of the entity an action is aimed at.

    Attributes:
        kind: User, thread or comment
        target_id: Identifier of the entity
        owner_id: Author for threads/comments, the user itself for users
        current_role: Role of a user target
        is_active: Soft-delete flag (for users: false means banned)
        status: Moderation status of a thread target
        owner_active: Whether the owning user is currently not banned
    """

    kind: TargetKind
    target_id: UUID
    owner_id: UserId
    current_role: Role | None = None
    is_active: bool = True
    status: ThreadStatus | None = None
    owner_active: bool = True


class Permit(ValueObject):
    """The requested action is allowed."""

    @property
    def allowed(self) -> bool:
        return True


class Deny(ValueObject):
    """The requested action is refused."""

    reason: str
    kind: DenialKind = DenialKind.FORBIDDEN

    @property
    def allowed(self) -> bool:
        return False


Decision = Union[Permit, Deny]
