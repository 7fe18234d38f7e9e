"""User aggregate root.

Users register with a username and password, hold one of three roles and
can be banned (temporarily or permanently) by admins.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import ModeratableEntity, utc_now
from forum.domain.value import (
    ActorContext,
    Role,
    TargetContext,
    TargetKind,
    UserId,
    Username,
)


class User(ModeratableEntity):
    """User aggregate root.

    ``is_active=False`` means banned or deactivated. ``banned_until`` set
    alongside it marks a timed ban; ``None`` with ``is_active=False`` is a
    permanent ban. A lapsed timed ban is cleared lazily on the next read.
    """

    id: UserId
    username: Username
    email: str = Field(min_length=3, max_length=255)
    password_hash: str
    role: Role = Role.USER
    banned_until: Optional[datetime] = None
    profile_picture_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    major: Optional[str] = None
    class_year: Optional[str] = None
    location: Optional[str] = None
    emplid: Optional[int] = Field(default=None, gt=0)  # Student ID
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_banned(self) -> bool:
        return not self.is_active

    def ban(self, banned_until: datetime | None) -> "User":
        """Return a banned copy; ``None`` means permanent."""
        return self.model_copy(
            update={
                "is_active": False,
                "banned_until": banned_until,
                "updated_at": utc_now(),
            }
        )

    def unban(self) -> "User":
        """Return an unbanned copy, clearing any ban expiry."""
        return self.model_copy(
            update={"is_active": True, "banned_until": None, "updated_at": utc_now()}
        )

    def restore(self) -> "User":
        """Restoring a user also lifts any ban expiry."""
        return self.unban()

    def to_target(self, owner_active: bool = True) -> TargetContext:
        return TargetContext(
            kind=TargetKind.USER,
            target_id=self.id,
            owner_id=self.id,
            current_role=self.role,
            is_active=self.is_active,
            owner_active=self.is_active,
        )

    def as_actor(self) -> ActorContext:
        """Identity of this user for access-control decisions."""
        return ActorContext(user_id=self.id, role=self.role)
