"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from forum.domain.value.common import RootValueObject


class Role(str, Enum):
    """User role, totally ordered by privilege.

    ``USER < ADMIN_LEVEL_1 < ADMIN_LEVEL_2``. The ordering operators compare
    privilege levels, not the string values.
    """

    USER = "user"
    ADMIN_LEVEL_1 = "admin_level_1"
    ADMIN_LEVEL_2 = "admin_level_2"

    @property
    def level(self) -> int:
        """Numeric privilege level."""
        return _ROLE_LEVELS[self]

    @property
    def is_admin(self) -> bool:
        """Whether this role is any admin tier."""
        return self >= Role.ADMIN_LEVEL_1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.level < other.level

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.level <= other.level

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.level > other.level

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Role):
            return NotImplemented
        return self.level >= other.level


_ROLE_LEVELS: dict[Role, int] = {
    Role.USER: 0,
    Role.ADMIN_LEVEL_1: 1,
    Role.ADMIN_LEVEL_2: 2,
}


class ThreadStatus(str, Enum):
    """Moderation status of a thread."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ThreadSortOrder(str, Enum):
    """Sort order for thread listings."""

    RECENT = "recent"
    POPULAR = "popular"  # Most liked
    VIEWS = "views"
    REPLIES = "replies"  # Most active comments


class Username(RootValueObject[str]):
    """Forum username.

    3-30 characters: letters, digits, dots, hyphens and underscores.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9._-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '.', '-' or '_'"
            )
        return v
