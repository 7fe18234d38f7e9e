"""Base models for all domain entities."""

from abc import abstractmethod
from datetime import datetime, timezone
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from forum.domain.error import ValidationError
from forum.domain.value.access import TargetContext


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"{field}: {first['msg']}" if field else first["msg"]


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    @classmethod
    def create(cls, **fields: Any) -> Self:
        """Construct an instance, raising the domain ValidationError on bad input."""
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            raise ValidationError(_describe(e)) from e

    def evolve(self, **changes: Any) -> Self:
        """Return a re-validated copy with ``changes`` applied.

        Unlike ``model_copy(update=...)`` the result is checked against the
        field constraints.
        """
        return type(self).create(**{**dict(self), **changes})


class ModeratableEntity(DomainModel):
    """Entity that is soft-deleted rather than removed.

    Users, threads and comments all carry ``is_active``; moderation flips it
    and the access-control evaluator reads it through ``to_target()``.
    Because models are frozen, the transitions return updated copies.
    """

    is_active: bool = True
    updated_at: datetime = Field(default_factory=utc_now)

    def soft_delete(self) -> Self:
        """Return a copy marked inactive."""
        return self.model_copy(update={"is_active": False, "updated_at": utc_now()})

    def restore(self) -> Self:
        """Return a copy marked active again."""
        return self.model_copy(update={"is_active": True, "updated_at": utc_now()})

    @abstractmethod
    def to_target(self, owner_active: bool = True) -> TargetContext:
        """Describe this entity for the access-control evaluator."""
