"""Update own profile use case."""

from typing import Optional

from pydantic import BaseModel, Field

from forum.application.usecase.common import UserView
from forum.domain.error import AuthenticationError
from forum.domain.model.common import utc_now
from forum.domain.service import UserService, require_permission
from forum.domain.value import Action, ActorContext

PROFILE_FIELDS = {
    "profile_picture_url",
    "bio",
    "major",
    "class_year",
    "location",
    "emplid",
}


class UpdateUserProfileRequest(BaseModel):
    """Profile fields to change. Fields left out of the request are kept."""

    actor: ActorContext
    profile_picture_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    major: Optional[str] = None
    class_year: Optional[str] = None
    location: Optional[str] = None
    emplid: Optional[int] = Field(default=None, gt=0)


class UpdateUserProfileUseCase:
    """Use case for users editing their own profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateUserProfileRequest) -> UserView:
        """Apply the submitted fields.

        Raises:
            AuthenticationError: If the actor is anonymous
            ValidationError: If a field is out of bounds
        """
        if not request.actor.is_authenticated:
            raise AuthenticationError("Authentication required")
        user = await self.user_service.get_by_id(request.actor.user_id)
        require_permission(request.actor, Action.EDIT, user.to_target())

        changes = request.model_dump(include=PROFILE_FIELDS, exclude_unset=True)
        if changes:
            user = await self.user_service.save(user.evolve(**changes, updated_at=utc_now()))
        return UserView.from_domain(user, include_private=True)
