"""JSON envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from forum.application.usecase.common import PageInfo
from forum.config import PaginationSettings

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{success, message, data, error, pagination}`` envelope."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
    error: Optional[str] = None
    pagination: Optional[PageInfo] = None


def ok(
    data: T | None = None,
    message: str | None = None,
    pagination: PageInfo | None = None,
) -> ApiResponse[T]:
    """Successful response."""
    return ApiResponse(data=data, message=message, pagination=pagination)


def failure(message: str, error: str | None = None) -> dict:
    """Error body, already serialized for a JSONResponse."""
    return ApiResponse(success=False, message=message, error=error).model_dump(
        mode="json"
    )


def page_params(
    page: int, limit: int | None, settings: PaginationSettings
) -> dict[str, int]:
    """Resolve paging query parameters against the configured limits."""
    resolved = settings.default_limit if limit is None else limit
    return {"page": page, "limit": min(resolved, settings.max_limit)}
