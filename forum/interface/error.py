"""Translation of domain errors into HTTP errors."""

import logfire
from fastapi import HTTPException, status

from forum.domain.error import (
    AccountDisabledError,
    AttachmentError,
    AuthenticationError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

# Order matters: the first matching class wins.
_STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (AccountDisabledError, status.HTTP_403_FORBIDDEN),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AttachmentError, status.HTTP_400_BAD_REQUEST),
]


def status_code_for(error: DomainError) -> int:
    """HTTP status for a domain error (400 for unknown kinds)."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def to_http_exception(error: DomainError) -> HTTPException:
    """Build the HTTPException a route raises for ``error``.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException carrying the error message as detail
    """
    status_code = status_code_for(error)
    logfire.warn(
        "Request rejected",
        error_type=type(error).__name__,
        status_code=status_code,
        error=str(error),
    )
    headers = (
        {"WWW-Authenticate": "Bearer"}
        if status_code == status.HTTP_401_UNAUTHORIZED
        else None
    )
    return HTTPException(status_code=status_code, detail=str(error), headers=headers)
