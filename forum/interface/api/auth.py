"""Bearer-token resolution for routes.

Routes pass the raw ``Authorization`` header and the current-user use case;
these helpers turn them into an ``ActorContext``.
"""

import logfire
from fastapi import HTTPException, status

from forum.application.usecase.auth import GetCurrentUserRequest, GetCurrentUserUseCase
from forum.domain.error import AccountDisabledError, AuthenticationError, DomainError
from forum.domain.value import ActorContext
from forum.interface.error import to_http_exception


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from ``Bearer <token>``, or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_actor(
    get_current_user_use_case: GetCurrentUserUseCase, authorization: str | None
) -> ActorContext:
    """Resolve the caller, refusing anonymous requests.

    Raises:
        HTTPException: 401 without a valid token, 403 for a banned account
    """
    token = bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        result = await get_current_user_use_case.execute(GetCurrentUserRequest(token=token))
    except DomainError as e:
        raise to_http_exception(e) from e
    return result.actor


async def optional_actor(
    get_current_user_use_case: GetCurrentUserUseCase, authorization: str | None
) -> ActorContext:
    """Resolve the caller, treating a bad token or banned account as anonymous."""
    token = bearer_token(authorization)
    if not token:
        return ActorContext.anonymous()
    try:
        result = await get_current_user_use_case.execute(GetCurrentUserRequest(token=token))
    except (AuthenticationError, AccountDisabledError) as e:
        logfire.debug("Treating request as anonymous", reason=str(e))
        return ActorContext.anonymous()
    return result.actor
