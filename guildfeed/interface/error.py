"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import HTTPException, status

from guildfeed.domain.error import (
    AlreadyVotedError,
    ConflictError,
    DepthExceededError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    PollClosedError,
    PostClosedError,
    UnauthorizedError,
    ValidationError,
)

ERROR_STATUS: dict[type[DomainError], int] = {
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    PostClosedError: status.HTTP_409_CONFLICT,
    DepthExceededError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AlreadyVotedError: status.HTTP_409_CONFLICT,
    PollClosedError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
}


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error to the HTTPException a route should raise.

    The response detail carries the error type name and message so clients
    can branch on ``PostClosedError`` without parsing text.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with the matching status code
    """
    status_code = ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST)
    if status_code >= 500 or status_code == status.HTTP_400_BAD_REQUEST:
        logfire.error("Unmapped domain error", error=str(error), kind=type(error).__name__)
    else:
        logfire.warn("Domain error", error=str(error), kind=type(error).__name__)
    return HTTPException(
        status_code=status_code,
        detail={"error": type(error).__name__, "message": str(error)},
    )
