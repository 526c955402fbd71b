"""Request credential extraction."""

import logfire
from fastapi import Cookie, Header, HTTPException, status

from guildfeed.adapter.error import GuildDirectoryError
from guildfeed.application.usecase.context import ResolveContextRequest, ResolveContextUseCase
from guildfeed.domain.model import FeedContext


def bearer_token(
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> str | None:
    """Return the JWT sent with the request, if any.

    The ``Authorization: Bearer`` header wins over the ``auth_token`` cookie.
    """
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
    return auth_token


async def resolve_caller(
    resolve_context: ResolveContextUseCase, guild_id: str, token: str | None
) -> FeedContext:
    """Resolve the caller's context in a guild for a route.

    Raises:
        HTTPException: 503 if the guild directory cannot be reached
    """
    try:
        return await resolve_context.execute(
            ResolveContextRequest(guild_id=guild_id, token=token)
        )
    except GuildDirectoryError as e:
        logfire.error("Guild directory unavailable", guild_id=guild_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Guild membership service unavailable",
        )
