"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from guildfeed.application.usecase.context import ResolveContextUseCase
from guildfeed.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from guildfeed.domain.error import DomainError
from guildfeed.domain.value import VoteTargetType
from guildfeed.interface.api.auth import bearer_token, resolve_caller
from guildfeed.interface.error import to_http_exception

router = APIRouter(prefix="/guilds/{guild_id}", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for toggling a vote."""

    target_type: VoteTargetType
    target_id: UUID


@router.post("/votes", response_model=CastVoteResponse)
async def cast_vote(
    guild_id: str,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> CastVoteResponse:
    """Toggle the caller's upvote on a post or reply.

    Requires authentication.

    Args:
        guild_id: Guild of the target
        request: Target type and ID
        cast_vote_use_case: Cast vote use case from DI
        resolve_context: Caller context use case from DI
        token: JWT from header or cookie

    Returns:
        Whether the caller now has a vote, and the new count
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                context=context,
                target_type=request.target_type,
                target_id=request.target_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
