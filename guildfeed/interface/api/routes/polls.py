"""Poll routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from guildfeed.application.usecase.context import ResolveContextUseCase
from guildfeed.application.usecase.poll import CastPollVoteRequest, CastPollVoteUseCase
from guildfeed.domain.error import DomainError
from guildfeed.domain.model import PollView
from guildfeed.domain.value import PollOptionId, PostId
from guildfeed.interface.api.auth import bearer_token, resolve_caller
from guildfeed.interface.error import to_http_exception

router = APIRouter(prefix="/guilds/{guild_id}/posts", tags=["polls"], route_class=DishkaRoute)


class CastPollVoteAPIRequest(BaseModel):
    """API request for voting in a poll."""

    option_ids: list[UUID] = Field(min_length=1)


@router.post("/{post_id}/poll/vote", response_model=PollView)
async def cast_poll_vote(
    guild_id: str,
    post_id: UUID,
    request: CastPollVoteAPIRequest,
    cast_poll_vote_use_case: FromDishka[CastPollVoteUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> PollView:
    """Vote in a post's poll. A vote cannot be changed afterwards.

    Raises:
        HTTPException: 409 if already voted or the poll expired
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await cast_poll_vote_use_case.execute(
            CastPollVoteRequest(
                context=context,
                post_id=PostId(post_id),
                option_ids=[PollOptionId(option_id) for option_id in request.option_ids],
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
