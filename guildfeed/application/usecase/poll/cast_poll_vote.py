"""Cast poll vote use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel, Field

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.domain.model import FeedContext, PollView
from guildfeed.domain.service import PollService, PostService
from guildfeed.domain.value import PollOptionId, PostId


class CastPollVoteRequest(BaseModel):
    """Cast poll vote request."""

    context: FeedContext
    post_id: PostId
    option_ids: list[PollOptionId] = Field(min_length=1)


class CastPollVoteUseCase(BaseUseCase):
    """Use case for voting in a post's poll."""

    def __init__(self, post_service: PostService, poll_service: PollService) -> None:
        self.post_service = post_service
        self.poll_service = poll_service

    async def execute(self, request: CastPollVoteRequest) -> PollView:
        """Record the caller's poll selection.

        Returns:
            The poll with results revealed to the caller

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller is not a guild member
            NotFoundError: If the post or its poll does not exist
            PollClosedError: If the poll has expired
            AlreadyVotedError: If the caller already voted in this poll
            ValidationError: If the selection does not fit the poll
        """
        context = request.context
        user_id = self.require_user(context, "vote in poll")
        self.require_capability(context, context.is_member, "vote in poll")

        with logfire.span(
            "cast_poll_vote.execute", post_id=str(request.post_id), user_id=user_id
        ):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            return await self.poll_service.cast_vote(
                post.id, user_id, request.option_ids, datetime.now(timezone.utc)
            )
