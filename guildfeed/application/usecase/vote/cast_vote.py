"""Cast vote use case."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder
from guildfeed.domain.error import NotFoundError
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import PostService, ReplyService, VoteService
from guildfeed.domain.value import PostId, ReplyId, VoteTarget, VoteTargetType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    context: FeedContext
    target_type: VoteTargetType
    target_id: UUID


class CastVoteResponse(BaseModel):
    """Cast vote response.

    ``new_count`` is None while the target's score is hidden from the caller.
    """

    voted: bool
    new_count: Optional[int]


class CastVoteUseCase(BaseUseCase):
    """Use case for toggling an upvote on a post or reply."""

    def __init__(
        self,
        vote_service: VoteService,
        post_service: PostService,
        reply_service: ReplyService,
        view_builder: FeedViewBuilder,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            post_service: Post domain service
            reply_service: Reply domain service
            view_builder: Applies score hiding to the returned count
        """
        self.vote_service = vote_service
        self.post_service = post_service
        self.reply_service = reply_service
        self.view_builder = view_builder

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Calling twice in a row leaves the vote where it started.

        Args:
            request: Vote target and caller context

        Returns:
            Whether the caller now has a vote on the target, and the new count

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller is not a guild member
            NotFoundError: If the target does not exist in the guild
        """
        context = request.context
        user_id = self.require_user(context, "vote")
        self.require_capability(context, context.is_member, "vote")
        target = VoteTarget(kind=request.target_type, id=request.target_id)

        with logfire.span(
            "cast_vote.execute",
            target_type=request.target_type.value,
            target_id=str(request.target_id),
            user_id=user_id,
        ):
            created_at = await self._created_at(context, target)
            voted, new_count = await self.vote_service.toggle_vote(
                context.guild_id, user_id, target
            )

            return CastVoteResponse(
                voted=voted,
                new_count=self.view_builder.visible_count(
                    new_count, created_at, context, datetime.now(timezone.utc)
                ),
            )

    async def _created_at(self, context: FeedContext, target: VoteTarget) -> datetime:
        if target.kind == VoteTargetType.POST:
            post = await self.post_service.get_post(context.guild_id, PostId(target.id))
            return post.created_at
        reply = await self.reply_service.find_reply(ReplyId(target.id))
        if reply is None:
            raise NotFoundError("Reply", str(target.id))
        return reply.created_at
