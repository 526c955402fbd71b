"""Create reply use case."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, ReplyItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import PostService, ReplyService
from guildfeed.domain.value import PostId, ReplyId


class CreateReplyRequest(BaseModel):
    """Create reply request."""

    context: FeedContext
    post_id: PostId
    body: str
    parent_reply_id: Optional[ReplyId] = None


class CreateReplyUseCase(BaseUseCase):
    """Use case for replying to a post or to another reply."""

    def __init__(
        self,
        post_service: PostService,
        reply_service: ReplyService,
        view_builder: FeedViewBuilder,
    ) -> None:
        self.post_service = post_service
        self.reply_service = reply_service
        self.view_builder = view_builder

    async def execute(self, request: CreateReplyRequest) -> ReplyItem:
        """Execute create reply flow.

        Args:
            request: Reply content and caller context

        Returns:
            Created reply as seen by its author

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller may not reply in the guild
            NotFoundError: If the post or parent reply does not exist
            PostClosedError: If the post is closed
            DepthExceededError: If the parent is already at the maximum depth
        """
        context = request.context
        user_id = self.require_user(context, "reply")
        self.require_capability(
            context, context.is_member and context.privileges.can_reply, "reply"
        )
        now = datetime.now(timezone.utc)

        with logfire.span(
            "create_reply.execute",
            post_id=str(request.post_id),
            user_id=user_id,
            parent_reply_id=str(request.parent_reply_id) if request.parent_reply_id else None,
        ):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            reply = await self.reply_service.create_reply(
                post=post,
                author=context.author,
                body=request.body,
                now=now,
                parent_reply_id=request.parent_reply_id,
            )
            items = await self.view_builder.reply_items(context, post, [reply], now)
            return items[0]
