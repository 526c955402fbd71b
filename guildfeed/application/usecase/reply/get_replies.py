"""Get replies use case."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, ReplyItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import PostService, ReplyService
from guildfeed.domain.value import PostId, ReplyId, ReplySortOrder


class GetRepliesRequest(BaseModel):
    """Get replies request.

    Without ``parent_reply_id`` the top-level replies of the post are
    returned; with it, the direct children of that reply.
    """

    context: FeedContext
    post_id: PostId
    parent_reply_id: Optional[ReplyId] = None
    sort: ReplySortOrder = ReplySortOrder.NEW
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    data: list[ReplyItem]
    total: int
    page: int
    limit: int


class GetRepliesUseCase(BaseUseCase):
    """Use case for loading one level of a post's reply tree."""

    def __init__(
        self,
        post_service: PostService,
        reply_service: ReplyService,
        view_builder: FeedViewBuilder,
    ) -> None:
        """Initialize get replies use case.

        Args:
            post_service: Post domain service
            reply_service: Reply domain service
            view_builder: Builds viewer-specific reply items
        """
        self.post_service = post_service
        self.reply_service = reply_service
        self.view_builder = view_builder

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Args:
            request: Post, optional parent reply, paging and caller context

        Returns:
            One page of replies, oldest first

        Raises:
            NotFoundError: If the post, or the parent reply within it, does not exist
        """
        context = request.context
        settings = self.reply_service.feed_settings
        limit = min(
            request.limit or settings.default_reply_page_size, settings.max_reply_page_size
        )

        with logfire.span(
            "get_replies.execute",
            post_id=str(request.post_id),
            parent_reply_id=str(request.parent_reply_id) if request.parent_reply_id else None,
        ):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            if request.parent_reply_id is not None:
                await self.reply_service.get_reply(post.id, request.parent_reply_id)

            replies, total = await self.reply_service.get_replies(
                post_id=post.id,
                parent_reply_id=request.parent_reply_id,
                limit=limit,
                offset=(request.page - 1) * limit,
            )
            items = await self.view_builder.reply_items(
                context, post, replies, datetime.now(timezone.utc)
            )
            return GetRepliesResponse(data=items, total=total, page=request.page, limit=limit)
