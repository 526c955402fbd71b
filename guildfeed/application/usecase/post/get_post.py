"""Get post use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, PostItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import PostService
from guildfeed.domain.value import PostId


class GetPostRequest(BaseModel):
    """Get post request."""

    context: FeedContext
    post_id: PostId


class GetPostUseCase(BaseUseCase):
    """Use case for loading a single post."""

    def __init__(self, post_service: PostService, view_builder: FeedViewBuilder) -> None:
        self.post_service = post_service
        self.view_builder = view_builder

    async def execute(self, request: GetPostRequest) -> PostItem:
        """Load a post of the caller's guild.

        Raises:
            NotFoundError: If the post does not exist in the guild
        """
        context = request.context
        with logfire.span("get_post.execute", post_id=str(request.post_id)):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            return await self.view_builder.post_item(context, post, datetime.now(timezone.utc))
