"""Toggle bookmark use case."""

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import BookmarkService, PostService
from guildfeed.domain.value import PostId


class ToggleBookmarkRequest(BaseModel):
    """Toggle bookmark request."""

    context: FeedContext
    post_id: PostId


class ToggleBookmarkResponse(BaseModel):
    """Toggle bookmark response."""

    bookmarked: bool


class ToggleBookmarkUseCase(BaseUseCase):
    """Use case for adding or removing a bookmark."""

    def __init__(self, post_service: PostService, bookmark_service: BookmarkService) -> None:
        self.post_service = post_service
        self.bookmark_service = bookmark_service

    async def execute(self, request: ToggleBookmarkRequest) -> ToggleBookmarkResponse:
        """Flip the caller's bookmark on a post.

        Bookmarks are allowed on closed posts.

        Raises:
            UnauthorizedError: If the caller is anonymous
            NotFoundError: If the post does not exist in the guild
        """
        context = request.context
        user_id = self.require_user(context, "bookmark")

        with logfire.span("toggle_bookmark.execute", post_id=str(request.post_id), user_id=user_id):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            bookmarked = await self.bookmark_service.toggle_bookmark(
                user_id, context.guild_id, post.id
            )
            return ToggleBookmarkResponse(bookmarked=bookmarked)
