"""List bookmarks use case."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, PostItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import BookmarkService, PostService


class ListBookmarksRequest(BaseModel):
    """List bookmarks request."""

    context: FeedContext
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)


class ListBookmarksResponse(BaseModel):
    """List bookmarks response."""

    data: list[PostItem]
    total: int
    page: int
    limit: int


class ListBookmarksUseCase(BaseUseCase):
    """Use case for listing the caller's bookmarked posts in a guild."""

    def __init__(
        self,
        post_service: PostService,
        bookmark_service: BookmarkService,
        view_builder: FeedViewBuilder,
    ) -> None:
        """Initialize list bookmarks use case.

        Args:
            post_service: Post domain service
            bookmark_service: Bookmark domain service
            view_builder: Builds viewer-specific post items
        """
        self.post_service = post_service
        self.bookmark_service = bookmark_service
        self.view_builder = view_builder

    async def execute(self, request: ListBookmarksRequest) -> ListBookmarksResponse:
        """List bookmarked posts in the order they were bookmarked.

        Raises:
            UnauthorizedError: If the caller is anonymous
        """
        context = request.context
        user_id = self.require_user(context, "list bookmarks")
        settings = self.post_service.feed_settings
        limit = min(request.limit or settings.default_page_size, settings.max_page_size)
        offset = (request.page - 1) * limit

        with logfire.span("list_bookmarks.execute", user_id=user_id, page=request.page):
            post_ids = await self.bookmark_service.bookmarked_post_ids(user_id, context.guild_id)
            page_ids = post_ids[offset : offset + limit]

            now = datetime.now(timezone.utc)
            posts = await self.post_service.get_posts(context.guild_id, page_ids, now)
            items = await self.view_builder.post_items(
                context, posts, now, bookmarked=set(page_ids)
            )
            return ListBookmarksResponse(
                data=items, total=len(post_ids), page=request.page, limit=limit
            )
