"""List posts use case."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, PostItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import BookmarkService, PostService
from guildfeed.domain.value import PostSortOrder, PostTag, TimeWindow


class ListPostsRequest(BaseModel):
    """List posts request."""

    context: FeedContext
    sort: PostSortOrder = PostSortOrder.HOT
    tag: Optional[PostTag] = None
    time_window: Optional[TimeWindow] = None
    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)
    bookmarked_only: bool = False


class ListPostsResponse(BaseModel):
    """List posts response."""

    data: list[PostItem]
    total: int
    page: int
    limit: int


class ListPostsUseCase(BaseUseCase):
    """Use case for listing a guild's feed."""

    def __init__(
        self,
        post_service: PostService,
        bookmark_service: BookmarkService,
        view_builder: FeedViewBuilder,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            bookmark_service: Bookmark domain service
            view_builder: Builds viewer-specific post items
        """
        self.post_service = post_service
        self.bookmark_service = bookmark_service
        self.view_builder = view_builder

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: Listing parameters and caller context

        Returns:
            One page of posts with the total number of matches
        """
        context = request.context
        now = datetime.now(timezone.utc)
        settings = self.post_service.feed_settings
        limit = min(request.limit or settings.default_page_size, settings.max_page_size)

        with logfire.span(
            "list_posts.execute",
            guild_id=context.guild_id,
            sort=request.sort.value,
            tag=request.tag.value if request.tag else None,
            page=request.page,
            bookmarked_only=request.bookmarked_only,
        ):
            bookmarked = None
            post_ids = None
            if request.bookmarked_only:
                if context.user_id is None:
                    return ListPostsResponse(data=[], total=0, page=request.page, limit=limit)
                try:
                    post_ids = await self.bookmark_service.bookmarked_post_ids(
                        context.user_id, context.guild_id
                    )
                except Exception as e:
                    logfire.warn(
                        "Bookmark lookup failed, returning empty bookmarked feed",
                        user_id=context.user_id,
                        error=str(e),
                    )
                    post_ids = []
                bookmarked = set(post_ids)

            posts, total = await self.post_service.list_posts(
                guild_id=context.guild_id,
                sort=request.sort,
                now=now,
                tag=request.tag,
                time_window=request.time_window,
                post_ids=post_ids,
                page=request.page,
                limit=limit,
            )

            items = await self.view_builder.post_items(context, posts, now, bookmarked)

            return ListPostsResponse(data=items, total=total, page=request.page, limit=limit)
