"""Update post use case."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, PostItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import PostService
from guildfeed.domain.value import PostId, PostTag


class UpdatePostRequest(BaseModel):
    """Update post request.

    Omitted fields keep their current value.
    """

    context: FeedContext
    post_id: PostId
    title: Optional[str] = None
    body: Optional[str] = None
    tag: Optional[PostTag] = None
    version: Optional[int] = None


class UpdatePostUseCase(BaseUseCase):
    """Use case for editing a post's content."""

    def __init__(self, post_service: PostService, view_builder: FeedViewBuilder) -> None:
        self.post_service = post_service
        self.view_builder = view_builder

    async def execute(self, request: UpdatePostRequest) -> PostItem:
        """Edit a post as its author or as a member allowed to edit others.

        Returns:
            The updated post

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller may not edit this post
            NotFoundError: If the post does not exist in the guild
            ValidationError: If the new content is invalid
            ConflictError: If the post changed since ``version``
        """
        context = request.context
        user_id = self.require_user(context, "edit post")
        now = datetime.now(timezone.utc)

        with logfire.span("update_post.execute", post_id=str(request.post_id), user_id=user_id):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            updated = await self.post_service.update_post(
                post,
                user_id,
                context.privileges,
                now,
                title=request.title,
                body=request.body,
                tag=request.tag,
                expected_version=request.version,
            )
            return await self.view_builder.post_item(context, updated, now)
