"""Create post use case."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, PostItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import PollService, PostService
from guildfeed.domain.value import PollChoiceMode, PostTag


class PollDraft(BaseModel):
    """Poll to attach to a new post."""

    options: list[str]
    choice_mode: PollChoiceMode = PollChoiceMode.SINGLE
    expires_in_hours: Optional[int] = None


class CreatePostRequest(BaseModel):
    """Create post request."""

    context: FeedContext
    title: str
    body: str
    tag: PostTag
    poll: Optional[PollDraft] = None


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a post, optionally with a poll."""

    def __init__(
        self,
        post_service: PostService,
        poll_service: PollService,
        view_builder: FeedViewBuilder,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            poll_service: Poll domain service
            view_builder: Builds the returned post item
        """
        self.post_service = post_service
        self.poll_service = poll_service
        self.view_builder = view_builder

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        The poll draft is validated before anything is written, so a bad
        poll never leaves a post behind.

        Args:
            request: Post content and caller context

        Returns:
            Created post as seen by its author

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller may not post in the guild
            ValidationError: If the post or poll is invalid
        """
        context = request.context
        user_id = self.require_user(context, "create post")
        self.require_capability(
            context, context.is_member and context.privileges.can_post, "create post"
        )
        now = datetime.now(timezone.utc)

        with logfire.span(
            "create_post.execute",
            guild_id=context.guild_id,
            user_id=user_id,
            tag=request.tag.value,
            has_poll=request.poll is not None,
        ):
            if request.poll is not None:
                self.poll_service.validate_draft(
                    request.poll.options, request.poll.expires_in_hours
                )

            post = await self.post_service.create_post(
                guild_id=context.guild_id,
                author=context.author,
                title=request.title,
                body=request.body,
                tag=request.tag,
                now=now,
                has_poll=request.poll is not None,
            )

            if request.poll is not None:
                await self.poll_service.create_poll(
                    post_id=post.id,
                    choice_mode=request.poll.choice_mode,
                    options=request.poll.options,
                    now=now,
                    expires_in_hours=request.poll.expires_in_hours,
                )

            logfire.info("Post created", post_id=str(post.id), guild_id=context.guild_id)
            return await self.view_builder.post_item(context, post, now)
