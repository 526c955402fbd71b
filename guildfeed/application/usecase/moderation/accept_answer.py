"""Accept answer use cases."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, PostItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import ModerationService, PostService
from guildfeed.domain.value import PostId, ReplyId


class AcceptAnswerRequest(BaseModel):
    """Accept answer request."""

    context: FeedContext
    post_id: PostId
    reply_id: ReplyId


class AcceptAnswerUseCase(BaseUseCase):
    """Use case for marking a reply as the answer to a question."""

    def __init__(
        self,
        post_service: PostService,
        moderation_service: ModerationService,
        view_builder: FeedViewBuilder,
    ) -> None:
        self.post_service = post_service
        self.moderation_service = moderation_service
        self.view_builder = view_builder

    async def execute(self, request: AcceptAnswerRequest) -> PostItem:
        """Accept a reply as the post's answer.

        Returns:
            The updated post

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller is neither the author nor allowed to
                accept on their behalf
            NotFoundError: If the post or reply does not exist
            ValidationError: If the post is not a question or already has a
                different accepted answer
        """
        context = request.context
        user_id = self.require_user(context, "accept answer")
        now = datetime.now(timezone.utc)

        with logfire.span(
            "accept_answer.execute",
            post_id=str(request.post_id),
            reply_id=str(request.reply_id),
            user_id=user_id,
        ):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            updated = await self.moderation_service.accept_answer(
                post, request.reply_id, user_id, context.privileges, now
            )
            return await self.view_builder.post_item(context, updated, now)


class RemoveAcceptedAnswerRequest(BaseModel):
    """Remove accepted answer request."""

    context: FeedContext
    post_id: PostId


class RemoveAcceptedAnswerUseCase(BaseUseCase):
    """Use case for clearing a question's accepted answer."""

    def __init__(
        self,
        post_service: PostService,
        moderation_service: ModerationService,
        view_builder: FeedViewBuilder,
    ) -> None:
        self.post_service = post_service
        self.moderation_service = moderation_service
        self.view_builder = view_builder

    async def execute(self, request: RemoveAcceptedAnswerRequest) -> PostItem:
        """Clear the accepted answer; same permission as accepting."""
        context = request.context
        user_id = self.require_user(context, "remove accepted answer")
        now = datetime.now(timezone.utc)

        with logfire.span(
            "remove_accepted_answer.execute", post_id=str(request.post_id), user_id=user_id
        ):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            updated = await self.moderation_service.remove_accepted_answer(
                post, user_id, context.privileges, now
            )
            return await self.view_builder.post_item(context, updated, now)
