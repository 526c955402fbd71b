"""Moderate post use case."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.application.usecase.view import FeedViewBuilder, PostItem
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import ModerationService, PostService
from guildfeed.domain.value import ModerationAction, PostId


class ModeratePostRequest(BaseModel):
    """Moderate post request.

    ``duplicate_of_post_id`` is required for ``mark_duplicate`` and ignored
    otherwise.
    """

    context: FeedContext
    post_id: PostId
    action: ModerationAction
    duplicate_of_post_id: Optional[PostId] = None


class ModeratePostResponse(BaseModel):
    """Moderate post response (``post`` is None once deleted)."""

    action: ModerationAction
    deleted: bool
    post: Optional[PostItem] = None


class ModeratePostUseCase(BaseUseCase):
    """Use case for pinning, closing, deleting or de-duplicating a post."""

    def __init__(
        self,
        post_service: PostService,
        moderation_service: ModerationService,
        view_builder: FeedViewBuilder,
    ) -> None:
        """Initialize moderate post use case.

        Args:
            post_service: Post domain service
            moderation_service: Moderation domain service
            view_builder: Builds the returned post item
        """
        self.post_service = post_service
        self.moderation_service = moderation_service
        self.view_builder = view_builder

    async def execute(self, request: ModeratePostRequest) -> ModeratePostResponse:
        """Execute moderation flow.

        Args:
            request: Target post, action and caller context

        Returns:
            The action applied and the post's new state

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller lacks the action's capability
            NotFoundError: If the post (or duplicate original) does not exist
            ValidationError: If a duplicate target is missing or invalid
            ConflictError: If the post changed concurrently
        """
        context = request.context
        user_id = self.require_user(context, request.action.value)
        now = datetime.now(timezone.utc)

        with logfire.span(
            "moderate_post.execute",
            post_id=str(request.post_id),
            action=request.action.value,
            user_id=user_id,
        ):
            post = await self.post_service.get_post(context.guild_id, request.post_id)
            updated = await self.moderation_service.moderate(
                post=post,
                action=request.action,
                privileges=context.privileges,
                now=now,
                user_id=user_id,
                duplicate_of_post_id=request.duplicate_of_post_id,
            )

            if updated is None:
                return ModeratePostResponse(action=request.action, deleted=True)
            return ModeratePostResponse(
                action=request.action,
                deleted=False,
                post=await self.view_builder.post_item(context, updated, now),
            )
