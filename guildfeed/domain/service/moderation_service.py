"""Moderation domain service.

A post moves on two independent axes, open/closed and pinned/unpinned, and
can be deleted (terminal, cascading). Accepting an answer is a separate
transition that only applies to question posts.

Every state change is written with a compare-and-set on the post version so
two moderators acting at once cannot silently overwrite each other.
"""

from datetime import datetime
from typing import Any, Optional

import logfire

from guildfeed.domain.error import ForbiddenError, ValidationError
from guildfeed.domain.model.post import Post
from guildfeed.domain.repository import PostRepository
from guildfeed.domain.value import (
    FeedPrivileges,
    ModerationAction,
    PostId,
    PostTag,
    ReplyId,
    UserId,
    VoteTargetType,
)

from .base import Service
from .bookmark_service import BookmarkService
from .poll_service import PollService
from .post_service import PostService
from .reply_service import ReplyService
from .vote_service import VoteService

REQUIRED_CAPABILITY = {
    ModerationAction.PIN: "can_pin_unpin",
    ModerationAction.UNPIN: "can_pin_unpin",
    ModerationAction.CLOSE: "can_close_reopen",
    ModerationAction.REOPEN: "can_close_reopen",
    ModerationAction.DELETE: "can_delete",
    ModerationAction.MARK_DUPLICATE: "can_mark_duplicate",
}


class ModerationService(Service):
    """Domain service for moderation and accepted answers."""

    def __init__(
        self,
        post_repository: PostRepository,
        post_service: PostService,
        reply_service: ReplyService,
        vote_service: VoteService,
        poll_service: PollService,
        bookmark_service: BookmarkService,
    ) -> None:
        """Initialize moderation service.

        Args:
            post_repository: Post repository (version-checked writes)
            post_service: Post domain service
            reply_service: Reply domain service
            vote_service: Vote domain service
            poll_service: Poll domain service
            bookmark_service: Bookmark domain service
        """
        self.post_repository = post_repository
        self.post_service = post_service
        self.reply_service = reply_service
        self.vote_service = vote_service
        self.poll_service = poll_service
        self.bookmark_service = bookmark_service

    async def moderate(
        self,
        post: Post,
        action: ModerationAction,
        privileges: FeedPrivileges,
        now: datetime,
        user_id: Optional[UserId] = None,
        duplicate_of_post_id: Optional[PostId] = None,
    ) -> Optional[Post]:
        """Apply a moderation action to a post.

        Applying an action whose target state already holds (pinning a pinned
        post, closing a closed one) leaves the post untouched.

        Args:
            post: Post to moderate
            action: Moderation command
            privileges: Caller's capability set
            now: Time of the action
            user_id: Acting user, for logging
            duplicate_of_post_id: Original post, required for ``mark_duplicate``

        Returns:
            The updated post, or None after ``delete``

        Raises:
            ForbiddenError: If the caller lacks the capability for the action
            ValidationError: If ``mark_duplicate`` has no valid original
            NotFoundError: If the original post is not in the same guild
            ConflictError: If the post changed concurrently
        """
        with logfire.span(
            "moderation_service.moderate",
            post_id=str(post.id),
            action=action.value,
            user_id=user_id,
        ):
            capability = REQUIRED_CAPABILITY[action]
            if not getattr(privileges, capability):
                logfire.warn(
                    "Moderation forbidden",
                    post_id=str(post.id),
                    action=action.value,
                    user_id=user_id,
                )
                raise ForbiddenError(f"{action.value} posts", user_id)

            if action == ModerationAction.DELETE:
                await self._delete_cascade(post)
                return None

            if action == ModerationAction.PIN:
                if post.is_pinned:
                    return post
                changes: dict[str, Any] = {"is_pinned": True, "pinned_at": now}
            elif action == ModerationAction.UNPIN:
                if not post.is_pinned:
                    return post
                changes = {"is_pinned": False, "pinned_at": None}
            elif action == ModerationAction.CLOSE:
                if post.is_closed:
                    return post
                changes = {"is_closed": True}
            elif action == ModerationAction.REOPEN:
                if not post.is_closed:
                    return post
                changes = {"is_closed": False}
            else:
                changes = await self._duplicate_changes(post, duplicate_of_post_id)

            updated = await self._write(post, changes, now)
            logfire.info("Post moderated", post_id=str(post.id), action=action.value)
            return updated

    async def _duplicate_changes(
        self, post: Post, duplicate_of_post_id: Optional[PostId]
    ) -> dict[str, Any]:
        if duplicate_of_post_id is None:
            raise ValidationError("mark_duplicate requires the original post")
        if duplicate_of_post_id == post.id:
            raise ValidationError("A post cannot duplicate itself")
        # Raises NotFoundError when the original is not in this guild
        await self.post_service.get_post(post.guild_id, duplicate_of_post_id)
        return {"duplicate_of_post_id": duplicate_of_post_id, "is_closed": True}

    async def _delete_cascade(self, post: Post) -> None:
        reply_ids = await self.reply_service.reply_ids_for_post(post.id)
        await self.vote_service.delete_votes(VoteTargetType.REPLY, reply_ids)
        await self.vote_service.delete_votes(VoteTargetType.POST, [post.id])
        await self.poll_service.delete_poll_for_post(post.id)
        await self.bookmark_service.delete_bookmarks_for_post(post.id)
        await self.reply_service.delete_replies_for_post(post.id)
        await self.post_repository.delete(post.id)
        logfire.info("Post deleted", post_id=str(post.id), replies=len(reply_ids))

    async def accept_answer(
        self,
        post: Post,
        reply_id: ReplyId,
        user_id: UserId,
        privileges: FeedPrivileges,
        now: datetime,
    ) -> Post:
        """Mark a reply as the accepted answer of a question post.

        An accepted answer is never replaced implicitly: accepting a
        different reply requires removing the current one first. Accepting
        the already-accepted reply again is a no-op.

        Args:
            post: Question post
            reply_id: Reply to accept (must belong to the post)
            user_id: Acting user
            privileges: Caller's capability set
            now: Time of the action

        Returns:
            The updated post

        Raises:
            ForbiddenError: If the caller is neither the author nor allowed to
                accept on the author's behalf
            ValidationError: If the post is not a question or already has a
                different accepted answer
            NotFoundError: If the reply does not belong to the post
            ConflictError: If the post changed concurrently
        """
        with logfire.span(
            "moderation_service.accept_answer",
            post_id=str(post.id),
            reply_id=str(reply_id),
            user_id=user_id,
        ):
            self._check_can_accept(post, user_id, privileges)
            if post.tag != PostTag.QUESTION:
                raise ValidationError("Only question posts can have an accepted answer")

            await self.reply_service.get_reply(post.id, reply_id)

            if post.accepted_reply_id == reply_id:
                return post
            if post.accepted_reply_id is not None:
                logfire.warn(
                    "Accepted answer replacement rejected",
                    post_id=str(post.id),
                    current=str(post.accepted_reply_id),
                    requested=str(reply_id),
                )
                raise ValidationError(
                    "This question already has an accepted answer; remove it first"
                )

            updated = await self._write(post, {"accepted_reply_id": reply_id}, now)
            logfire.info("Answer accepted", post_id=str(post.id), reply_id=str(reply_id))
            return updated

    async def remove_accepted_answer(
        self,
        post: Post,
        user_id: UserId,
        privileges: FeedPrivileges,
        now: datetime,
    ) -> Post:
        """Clear the accepted answer of a question post.

        Args:
            post: Question post
            user_id: Acting user
            privileges: Caller's capability set
            now: Time of the action

        Returns:
            The updated post (unchanged if nothing was accepted)

        Raises:
            ForbiddenError: If the caller is neither the author nor allowed to
                accept on the author's behalf
            ConflictError: If the post changed concurrently
        """
        with logfire.span(
            "moderation_service.remove_accepted_answer",
            post_id=str(post.id),
            user_id=user_id,
        ):
            self._check_can_accept(post, user_id, privileges)
            if post.accepted_reply_id is None:
                return post

            updated = await self._write(post, {"accepted_reply_id": None}, now)
            logfire.info("Accepted answer removed", post_id=str(post.id))
            return updated

    @staticmethod
    def _check_can_accept(post: Post, user_id: UserId, privileges: FeedPrivileges) -> None:
        if post.is_authored_by(user_id) or privileges.can_accept_on_behalf:
            return
        logfire.warn("Accept answer forbidden", post_id=str(post.id), user_id=user_id)
        raise ForbiddenError("accept answers on this post", user_id)

    async def _write(self, post: Post, changes: dict[str, Any], now: datetime) -> Post:
        return await self.post_service.write_changes(post, changes, now)
