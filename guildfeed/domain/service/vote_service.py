"""Vote domain service."""

from typing import Sequence
from uuid import UUID

import logfire

from guildfeed.domain.error import ConflictError, NotFoundError
from guildfeed.domain.repository import VoteRepository
from guildfeed.domain.value import GuildId, PostId, ReplyId, UserId, VoteTarget, VoteTargetType

from .base import Service
from .post_service import PostService
from .reply_service import ReplyService


class VoteService(Service):
    """Domain service for the upvote ledger."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        reply_service: ReplyService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
            reply_service: Reply domain service
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.reply_service = reply_service

    async def toggle_vote(
        self, guild_id: GuildId, user_id: UserId, target: VoteTarget
    ) -> tuple[bool, int]:
        """Toggle a user's upvote on a post or reply.

        Removes the vote if it exists, creates it otherwise, and moves the
        target's count by exactly one in the same direction. Votes are still
        accepted on closed posts.

        Args:
            guild_id: Guild the target must belong to
            user_id: Voting user
            target: Post or reply being voted on

        Returns:
            Tuple of (voted after the call, new upvote count)

        Raises:
            NotFoundError: If the target does not exist in this guild
            ConflictError: If the target disappeared while the vote was applied
        """
        with logfire.span(
            "vote_service.toggle_vote",
            kind=target.kind.value,
            target_id=str(target.id),
            user_id=user_id,
        ):
            await self._ensure_target(guild_id, target)

            voted = await self.vote_repository.toggle(user_id, target)
            delta = 1 if voted else -1

            if target.kind == VoteTargetType.POST:
                new_count = await self.post_service.adjust_upvotes(PostId(target.id), delta)
            else:
                new_count = await self.reply_service.adjust_upvotes(ReplyId(target.id), delta)

            if new_count is None:
                logfire.error("Vote target vanished during toggle", target_id=str(target.id))
                raise ConflictError(target.kind.value, str(target.id))

            logfire.info(
                "Vote toggled",
                target_id=str(target.id),
                voted=voted,
                new_count=new_count,
            )
            return voted, new_count

    async def _ensure_target(self, guild_id: GuildId, target: VoteTarget) -> None:
        if target.kind == VoteTargetType.POST:
            await self.post_service.get_post(guild_id, PostId(target.id))
            return

        reply = await self.reply_service.find_reply(ReplyId(target.id))
        if reply is None:
            logfire.warn("Vote on non-existent reply", reply_id=str(target.id))
            raise NotFoundError("Reply", str(target.id))
        # The reply's post carries the guild
        await self.post_service.get_post(guild_id, reply.post_id)

    async def voted_ids(
        self, user_id: UserId, kind: VoteTargetType, target_ids: Sequence[UUID]
    ) -> set[UUID]:
        """Find which targets a user has upvoted.

        Args:
            user_id: User ID
            kind: Kind of the targets
            target_ids: IDs to check

        Returns:
            Subset of ``target_ids`` the user has voted on
        """
        if not target_ids:
            return set()

        # Batch query to avoid N+1
        return await self.vote_repository.find_voted_ids(user_id, kind, target_ids)

    async def delete_votes(self, kind: VoteTargetType, target_ids: Sequence[UUID]) -> int:
        """Delete all votes on the given targets.

        Args:
            kind: Kind of the targets
            target_ids: Target IDs

        Returns:
            Number of votes removed
        """
        if not target_ids:
            return 0
        deleted = await self.vote_repository.delete_by_targets(kind, target_ids)
        logfire.info("Votes deleted", kind=kind.value, count=deleted)
        return deleted
