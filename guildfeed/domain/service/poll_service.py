"""Poll domain service."""

from datetime import datetime, timedelta
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from guildfeed.config import FeedSettings
from guildfeed.domain.error import (
    AlreadyVotedError,
    NotFoundError,
    PollClosedError,
    ValidationError,
)
from guildfeed.domain.model.poll import (
    MAX_POLL_OPTIONS,
    MIN_POLL_OPTIONS,
    POLL_OPTION_MAX_LENGTH,
    Poll,
    PollOption,
    PollOptionView,
    PollView,
)
from guildfeed.domain.repository import PollRepository
from guildfeed.domain.value import PollChoiceMode, PollId, PollOptionId, PostId, UserId

from .base import Service


def percentage(count: int, total: int) -> int:
    """Share of ``total`` as a whole percent, rounding halves up."""
    if total <= 0:
        return 0
    return (count * 200 + total) // (total * 2)


class PollService(Service):
    """Domain service for polls attached to posts."""

    def __init__(self, poll_repository: PollRepository, feed_settings: FeedSettings) -> None:
        """Initialize poll service.

        Args:
            poll_repository: Poll repository
            feed_settings: Feed limits (maximum poll expiry)
        """
        self.poll_repository = poll_repository
        self.feed_settings = feed_settings

    def validate_draft(
        self, options: Sequence[str], expires_in_hours: Optional[int] = None
    ) -> list[str]:
        """Check poll options and expiry before anything is written.

        Options are trimmed; duplicates are allowed.

        Args:
            options: Option texts in display order
            expires_in_hours: Hours until expiry (None or 0 for no expiry)

        Returns:
            The trimmed option texts

        Raises:
            ValidationError: If the option count, an option's length or the
                expiry is out of range
        """
        cleaned = [text.strip() for text in options]
        if any(not text for text in cleaned):
            raise ValidationError("Poll options must not be empty")
        if not MIN_POLL_OPTIONS <= len(cleaned) <= MAX_POLL_OPTIONS:
            raise ValidationError(
                f"A poll needs {MIN_POLL_OPTIONS}-{MAX_POLL_OPTIONS} options, got {len(cleaned)}"
            )
        too_long = [text for text in cleaned if len(text) > POLL_OPTION_MAX_LENGTH]
        if too_long:
            raise ValidationError(
                f"Poll options must be at most {POLL_OPTION_MAX_LENGTH} characters"
            )
        if expires_in_hours is not None and not (
            0 <= expires_in_hours <= self.feed_settings.max_poll_expiry_hours
        ):
            raise ValidationError(
                f"Poll expiry must be between 0 and {self.feed_settings.max_poll_expiry_hours} hours"
            )
        return cleaned

    async def create_poll(
        self,
        post_id: PostId,
        choice_mode: PollChoiceMode,
        options: Sequence[str],
        now: datetime,
        expires_in_hours: Optional[int] = None,
    ) -> Poll:
        """Create the poll of a post.

        Args:
            post_id: Post the poll is attached to
            choice_mode: Single or multiple choice
            options: Option texts in display order (2-6)
            now: Creation time
            expires_in_hours: Hours until expiry (None or 0 for no expiry)

        Returns:
            Created poll with zero votes

        Raises:
            ValidationError: If options or expiry are invalid
        """
        with logfire.span(
            "poll_service.create_poll",
            post_id=str(post_id),
            choice_mode=choice_mode.value,
            option_count=len(options),
        ):
            cleaned = self.validate_draft(options, expires_in_hours)
            expires_at = now + timedelta(hours=expires_in_hours) if expires_in_hours else None

            poll = self.build(
                Poll,
                id=PollId(uuid4()),
                post_id=post_id,
                choice_mode=choice_mode,
                options=[
                    PollOption(id=PollOptionId(uuid4()), text=text, position=position)
                    for position, text in enumerate(cleaned)
                ],
                expires_at=expires_at,
                created_at=now,
            )
            saved = await self.poll_repository.save(poll)
            logfire.info("Poll created", poll_id=str(saved.id), post_id=str(post_id))
            return saved

    async def get_poll(self, post_id: PostId) -> Poll:
        """Get the poll of a post.

        Raises:
            NotFoundError: If the post has no poll
        """
        poll = await self.poll_repository.find_by_post(post_id)
        if poll is None:
            logfire.warn("Poll not found", post_id=str(post_id))
            raise NotFoundError("Poll", str(post_id))
        return poll

    async def cast_vote(
        self,
        post_id: PostId,
        user_id: UserId,
        option_ids: Sequence[PollOptionId],
        now: datetime,
    ) -> PollView:
        """Record a user's poll vote.

        A vote is final: the poll becomes read-only for the user as soon as
        it is recorded, for single and multiple choice alike.

        Args:
            post_id: Post whose poll is voted on
            user_id: Voting user
            option_ids: Selected options (exactly one for single choice)
            now: Time of the vote

        Returns:
            The poll as the voter now sees it (results visible)

        Raises:
            NotFoundError: If the post has no poll
            PollClosedError: If the poll has expired
            ValidationError: If the selection is empty, repeats an option,
                names a foreign option or breaks the choice mode
            AlreadyVotedError: If the user already voted on this poll
        """
        with logfire.span(
            "poll_service.cast_vote",
            post_id=str(post_id),
            user_id=user_id,
            selections=len(option_ids),
        ):
            poll = await self.get_poll(post_id)

            if poll.is_expired(now):
                logfire.warn("Vote on expired poll", poll_id=str(poll.id))
                raise PollClosedError(str(poll.id))

            self._validate_selection(poll, option_ids)

            recorded = await self.poll_repository.record_votes(poll.id, user_id, option_ids)
            if not recorded:
                logfire.warn("Repeated poll vote rejected", poll_id=str(poll.id), user_id=user_id)
                raise AlreadyVotedError(str(poll.id), user_id)

            updated = await self.get_poll(post_id)
            logfire.info("Poll vote recorded", poll_id=str(poll.id), total_votes=updated.total_votes)
            return self.project(updated, set(option_ids), now)

    @staticmethod
    def _validate_selection(poll: Poll, option_ids: Sequence[PollOptionId]) -> None:
        if not option_ids:
            raise ValidationError("Select at least one option")
        if len(set(option_ids)) != len(option_ids):
            raise ValidationError("Options may only be selected once")
        if poll.choice_mode == PollChoiceMode.SINGLE and len(option_ids) != 1:
            raise ValidationError("Single-choice polls take exactly one option")
        unknown = set(option_ids) - poll.option_ids()
        if unknown:
            raise ValidationError(f"Options do not belong to this poll: {sorted(map(str, unknown))}")

    async def polls_for_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, Poll]:
        """Load the polls of several posts in one query."""
        if not post_ids:
            return {}
        return await self.poll_repository.find_by_posts(post_ids)

    async def selections(
        self, user_id: UserId | None, poll_ids: Sequence[PollId]
    ) -> dict[PollId, set[PollOptionId]]:
        """Load a user's selections on several polls (empty for anonymous users)."""
        if user_id is None or not poll_ids:
            return {}
        return await self.poll_repository.find_selections(user_id, poll_ids)

    @staticmethod
    def project(
        poll: Poll, selected: Optional[set[PollOptionId]], now: datetime
    ) -> PollView:
        """Build the viewer-specific projection of a poll.

        Per-option counts and percentages are withheld until the viewer has
        voted or the poll has expired. The voter total is always shown.

        Args:
            poll: The stored poll
            selected: Options the viewer picked (None or empty if they did not vote)
            now: Reference time for expiry

        Returns:
            The poll view
        """
        selected = selected or set()
        has_voted = bool(selected)
        expired = poll.is_expired(now)
        visible = has_voted or expired

        return PollView(
            id=poll.id,
            post_id=poll.post_id,
            choice_mode=poll.choice_mode,
            options=[
                PollOptionView(
                    id=option.id,
                    text=option.text,
                    vote_count=option.vote_count if visible else None,
                    percentage=percentage(option.vote_count, poll.total_votes) if visible else None,
                    has_voted=option.id in selected,
                )
                for option in poll.options
            ],
            total_votes=poll.total_votes,
            expires_at=poll.expires_at,
            is_expired=expired,
            has_voted=has_voted,
            results_visible=visible,
        )

    async def delete_poll_for_post(self, post_id: PostId) -> bool:
        """Delete a post's poll with its options and votes.

        Args:
            post_id: Post ID

        Returns:
            True if a poll existed
        """
        deleted = await self.poll_repository.delete_by_post(post_id)
        if deleted:
            logfire.info("Poll deleted", post_id=str(post_id))
        return deleted
