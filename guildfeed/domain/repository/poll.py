"""Poll repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence, Set

from guildfeed.domain.model.poll import Poll
from guildfeed.domain.value import PollId, PollOptionId, PostId, UserId


class PollRepository(ABC):
    """Repository for polls, their options and per-user selections."""

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> Optional[Poll]:
        """Find the poll attached to a post.

        Args:
            post_id: The post ID

        Returns:
            The poll if the post has one, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, Poll]:
        """Find polls for several posts (batch query).

        Args:
            post_ids: Post IDs to look up

        Returns:
            Mapping of post ID to poll, for posts that have one
        """
        pass

    @abstractmethod
    async def save(self, poll: Poll) -> Poll:
        """Insert a new poll with its options.

        Args:
            poll: The poll to insert

        Returns:
            The saved poll
        """
        pass

    @abstractmethod
    async def record_votes(
        self,
        poll_id: PollId,
        user_id: UserId,
        option_ids: Sequence[PollOptionId],
    ) -> bool:
        """Atomically record a user's selections as one batch.

        Registers the user as a voter of the poll, stores every selection and
        increments each option's count and the poll's unique-voter total.
        Nothing is written if the user already voted on this poll.

        Args:
            poll_id: The poll ID
            user_id: The voting user
            option_ids: Selected options (already validated)

        Returns:
            True if the votes were recorded, False if the user had already voted
        """
        pass

    @abstractmethod
    async def find_selections(
        self, user_id: UserId, poll_ids: Sequence[PollId]
    ) -> Dict[PollId, Set[PollOptionId]]:
        """Find the options a user selected on several polls (batch query).

        Args:
            user_id: The user ID
            poll_ids: Polls to check

        Returns:
            Mapping of poll ID to selected option IDs, for polls the user voted on
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> bool:
        """Delete a post's poll with its options and votes.

        Args:
            post_id: The post ID

        Returns:
            True if a poll was deleted
        """
        pass
