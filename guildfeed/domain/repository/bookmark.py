"""Bookmark repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence, Set

from guildfeed.domain.value import GuildId, PostId, UserId


class BookmarkRepository(ABC):
    """Repository for per-user saved-post sets."""

    @abstractmethod
    async def toggle(self, user_id: UserId, guild_id: GuildId, post_id: PostId) -> bool:
        """Atomically add the post to the user's set, or remove it if present.

        Args:
            user_id: The user ID
            guild_id: Guild the post belongs to
            post_id: The post ID

        Returns:
            True if the post is bookmarked after the call
        """
        pass

    @abstractmethod
    async def find_bookmarked_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> Set[PostId]:
        """Find which of the given posts a user has bookmarked (batch query).

        Args:
            user_id: The user ID
            post_ids: Posts to check

        Returns:
            Subset of ``post_ids`` in the user's set
        """
        pass

    @abstractmethod
    async def list_post_ids(self, user_id: UserId, guild_id: GuildId) -> List[PostId]:
        """List a user's bookmarked posts in a guild, in insertion order.

        Args:
            user_id: The user ID
            guild_id: The guild ID

        Returns:
            Bookmarked post IDs
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove a post from every user's set.

        Args:
            post_id: The post ID

        Returns:
            Number of bookmarks deleted
        """
        pass
