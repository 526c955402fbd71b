"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from guildfeed.domain.model.post import Post
from guildfeed.domain.value import GuildId, PostId, PostSortOrder, PostTag


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_ranked(
        self,
        guild_id: GuildId,
        sort: PostSortOrder,
        now: datetime,
        tag: Optional[PostTag] = None,
        created_after: Optional[datetime] = None,
        post_ids: Optional[Sequence[PostId]] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find a page of a guild's posts in ranked order.

        Pinned posts come first (most recently pinned first) regardless of
        the sort mode and are not subject to ``created_after``. The remaining
        posts are ordered by the sort mode, newest first on ties.

        Args:
            guild_id: Guild whose feed is listed
            sort: Ranking mode (hot, new or top)
            now: Reference time for hot-score decay
            tag: Exact-match tag filter (None for all tags)
            created_after: Exclude unpinned posts created before this time
            post_ids: Restrict the listing to these posts (None for no restriction)
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts in ranked order
        """
        pass

    @abstractmethod
    async def count(
        self,
        guild_id: GuildId,
        tag: Optional[PostTag] = None,
        created_after: Optional[datetime] = None,
        post_ids: Optional[Sequence[PostId]] = None,
    ) -> int:
        """Count posts matching the same filters as ``find_ranked``.

        Args:
            guild_id: Guild whose feed is counted
            tag: Exact-match tag filter (None for all tags)
            created_after: Exclude unpinned posts created before this time
            post_ids: Restrict the count to these posts (None for no restriction)

        Returns:
            Total number of posts matching the criteria
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Insert a new post.

        Args:
            post: The post to insert

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def compare_and_set(self, post: Post, expected_version: int) -> Optional[Post]:
        """Replace a post's mutable state if nobody changed it in the meantime.

        The stored version must equal ``expected_version``; the saved post
        gets ``expected_version + 1``.

        Args:
            post: The post with its new state
            expected_version: Version the caller read before changing it

        Returns:
            The saved post, or None if the version no longer matches
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Hard delete a post.

        Args:
            post_id: The post ID to delete

        Returns:
            True if a post was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def adjust_upvotes(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to the post's upvote count (never below 0).

        Args:
            post_id: The post ID
            delta: +1 or -1

        Returns:
            The new upvote count, or None if the post does not exist
        """
        pass

    @abstractmethod
    async def increment_reply_count(self, post_id: PostId) -> None:
        """Atomically increment the denormalized reply count by 1.

        Args:
            post_id: The post ID
        """
        pass
