"""Reply repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from guildfeed.domain.model.reply import Reply
from guildfeed.domain.value import PostId, ReplyId


class ReplyRepository(ABC):
    """Repository for Reply entity.

    Replies are stored flat, keyed by ID with a parent pointer, so each
    query returns exactly one level of the tree.
    """

    @abstractmethod
    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID.

        Args:
            reply_id: The reply's unique identifier

        Returns:
            The reply if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_children(
        self,
        post_id: PostId,
        parent_reply_id: Optional[ReplyId] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Reply]:
        """Find one level of replies in chronological order.

        Args:
            post_id: The post the replies belong to
            parent_reply_id: Parent reply (None for top-level replies)
            limit: Maximum number of replies to return
            offset: Number of replies to skip

        Returns:
            Direct children of the parent, oldest first
        """
        pass

    @abstractmethod
    async def count_children(
        self, post_id: PostId, parent_reply_id: Optional[ReplyId] = None
    ) -> int:
        """Count the direct children of a parent.

        Args:
            post_id: The post the replies belong to
            parent_reply_id: Parent reply (None for top-level replies)

        Returns:
            Number of direct children
        """
        pass

    @abstractmethod
    async def find_ids_by_post(self, post_id: PostId) -> List[ReplyId]:
        """List the IDs of every reply of a post, at any depth.

        Args:
            post_id: The post ID

        Returns:
            Reply IDs
        """
        pass

    @abstractmethod
    async def save(self, reply: Reply) -> Reply:
        """Insert a new reply.

        Args:
            reply: The reply to insert

        Returns:
            The saved reply
        """
        pass

    @abstractmethod
    async def increment_child_count(self, reply_id: ReplyId) -> None:
        """Atomically increment a reply's direct child count by 1.

        Args:
            reply_id: The parent reply ID
        """
        pass

    @abstractmethod
    async def adjust_upvotes(self, reply_id: ReplyId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to the reply's upvote count (never below 0).

        Args:
            reply_id: The reply ID
            delta: +1 or -1

        Returns:
            The new upvote count, or None if the reply does not exist
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every reply of a post.

        Args:
            post_id: The post ID

        Returns:
            Number of replies deleted
        """
        pass
