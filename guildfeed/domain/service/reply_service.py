"""Reply domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from guildfeed.config import FeedSettings
from guildfeed.domain.error import DepthExceededError, NotFoundError, PostClosedError
from guildfeed.domain.model.author import Author
from guildfeed.domain.model.post import Post
from guildfeed.domain.model.reply import Reply
from guildfeed.domain.repository import ReplyRepository
from guildfeed.domain.value import PostId, ReplyId

from .base import Service
from .post_service import PostService


class ReplyService(Service):
    """Domain service for the reply tree of a post."""

    def __init__(
        self,
        reply_repository: ReplyRepository,
        post_service: PostService,
        feed_settings: FeedSettings,
    ) -> None:
        """Initialize reply service.

        Args:
            reply_repository: Reply repository
            post_service: Post domain service
            feed_settings: Feed limits (maximum depth, page sizes)
        """
        self.reply_repository = reply_repository
        self.post_service = post_service
        self.feed_settings = feed_settings

    async def create_reply(
        self,
        post: Post,
        author: Author,
        body: str,
        now: datetime,
        parent_reply_id: Optional[ReplyId] = None,
    ) -> Reply:
        """Create a reply to a post or to another reply.

        Args:
            post: Post being replied to
            author: Author snapshot
            body: Reply text (1-2000 chars after trimming)
            now: Creation time
            parent_reply_id: Parent reply for nested replies (None for top-level)

        Returns:
            Created reply, with ``child_count`` 0

        Raises:
            PostClosedError: If the post is closed
            NotFoundError: If the parent reply is not part of this post
            DepthExceededError: If the reply would nest deeper than allowed
            ValidationError: If the body length is out of range
        """
        with logfire.span(
            "reply_service.create_reply",
            post_id=str(post.id),
            author_id=author.id,
            parent_reply_id=str(parent_reply_id) if parent_reply_id else None,
        ):
            if post.is_closed:
                logfire.warn("Reply to closed post rejected", post_id=str(post.id))
                raise PostClosedError(str(post.id))

            depth = 0
            if parent_reply_id is not None:
                parent = await self.get_reply(post.id, parent_reply_id)
                depth = parent.depth + 1
                if depth > self.feed_settings.max_reply_depth:
                    logfire.warn(
                        "Reply depth exceeded",
                        parent_reply_id=str(parent_reply_id),
                        depth=depth,
                    )
                    raise DepthExceededError(
                        str(parent_reply_id), self.feed_settings.max_reply_depth
                    )

            reply = self.build(
                Reply,
                id=ReplyId(uuid4()),
                post_id=post.id,
                parent_reply_id=parent_reply_id,
                author=author,
                body=body.strip(),
                depth=depth,
                created_at=now,
            )

            saved = await self.reply_repository.save(reply)
            if parent_reply_id is not None:
                await self.reply_repository.increment_child_count(parent_reply_id)
            await self.post_service.increment_reply_count(post.id)

            logfire.info(
                "Reply created",
                reply_id=str(saved.id),
                post_id=str(post.id),
                depth=depth,
            )
            return saved

    async def find_reply(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID, whatever post it belongs to."""
        return await self.reply_repository.find_by_id(reply_id)

    async def get_reply(self, post_id: PostId, reply_id: ReplyId) -> Reply:
        """Get a reply that belongs to the given post.

        Args:
            post_id: Post the reply must belong to
            reply_id: Reply ID

        Returns:
            The reply

        Raises:
            NotFoundError: If the reply does not exist on this post
        """
        reply = await self.reply_repository.find_by_id(reply_id)
        if reply is None or reply.post_id != post_id:
            logfire.warn("Reply not found", post_id=str(post_id), reply_id=str(reply_id))
            raise NotFoundError("Reply", str(reply_id))
        return reply

    async def get_replies(
        self,
        post_id: PostId,
        parent_reply_id: Optional[ReplyId] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> tuple[list[Reply], int]:
        """Load one level of the reply tree, oldest first.

        Children are never included; each reply carries its ``child_count``
        so the caller can expand it with another call.

        Args:
            post_id: Post ID
            parent_reply_id: Reply whose direct children are loaded (None for top-level)
            limit: Page size (clamped to the configured maximum)
            offset: Number of replies to skip

        Returns:
            Tuple of (replies on this level, total replies on this level)

        Raises:
            NotFoundError: If the parent reply is not part of this post
        """
        limit = min(
            limit or self.feed_settings.default_reply_page_size,
            self.feed_settings.max_reply_page_size,
        )
        with logfire.span(
            "reply_service.get_replies",
            post_id=str(post_id),
            parent_reply_id=str(parent_reply_id) if parent_reply_id else None,
            limit=limit,
        ):
            if parent_reply_id is not None:
                await self.get_reply(post_id, parent_reply_id)

            replies = await self.reply_repository.find_children(
                post_id, parent_reply_id, limit=limit, offset=max(offset, 0)
            )
            total = await self.reply_repository.count_children(post_id, parent_reply_id)
            return replies, total

    async def adjust_upvotes(self, reply_id: ReplyId, delta: int) -> Optional[int]:
        """Atomically adjust a reply's upvote count.

        Args:
            reply_id: Reply ID
            delta: +1 or -1

        Returns:
            The new count, or None if the reply vanished
        """
        return await self.reply_repository.adjust_upvotes(reply_id, delta)

    async def reply_ids_for_post(self, post_id: PostId) -> list[ReplyId]:
        """IDs of every reply of a post, at any depth."""
        return await self.reply_repository.find_ids_by_post(post_id)

    async def delete_replies_for_post(self, post_id: PostId) -> int:
        """Delete every reply of a post.

        Args:
            post_id: Post ID

        Returns:
            Number of replies deleted
        """
        deleted = await self.reply_repository.delete_by_post(post_id)
        logfire.info("Replies deleted", post_id=str(post_id), count=deleted)
        return deleted
