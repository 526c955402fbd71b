"""Post domain service."""

from datetime import datetime
from typing import Any, Optional, Sequence
from uuid import uuid4

import logfire

from guildfeed.config import FeedSettings
from guildfeed.domain.error import ConflictError, ForbiddenError, NotFoundError, ValidationError
from guildfeed.domain.model.author import Author
from guildfeed.domain.model.post import Post
from guildfeed.domain.repository import PostRepository
from guildfeed.domain.value import (
    FeedPrivileges,
    GuildId,
    PostId,
    PostSortOrder,
    PostTag,
    TimeWindow,
    UserId,
)

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository, feed_settings: FeedSettings) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            feed_settings: Feed limits
        """
        self.post_repository = post_repository
        self.feed_settings = feed_settings

    async def create_post(
        self,
        guild_id: GuildId,
        author: Author,
        title: str,
        body: str,
        tag: PostTag,
        now: datetime,
        has_poll: bool = False,
    ) -> Post:
        """Create a new post in a guild's feed.

        Title and body are trimmed before their lengths are checked.

        Args:
            guild_id: Guild the post belongs to
            author: Author snapshot
            title: Post title (5-200 chars)
            body: Markdown body (10-5000 chars)
            tag: Post category
            now: Creation time
            has_poll: Whether a poll will be attached

        Returns:
            Created post

        Raises:
            ValidationError: If title or body length is out of range
        """
        with logfire.span(
            "post_service.create_post",
            guild_id=guild_id,
            author_id=author.id,
            tag=tag.value,
        ):
            post = self.build(
                Post,
                id=PostId(uuid4()),
                guild_id=guild_id,
                author=author,
                title=title.strip(),
                body=body.strip(),
                tag=tag,
                has_poll=has_poll,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id), guild_id=guild_id)
            return saved

    async def get_post(self, guild_id: GuildId, post_id: PostId) -> Post:
        """Get a post of a guild.

        Args:
            guild_id: Guild the post must belong to
            post_id: Post ID

        Returns:
            The post

        Raises:
            NotFoundError: If the post does not exist in this guild
        """
        with logfire.span("post_service.get_post", guild_id=guild_id, post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None or post.guild_id != guild_id:
                logfire.warn("Post not found", guild_id=guild_id, post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def get_posts(
        self, guild_id: GuildId, post_ids: Sequence[PostId], now: datetime
    ) -> list[Post]:
        """Load several posts of a guild, in the order of ``post_ids``.

        IDs that do not resolve to a post of the guild are skipped.
        """
        if not post_ids:
            return []
        with logfire.span("post_service.get_posts", guild_id=guild_id, count=len(post_ids)):
            posts = await self.post_repository.find_ranked(
                guild_id=guild_id,
                sort=PostSortOrder.NEW,
                now=now,
                post_ids=post_ids,
                limit=len(post_ids),
            )
            by_id = {post.id: post for post in posts}
            return [by_id[post_id] for post_id in post_ids if post_id in by_id]

    async def list_posts(
        self,
        guild_id: GuildId,
        sort: PostSortOrder,
        now: datetime,
        tag: Optional[PostTag] = None,
        time_window: Optional[TimeWindow] = None,
        post_ids: Optional[Sequence[PostId]] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> tuple[list[Post], int]:
        """List one page of a guild's feed.

        The time window only applies to the ``top`` mode; ``week`` is used
        when ``top`` is requested without one.

        Args:
            guild_id: Guild whose feed is listed
            sort: Ranking mode
            now: Reference time for windows and hot-score decay
            tag: Exact-match tag filter
            time_window: Creation window for ``top``
            post_ids: Restrict to these posts (bookmarked-only listings)
            page: 1-based page number
            limit: Page size (clamped to the configured maximum)

        Returns:
            Tuple of (posts on the page, total matching posts)
        """
        limit = min(limit or self.feed_settings.default_page_size, self.feed_settings.max_page_size)
        page = max(page, 1)
        created_after = None
        if sort == PostSortOrder.TOP:
            created_after = (time_window or TimeWindow.WEEK).start(now)

        with logfire.span(
            "post_service.list_posts",
            guild_id=guild_id,
            sort=sort.value,
            tag=tag.value if tag else None,
            page=page,
            limit=limit,
        ):
            if post_ids is not None and not post_ids:
                return [], 0

            posts = await self.post_repository.find_ranked(
                guild_id=guild_id,
                sort=sort,
                now=now,
                tag=tag,
                created_after=created_after,
                post_ids=post_ids,
                limit=limit,
                offset=(page - 1) * limit,
            )
            total = await self.post_repository.count(
                guild_id=guild_id,
                tag=tag,
                created_after=created_after,
                post_ids=post_ids,
            )
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def update_post(
        self,
        post: Post,
        user_id: UserId,
        privileges: FeedPrivileges,
        now: datetime,
        title: Optional[str] = None,
        body: Optional[str] = None,
        tag: Optional[PostTag] = None,
        expected_version: Optional[int] = None,
    ) -> Post:
        """Edit a post's title, body or tag.

        Fields left as None keep their current value. Title and body are
        trimmed and length-checked the same way as on creation.

        Args:
            post: Post to edit
            user_id: Acting user
            privileges: Caller's capability set
            now: Time of the edit
            title: New title
            body: New body
            tag: New category
            expected_version: Version the caller last saw (defaults to the
                loaded post's version)

        Returns:
            The updated post

        Raises:
            ForbiddenError: If the caller is neither the author nor allowed to
                edit others' posts
            ValidationError: If a field is invalid, or the tag would move away
                from ``question`` while an answer is accepted
            ConflictError: If the post changed since ``expected_version``
        """
        with logfire.span("post_service.update_post", post_id=str(post.id), user_id=user_id):
            if not (post.is_authored_by(user_id) or privileges.can_edit_others):
                logfire.warn("Post edit forbidden", post_id=str(post.id), user_id=user_id)
                raise ForbiddenError("edit this post", user_id)

            if expected_version is not None and expected_version != post.version:
                logfire.warn(
                    "Stale post edit",
                    post_id=str(post.id),
                    expected=expected_version,
                    current=post.version,
                )
                raise ConflictError("Post", str(post.id))

            changes: dict[str, Any] = {}
            if title is not None:
                changes["title"] = title.strip()
            if body is not None:
                changes["body"] = body.strip()
            if tag is not None and tag != post.tag:
                if post.accepted_reply_id is not None:
                    raise ValidationError(
                        "Remove the accepted answer before changing the tag of a question"
                    )
                changes["tag"] = tag

            if not changes:
                return post

            updated = await self.write_changes(post, changes, now)
            logfire.info("Post updated", post_id=str(post.id), fields=sorted(changes))
            return updated

    async def write_changes(self, post: Post, changes: dict[str, Any], now: datetime) -> Post:
        """Persist changes to a post with a compare-and-set on its version.

        Args:
            post: Post as loaded by the caller
            changes: Field values to change
            now: Modification time

        Returns:
            The stored post with its new version

        Raises:
            ValidationError: If the changed post is invalid
            ConflictError: If the stored version no longer matches
        """
        changes = {**changes, "updated_at": now, "version": post.version + 1}
        candidate = self.build(Post, **{**post.model_dump(), **changes})
        saved = await self.post_repository.compare_and_set(candidate, expected_version=post.version)
        if saved is None:
            logfire.warn("Concurrent post modification", post_id=str(post.id), version=post.version)
            raise ConflictError("Post", str(post.id))
        return saved

    async def increment_reply_count(self, post_id: PostId) -> None:
        """Increment a post's reply count by 1.

        Args:
            post_id: Post ID
        """
        await self.post_repository.increment_reply_count(post_id)

    async def adjust_upvotes(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically adjust a post's upvote count.

        Args:
            post_id: Post ID
            delta: +1 or -1

        Returns:
            The new count, or None if the post vanished
        """
        return await self.post_repository.adjust_upvotes(post_id, delta)
