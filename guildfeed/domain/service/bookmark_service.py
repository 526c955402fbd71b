"""Bookmark domain service."""

from typing import Sequence

import logfire

from guildfeed.domain.repository import BookmarkRepository
from guildfeed.domain.value import GuildId, PostId, UserId

from .base import Service


class BookmarkService(Service):
    """Domain service for per-user saved posts.

    Bookmarks never influence ranking or counts.
    """

    def __init__(self, bookmark_repository: BookmarkRepository) -> None:
        """Initialize bookmark service.

        Args:
            bookmark_repository: Bookmark repository
        """
        self.bookmark_repository = bookmark_repository

    async def toggle_bookmark(self, user_id: UserId, guild_id: GuildId, post_id: PostId) -> bool:
        """Add a post to the user's saved set, or remove it if already there.

        Args:
            user_id: User ID
            guild_id: Guild of the post
            post_id: Post ID

        Returns:
            True if the post is bookmarked after the call
        """
        with logfire.span(
            "bookmark_service.toggle_bookmark", user_id=user_id, post_id=str(post_id)
        ):
            bookmarked = await self.bookmark_repository.toggle(user_id, guild_id, post_id)
            logfire.info("Bookmark toggled", post_id=str(post_id), bookmarked=bookmarked)
            return bookmarked

    async def bookmarked_ids(self, user_id: UserId, post_ids: Sequence[PostId]) -> set[PostId]:
        """Which of the given posts the user has saved."""
        if not post_ids:
            return set()
        return await self.bookmark_repository.find_bookmarked_ids(user_id, post_ids)

    async def bookmarked_post_ids(self, user_id: UserId, guild_id: GuildId) -> list[PostId]:
        """All posts a user saved in a guild, in the order they were saved."""
        with logfire.span("bookmark_service.bookmarked_post_ids", user_id=user_id, guild_id=guild_id):
            return await self.bookmark_repository.list_post_ids(user_id, guild_id)

    async def delete_bookmarks_for_post(self, post_id: PostId) -> int:
        """Remove a post from every user's saved set.

        Args:
            post_id: Post ID

        Returns:
            Number of bookmarks removed
        """
        deleted = await self.bookmark_repository.delete_by_post(post_id)
        logfire.info("Bookmarks deleted", post_id=str(post_id), count=deleted)
        return deleted
