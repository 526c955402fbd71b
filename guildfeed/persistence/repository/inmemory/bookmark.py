"""In-memory bookmark repository for testing."""

from datetime import datetime, timezone
from typing import Sequence

from guildfeed.domain.model.bookmark import Bookmark
from guildfeed.domain.repository.bookmark import BookmarkRepository
from guildfeed.domain.value import GuildId, PostId, UserId


class InMemoryBookmarkRepository(BookmarkRepository):
    """In-memory implementation of BookmarkRepository for testing.

    Dict insertion order doubles as bookmark order.
    """

    def __init__(self) -> None:
        self._bookmarks: dict[tuple[UserId, PostId], Bookmark] = {}

    async def toggle(self, user_id: UserId, guild_id: GuildId, post_id: PostId) -> bool:
        """Remove the bookmark if present, otherwise add it."""
        key = (user_id, post_id)
        if self._bookmarks.pop(key, None) is not None:
            return False
        self._bookmarks[key] = Bookmark(
            user_id=user_id,
            guild_id=guild_id,
            post_id=post_id,
            created_at=datetime.now(timezone.utc),
        )
        return True

    async def find_bookmarked_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        """Find which of the given posts a user has bookmarked."""
        return {pid for pid in post_ids if (user_id, pid) in self._bookmarks}

    async def list_post_ids(self, user_id: UserId, guild_id: GuildId) -> list[PostId]:
        """List a user's bookmarked posts in a guild, in insertion order."""
        return [
            b.post_id
            for b in self._bookmarks.values()
            if b.user_id == user_id and b.guild_id == guild_id
        ]

    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove a post from every user's set."""
        doomed = [key for key in self._bookmarks if key[1] == post_id]
        for key in doomed:
            del self._bookmarks[key]
        return len(doomed)
