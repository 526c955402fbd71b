"""PostgreSQL implementation of Bookmark repository."""

from typing import List, Sequence, Set

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from guildfeed.domain.repository import BookmarkRepository
from guildfeed.domain.value import GuildId, PostId, UserId
from guildfeed.persistence.tables import bookmarks_table


class PostgresBookmarkRepository(BookmarkRepository):
    """PostgreSQL implementation of BookmarkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _delete(self, user_id: UserId, post_id: PostId) -> bool:
        stmt = (
            delete(bookmarks_table)
            .where(
                and_(
                    bookmarks_table.c.user_id == user_id,
                    bookmarks_table.c.post_id == post_id,
                )
            )
            .returning(bookmarks_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        return result.fetchone() is not None

    async def toggle(self, user_id: UserId, guild_id: GuildId, post_id: PostId) -> bool:
        """Delete the bookmark if present, otherwise insert it."""
        if await self._delete(user_id, post_id):
            await self.session.flush()
            return False

        stmt = (
            insert(bookmarks_table)
            .values(user_id=user_id, post_id=post_id, guild_id=guild_id)
            .on_conflict_do_nothing(index_elements=["user_id", "post_id"])
            .returning(bookmarks_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        inserted = result.fetchone() is not None
        if not inserted:
            # A concurrent toggle inserted it first
            await self._delete(user_id, post_id)
        await self.session.flush()
        return inserted

    async def find_bookmarked_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> Set[PostId]:
        """Find which of the given posts a user has bookmarked."""
        if not post_ids:
            return set()

        stmt = select(bookmarks_table.c.post_id).where(
            and_(
                bookmarks_table.c.user_id == user_id,
                bookmarks_table.c.post_id.in_(list(post_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return {PostId(row.post_id) for row in result.fetchall()}

    async def list_post_ids(self, user_id: UserId, guild_id: GuildId) -> List[PostId]:
        """List a user's bookmarked posts in a guild, oldest bookmark first."""
        stmt = (
            select(bookmarks_table.c.post_id)
            .where(
                and_(
                    bookmarks_table.c.user_id == user_id,
                    bookmarks_table.c.guild_id == guild_id,
                )
            )
            .order_by(bookmarks_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [PostId(row.post_id) for row in result.fetchall()]

    async def delete_by_post(self, post_id: PostId) -> int:
        """Remove a post from every user's set."""
        stmt = delete(bookmarks_table).where(bookmarks_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
