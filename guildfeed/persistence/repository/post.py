"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import List, Optional, Sequence

import logfire
from sqlalchemy import and_, desc, func, literal, or_, select, update
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.ext.asyncio import AsyncSession

from guildfeed.config import Settings
from guildfeed.domain.model import Post
from guildfeed.domain.repository.post import PostRepository
from guildfeed.domain.value import GuildId, PostId, PostSortOrder, PostTag
from guildfeed.persistence.mappers import post_to_dict, row_to_post
from guildfeed.persistence.tables import posts_table

# Columns a compare-and-set may change; counters move through atomic updates only
MODERATED_COLUMNS = (
    "title",
    "body",
    "tag",
    "is_pinned",
    "pinned_at",
    "is_closed",
    "accepted_reply_id",
    "duplicate_of_post_id",
    "has_poll",
    "version",
    "updated_at",
)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            settings: Application settings (ranking constants)
        """
        self.session = session
        self.settings = settings

    def _filters(
        self,
        guild_id: GuildId,
        tag: Optional[PostTag],
        created_after: Optional[datetime],
        post_ids: Optional[Sequence[PostId]],
    ) -> list:
        conditions = [posts_table.c.guild_id == guild_id]
        if tag is not None:
            conditions.append(posts_table.c.tag == tag.value)
        if created_after is not None:
            # Pinned posts ignore the time window
            conditions.append(
                or_(posts_table.c.is_pinned.is_(True), posts_table.c.created_at >= created_after)
            )
        if post_ids is not None:
            conditions.append(posts_table.c.id.in_(list(post_ids)))
        return conditions

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

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
        """Find a page of a guild's posts in ranked order."""
        with logfire.span(
            "post_repository.find_ranked",
            guild_id=guild_id,
            sort=sort.value,
            tag=tag.value if tag else None,
            limit=limit,
            offset=offset,
        ):
            stmt = select(posts_table).where(
                and_(*self._filters(guild_id, tag, created_after, post_ids))
            )

            # Pinned first, most recently pinned first
            order_by = [
                desc(posts_table.c.is_pinned),
                posts_table.c.pinned_at.desc().nulls_last(),
            ]

            if sort == PostSortOrder.TOP:
                order_by.append(desc(posts_table.c.upvote_count))
            elif sort == PostSortOrder.HOT:
                # (1 + log10(1 + votes)) / (age_hours + offset)^gravity
                gravity = self.settings.ranking.gravity
                time_offset = self.settings.ranking.time_offset

                age_hours = func.greatest(
                    func.extract(
                        "epoch",
                        literal(now, TIMESTAMP(timezone=True)) - posts_table.c.created_at,
                    )
                    / 3600,
                    0,
                )
                score = (1 + func.log(posts_table.c.upvote_count + 1)) / func.pow(
                    age_hours + time_offset, gravity
                )
                order_by.append(desc(score))

            order_by.append(desc(posts_table.c.created_at))
            stmt = stmt.order_by(*order_by).limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(
        self,
        guild_id: GuildId,
        tag: Optional[PostTag] = None,
        created_after: Optional[datetime] = None,
        post_ids: Optional[Sequence[PostId]] = None,
    ) -> int:
        """Count posts matching the given filters."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(and_(*self._filters(guild_id, tag, created_after, post_ids)))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            stmt = posts_table.insert().values(**post_to_dict(post))
            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def compare_and_set(self, post: Post, expected_version: int) -> Optional[Post]:
        """Replace a post's moderated state if the version still matches."""
        with logfire.span(
            "post_repository.compare_and_set",
            post_id=str(post.id),
            expected_version=expected_version,
        ):
            data = post_to_dict(post)
            values = {column: data[column] for column in MODERATED_COLUMNS}
            values["version"] = expected_version + 1
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .where(posts_table.c.version == expected_version)
                .values(**values)
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()

            if row is None:
                logfire.warn("Post version mismatch", post_id=str(post.id))
                return None
            return row_to_post(row._asdict())

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete; dependent rows cascade)."""
        stmt = posts_table.delete().where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def adjust_upvotes(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically add delta to upvote_count (minimum 0)."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(upvote_count=func.greatest(posts_table.c.upvote_count + delta, 0))
            .returning(posts_table.c.upvote_count)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none()

    async def increment_reply_count(self, post_id: PostId) -> None:
        """Atomically increment reply_count by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(reply_count=posts_table.c.reply_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()
