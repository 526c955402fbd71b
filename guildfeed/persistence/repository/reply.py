"""PostgreSQL implementation of Reply repository."""

from typing import List, Optional

import logfire
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from guildfeed.domain.model import Reply
from guildfeed.domain.repository import ReplyRepository
from guildfeed.domain.value import PostId, ReplyId
from guildfeed.persistence.mappers import reply_to_dict, row_to_reply
from guildfeed.persistence.tables import replies_table


def _level(post_id: PostId, parent_reply_id: Optional[ReplyId]) -> list:
    """Conditions selecting the direct children of a parent."""
    conditions = [replies_table.c.post_id == post_id]
    if parent_reply_id is None:
        conditions.append(replies_table.c.parent_reply_id.is_(None))
    else:
        conditions.append(replies_table.c.parent_reply_id == parent_reply_id)
    return conditions


class PostgresReplyRepository(ReplyRepository):
    """PostgreSQL implementation of ReplyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        stmt = select(replies_table).where(replies_table.c.id == reply_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reply(row._asdict()) if row else None

    async def find_children(
        self,
        post_id: PostId,
        parent_reply_id: Optional[ReplyId] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Reply]:
        """Find one level of replies, oldest first."""
        with logfire.span(
            "reply_repository.find_children",
            post_id=str(post_id),
            parent_reply_id=str(parent_reply_id) if parent_reply_id else None,
        ):
            stmt = (
                select(replies_table)
                .where(*_level(post_id, parent_reply_id))
                .order_by(replies_table.c.created_at, replies_table.c.id)
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_reply(row._asdict()) for row in result.fetchall()]

    async def count_children(
        self, post_id: PostId, parent_reply_id: Optional[ReplyId] = None
    ) -> int:
        """Count the direct children of a parent."""
        stmt = (
            select(func.count())
            .select_from(replies_table)
            .where(*_level(post_id, parent_reply_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_ids_by_post(self, post_id: PostId) -> List[ReplyId]:
        """List the IDs of every reply of a post."""
        stmt = select(replies_table.c.id).where(replies_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        return [ReplyId(row.id) for row in result.fetchall()]

    async def save(self, reply: Reply) -> Reply:
        """Insert a new reply."""
        stmt = replies_table.insert().values(**reply_to_dict(reply))
        await self.session.execute(stmt)
        await self.session.flush()
        return reply

    async def increment_child_count(self, reply_id: ReplyId) -> None:
        """Atomically increment child_count by 1."""
        stmt = (
            update(replies_table)
            .where(replies_table.c.id == reply_id)
            .values(child_count=replies_table.c.child_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def adjust_upvotes(self, reply_id: ReplyId, delta: int) -> Optional[int]:
        """Atomically add delta to upvote_count (minimum 0)."""
        stmt = (
            update(replies_table)
            .where(replies_table.c.id == reply_id)
            .values(upvote_count=func.greatest(replies_table.c.upvote_count + delta, 0))
            .returning(replies_table.c.upvote_count)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one_or_none()

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every reply of a post."""
        stmt = replies_table.delete().where(replies_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
