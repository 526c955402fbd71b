"""PostgreSQL implementation of Vote repository."""

from typing import Sequence, Set
from uuid import UUID

import logfire
from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from guildfeed.domain.error import ConflictError
from guildfeed.domain.repository import VoteRepository
from guildfeed.domain.value import UserId, VoteTarget, VoteTargetType
from guildfeed.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _key(self, user_id: UserId, target: VoteTarget):
        return and_(
            votes_table.c.user_id == user_id,
            votes_table.c.target_type == target.kind.value,
            votes_table.c.target_id == target.id,
        )

    async def _delete(self, user_id: UserId, target: VoteTarget) -> bool:
        stmt = (
            delete(votes_table)
            .where(self._key(user_id, target))
            .returning(votes_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        return result.fetchone() is not None

    async def toggle(self, user_id: UserId, target: VoteTarget) -> bool:
        """Delete the vote if present, otherwise insert it.

        A concurrent insert for the same key makes ``ON CONFLICT DO NOTHING``
        skip ours; the row then exists, so this call removes it instead.
        """
        with logfire.span(
            "vote_repository.toggle",
            user_id=user_id,
            kind=target.kind.value,
            target_id=str(target.id),
        ):
            if await self._delete(user_id, target):
                await self.session.flush()
                return False

            stmt = (
                insert(votes_table)
                .values(user_id=user_id, target_type=target.kind.value, target_id=target.id)
                .on_conflict_do_nothing(
                    index_elements=["user_id", "target_type", "target_id"]
                )
                .returning(votes_table.c.user_id)
            )
            result = await self.session.execute(stmt)
            if result.fetchone() is not None:
                await self.session.flush()
                return True

            if await self._delete(user_id, target):
                await self.session.flush()
                return False

            logfire.warn("Vote toggle lost a race twice", target_id=str(target.id))
            raise ConflictError("Vote", str(target.id))

    async def find_voted_ids(
        self,
        user_id: UserId,
        kind: VoteTargetType,
        target_ids: Sequence[UUID],
    ) -> Set[UUID]:
        """Find a user's votes on multiple items (batch query)."""
        if not target_ids:
            return set()

        stmt = select(votes_table.c.target_id).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.target_type == kind.value,
                votes_table.c.target_id.in_(list(target_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return {row.target_id for row in result.fetchall()}

    async def delete_by_targets(
        self, kind: VoteTargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete all votes on the given targets."""
        if not target_ids:
            return 0

        stmt = delete(votes_table).where(
            and_(
                votes_table.c.target_type == kind.value,
                votes_table.c.target_id.in_(list(target_ids)),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
