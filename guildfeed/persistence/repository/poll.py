"""PostgreSQL implementation of Poll repository."""

from collections import defaultdict
from typing import Dict, Optional, Sequence, Set

import logfire
from sqlalchemy import and_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from guildfeed.domain.model import Poll
from guildfeed.domain.repository import PollRepository
from guildfeed.domain.value import PollId, PollOptionId, PostId, UserId
from guildfeed.persistence.mappers import poll_options_to_dicts, poll_to_dict, rows_to_poll
from guildfeed.persistence.tables import (
    poll_options_table,
    poll_voters_table,
    poll_votes_table,
    polls_table,
)


class PostgresPollRepository(PollRepository):
    """PostgreSQL implementation of PollRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _options_for(self, poll_ids: list) -> dict:
        """Fetch options for multiple polls in a single query, by position."""
        stmt = (
            select(poll_options_table)
            .where(poll_options_table.c.poll_id.in_(poll_ids))
            .order_by(poll_options_table.c.poll_id, poll_options_table.c.position)
        )
        result = await self.session.execute(stmt)
        options: dict = defaultdict(list)
        for row in result.fetchall():
            options[row.poll_id].append(row._asdict())
        return options

    async def find_by_post(self, post_id: PostId) -> Optional[Poll]:
        """Find the poll attached to a post."""
        polls = await self.find_by_posts([post_id])
        return polls.get(post_id)

    async def find_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, Poll]:
        """Find polls for several posts (batch query)."""
        if not post_ids:
            return {}

        with logfire.span("poll_repository.find_by_posts", count=len(post_ids)):
            stmt = select(polls_table).where(polls_table.c.post_id.in_(list(post_ids)))
            result = await self.session.execute(stmt)
            poll_rows = [row._asdict() for row in result.fetchall()]
            if not poll_rows:
                return {}

            options = await self._options_for([row["id"] for row in poll_rows])
            return {
                PostId(row["post_id"]): rows_to_poll(row, options[row["id"]])
                for row in poll_rows
            }

    async def save(self, poll: Poll) -> Poll:
        """Insert a new poll with its options."""
        with logfire.span("poll_repository.save", poll_id=str(poll.id)):
            await self.session.execute(polls_table.insert().values(**poll_to_dict(poll)))
            await self.session.execute(
                poll_options_table.insert(), poll_options_to_dicts(poll)
            )
            await self.session.flush()
            return poll

    async def record_votes(
        self,
        poll_id: PollId,
        user_id: UserId,
        option_ids: Sequence[PollOptionId],
    ) -> bool:
        """Record a voter and their selections in one transaction.

        The voter row is inserted first; its primary key is what keeps a
        second vote (even a concurrent one) from being recorded.
        """
        with logfire.span(
            "poll_repository.record_votes",
            poll_id=str(poll_id),
            user_id=user_id,
            selections=len(option_ids),
        ):
            voter_stmt = (
                insert(poll_voters_table)
                .values(poll_id=poll_id, user_id=user_id)
                .on_conflict_do_nothing(index_elements=["poll_id", "user_id"])
                .returning(poll_voters_table.c.user_id)
            )
            result = await self.session.execute(voter_stmt)
            if result.fetchone() is None:
                return False

            await self.session.execute(
                poll_votes_table.insert(),
                [
                    {"user_id": user_id, "option_id": option_id, "poll_id": poll_id}
                    for option_id in option_ids
                ],
            )
            await self.session.execute(
                update(poll_options_table)
                .where(poll_options_table.c.id.in_(list(option_ids)))
                .values(vote_count=poll_options_table.c.vote_count + 1)
            )
            await self.session.execute(
                update(polls_table)
                .where(polls_table.c.id == poll_id)
                .values(total_votes=polls_table.c.total_votes + 1)
            )
            await self.session.flush()
            return True

    async def find_selections(
        self, user_id: UserId, poll_ids: Sequence[PollId]
    ) -> Dict[PollId, Set[PollOptionId]]:
        """Find the options a user selected on several polls (batch query)."""
        if not poll_ids:
            return {}

        stmt = select(poll_votes_table.c.poll_id, poll_votes_table.c.option_id).where(
            and_(
                poll_votes_table.c.user_id == user_id,
                poll_votes_table.c.poll_id.in_(list(poll_ids)),
            )
        )
        result = await self.session.execute(stmt)
        selections: Dict[PollId, Set[PollOptionId]] = defaultdict(set)
        for row in result.fetchall():
            selections[PollId(row.poll_id)].add(PollOptionId(row.option_id))
        return dict(selections)

    async def delete_by_post(self, post_id: PostId) -> bool:
        """Delete a post's poll; options, voters and votes cascade."""
        stmt = polls_table.delete().where(polls_table.c.post_id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
