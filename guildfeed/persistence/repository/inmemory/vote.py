"""In-memory vote repository for testing."""

from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID

from guildfeed.domain.model.vote import Vote
from guildfeed.domain.repository.vote import VoteRepository
from guildfeed.domain.value import UserId, VoteTarget, VoteTargetType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[tuple[UserId, VoteTargetType, UUID], Vote] = {}

    async def toggle(self, user_id: UserId, target: VoteTarget) -> bool:
        """Remove the vote if present, otherwise create it."""
        key = (user_id, target.kind, target.id)
        if self._votes.pop(key, None) is not None:
            return False
        self._votes[key] = Vote(
            user_id=user_id, target=target, created_at=datetime.now(timezone.utc)
        )
        return True

    async def find_voted_ids(
        self,
        user_id: UserId,
        kind: VoteTargetType,
        target_ids: Sequence[UUID],
    ) -> set[UUID]:
        """Find a user's votes on multiple items (batch query)."""
        return {tid for tid in target_ids if (user_id, kind, tid) in self._votes}

    async def delete_by_targets(
        self, kind: VoteTargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete all votes on the given targets."""
        wanted = set(target_ids)
        doomed = [key for key in self._votes if key[1] == kind and key[2] in wanted]
        for key in doomed:
            del self._votes[key]
        return len(doomed)
