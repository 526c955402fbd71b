"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence, Set
from uuid import UUID

from guildfeed.domain.value import UserId, VoteTarget, VoteTargetType


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Keyed by ``(user_id, target kind, target id)``; a row means "upvoted".
    """

    @abstractmethod
    async def toggle(self, user_id: UserId, target: VoteTarget) -> bool:
        """Atomically remove the user's vote if it exists, otherwise create it.

        Must be safe under concurrent calls for the same key: each call
        flips the state exactly once.

        Args:
            user_id: The voting user
            target: The post or reply being voted on

        Returns:
            True if the user has voted after the call, False otherwise
        """
        pass

    @abstractmethod
    async def find_voted_ids(
        self,
        user_id: UserId,
        kind: VoteTargetType,
        target_ids: Sequence[UUID],
    ) -> Set[UUID]:
        """Find which of the given targets a user has upvoted (batch query).

        Args:
            user_id: The user ID
            kind: Kind of the targets (post or reply)
            target_ids: IDs to check

        Returns:
            Subset of ``target_ids`` the user has voted on
        """
        pass

    @abstractmethod
    async def delete_by_targets(
        self, kind: VoteTargetType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete all votes on the given targets.

        Args:
            kind: Kind of the targets (post or reply)
            target_ids: IDs whose votes are removed

        Returns:
            Number of votes deleted
        """
        pass
