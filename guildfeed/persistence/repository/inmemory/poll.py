"""In-memory poll repository for testing."""

from typing import Optional, Sequence

from guildfeed.domain.model.poll import Poll
from guildfeed.domain.repository.poll import PollRepository
from guildfeed.domain.value import PollId, PollOptionId, PostId, UserId


class InMemoryPollRepository(PollRepository):
    """In-memory implementation of PollRepository for testing."""

    def __init__(self) -> None:
        self._polls: dict[PostId, Poll] = {}
        # poll_id -> user_id -> selected option ids
        self._selections: dict[PollId, dict[UserId, set[PollOptionId]]] = {}

    async def find_by_post(self, post_id: PostId) -> Optional[Poll]:
        """Find the poll attached to a post."""
        return self._polls.get(post_id)

    async def find_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, Poll]:
        """Find polls for several posts."""
        return {pid: self._polls[pid] for pid in post_ids if pid in self._polls}

    async def save(self, poll: Poll) -> Poll:
        """Insert a poll."""
        self._polls[poll.post_id] = poll
        self._selections[poll.id] = {}
        return poll

    async def record_votes(
        self,
        poll_id: PollId,
        user_id: UserId,
        option_ids: Sequence[PollOptionId],
    ) -> bool:
        """Record a voter and their selections, unless they already voted."""
        voters = self._selections.setdefault(poll_id, {})
        if user_id in voters:
            return False

        poll = next((p for p in self._polls.values() if p.id == poll_id), None)
        if poll is None:
            return False

        selected = set(option_ids)
        voters[user_id] = selected
        options = [
            o.model_copy(update={"vote_count": o.vote_count + 1}) if o.id in selected else o
            for o in poll.options
        ]
        self._polls[poll.post_id] = poll.model_copy(
            update={"options": options, "total_votes": poll.total_votes + 1}
        )
        return True

    async def find_selections(
        self, user_id: UserId, poll_ids: Sequence[PollId]
    ) -> dict[PollId, set[PollOptionId]]:
        """Find the options a user selected on several polls."""
        return {
            pid: set(self._selections[pid][user_id])
            for pid in poll_ids
            if user_id in self._selections.get(pid, {})
        }

    async def delete_by_post(self, post_id: PostId) -> bool:
        """Delete a post's poll with its votes."""
        poll = self._polls.pop(post_id, None)
        if poll is None:
            return False
        self._selections.pop(poll.id, None)
        return True
