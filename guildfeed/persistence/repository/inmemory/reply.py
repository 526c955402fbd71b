"""In-memory reply repository for testing."""

from typing import Optional

from guildfeed.domain.model.reply import Reply
from guildfeed.domain.repository.reply import ReplyRepository
from guildfeed.domain.value import PostId, ReplyId


class InMemoryReplyRepository(ReplyRepository):
    """In-memory implementation of ReplyRepository for testing."""

    def __init__(self) -> None:
        self._replies: dict[ReplyId, Reply] = {}

    def _level(self, post_id: PostId, parent_reply_id: Optional[ReplyId]) -> list[Reply]:
        replies = [
            r
            for r in self._replies.values()
            if r.post_id == post_id and r.parent_reply_id == parent_reply_id
        ]
        replies.sort(key=lambda r: r.created_at)
        return replies

    async def find_by_id(self, reply_id: ReplyId) -> Optional[Reply]:
        """Find a reply by ID."""
        return self._replies.get(reply_id)

    async def find_children(
        self,
        post_id: PostId,
        parent_reply_id: Optional[ReplyId] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Reply]:
        """Find one level of replies, oldest first."""
        return self._level(post_id, parent_reply_id)[offset : offset + limit]

    async def count_children(
        self, post_id: PostId, parent_reply_id: Optional[ReplyId] = None
    ) -> int:
        """Count the direct children of a parent."""
        return len(self._level(post_id, parent_reply_id))

    async def find_ids_by_post(self, post_id: PostId) -> list[ReplyId]:
        """List the IDs of every reply of a post."""
        return [r.id for r in self._replies.values() if r.post_id == post_id]

    async def save(self, reply: Reply) -> Reply:
        """Insert a reply."""
        self._replies[reply.id] = reply
        return reply

    async def increment_child_count(self, reply_id: ReplyId) -> None:
        """Increment child_count by 1."""
        reply = self._replies.get(reply_id)
        if reply:
            self._replies[reply_id] = reply.model_copy(
                update={"child_count": reply.child_count + 1}
            )

    async def adjust_upvotes(self, reply_id: ReplyId, delta: int) -> Optional[int]:
        """Add delta to upvote_count (minimum 0)."""
        reply = self._replies.get(reply_id)
        if reply is None:
            return None
        count = max(reply.upvote_count + delta, 0)
        self._replies[reply_id] = reply.model_copy(update={"upvote_count": count})
        return count

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every reply of a post."""
        doomed = [rid for rid, r in self._replies.items() if r.post_id == post_id]
        for reply_id in doomed:
            del self._replies[reply_id]
        return len(doomed)
