"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional, Sequence

from guildfeed.config import RankingSettings
from guildfeed.domain.model.post import Post
from guildfeed.domain.repository.post import PostRepository
from guildfeed.domain.service.ranking import rank_posts
from guildfeed.domain.value import GuildId, PostId, PostSortOrder, PostTag

MODERATED_FIELDS = (
    "title",
    "body",
    "tag",
    "is_pinned",
    "pinned_at",
    "is_closed",
    "accepted_reply_id",
    "duplicate_of_post_id",
    "has_poll",
    "updated_at",
)


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, ranking: RankingSettings | None = None) -> None:
        self._posts: dict[PostId, Post] = {}
        self._ranking = ranking or RankingSettings()

    def _filter(
        self,
        guild_id: GuildId,
        tag: Optional[PostTag],
        created_after: Optional[datetime],
        post_ids: Optional[Sequence[PostId]],
    ) -> list[Post]:
        posts = [p for p in self._posts.values() if p.guild_id == guild_id]
        if tag is not None:
            posts = [p for p in posts if p.tag == tag]
        if created_after is not None:
            posts = [p for p in posts if p.is_pinned or p.created_at >= created_after]
        if post_ids is not None:
            wanted = set(post_ids)
            posts = [p for p in posts if p.id in wanted]
        return posts

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

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
    ) -> list[Post]:
        """Find posts with filtering, ranking and pagination."""
        posts = self._filter(guild_id, tag, created_after, post_ids)
        ranked = rank_posts(posts, sort, now, self._ranking)
        return ranked[offset : offset + limit]

    async def count(
        self,
        guild_id: GuildId,
        tag: Optional[PostTag] = None,
        created_after: Optional[datetime] = None,
        post_ids: Optional[Sequence[PostId]] = None,
    ) -> int:
        """Count posts matching the given filters."""
        return len(self._filter(guild_id, tag, created_after, post_ids))

    async def save(self, post: Post) -> Post:
        """Insert a post."""
        self._posts[post.id] = post
        return post

    async def compare_and_set(self, post: Post, expected_version: int) -> Optional[Post]:
        """Replace moderated fields if the stored version matches."""
        current = self._posts.get(post.id)
        if current is None or current.version != expected_version:
            return None

        # Counters keep their stored values
        updated = current.model_copy(
            update={
                **{field: getattr(post, field) for field in MODERATED_FIELDS},
                "version": expected_version + 1,
            }
        )
        self._posts[post.id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def adjust_upvotes(self, post_id: PostId, delta: int) -> Optional[int]:
        """Add delta to upvote_count (minimum 0)."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        count = max(post.upvote_count + delta, 0)
        self._posts[post_id] = post.model_copy(update={"upvote_count": count})
        return count

    async def increment_reply_count(self, post_id: PostId) -> None:
        """Increment reply_count by 1."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.model_copy(
                update={"reply_count": post.reply_count + 1}
            )
