"""Viewer-specific representations of posts and replies.

Every list and detail response goes through ``FeedViewBuilder`` so that
``has_voted``, ``is_bookmarked``, poll visibility and score hiding are
computed the same way everywhere, with one batch query per concern.
"""

from datetime import datetime, timedelta
from typing import Optional, Sequence

import logfire
from pydantic import BaseModel

from guildfeed.config import FeedSettings
from guildfeed.domain.model import Author, FeedContext, PollView, Post, Reply
from guildfeed.domain.service import BookmarkService, PollService, VoteService
from guildfeed.domain.value import ExpertRole, PostId, PostTag, UserType, VoteTargetType


class AuthorItem(BaseModel):
    """Author snapshot in responses."""

    id: str
    display_name: str
    user_type: UserType | None = None
    expert_role: ExpertRole | None = None
    reputation: int = 0

    @classmethod
    def from_author(cls, author: Author) -> "AuthorItem":
        return cls(
            id=author.id,
            display_name=author.display_name.root,
            user_type=author.user_type,
            expert_role=author.expert_role,
            reputation=author.reputation,
        )


class PostItem(BaseModel):
    """Post as returned to one viewer.

    ``upvote_count`` is None while the score is hidden from this viewer.
    ``version`` is echoed back by edits so stale ones are rejected.
    """

    id: str
    guild_id: str
    author: AuthorItem
    title: str
    body: str
    tag: PostTag
    upvote_count: Optional[int]
    has_voted: bool
    score_hidden: bool
    reply_count: int
    is_pinned: bool
    pinned_at: Optional[datetime] = None
    is_closed: bool
    accepted_reply_id: Optional[str] = None
    duplicate_of_post_id: Optional[str] = None
    poll: Optional[PollView] = None
    is_bookmarked: bool
    created_at: datetime
    updated_at: datetime
    version: int


class ReplyItem(BaseModel):
    """Reply as returned to one viewer.

    Children are never embedded; ``child_count`` tells the client whether
    there is a level to expand.
    """

    id: str
    post_id: str
    parent_reply_id: Optional[str] = None
    author: AuthorItem
    body: str
    depth: int
    upvote_count: Optional[int]
    has_voted: bool
    score_hidden: bool
    is_accepted: bool
    child_count: int
    accepts_replies: bool
    created_at: datetime


class FeedViewBuilder:
    """Decorates posts and replies with the viewer's state."""

    def __init__(
        self,
        vote_service: VoteService,
        poll_service: PollService,
        bookmark_service: BookmarkService,
        feed_settings: FeedSettings,
    ) -> None:
        """Initialize view builder.

        Args:
            vote_service: Vote domain service
            poll_service: Poll domain service
            bookmark_service: Bookmark domain service
            feed_settings: Feed settings (score hiding, reply depth)
        """
        self.vote_service = vote_service
        self.poll_service = poll_service
        self.bookmark_service = bookmark_service
        self.feed_settings = feed_settings

    def is_score_hidden(self, created_at: datetime, now: datetime) -> bool:
        """Whether an item is still inside the score-hiding period."""
        minutes = self.feed_settings.score_hidden_minutes
        return minutes > 0 and now - created_at < timedelta(minutes=minutes)

    def visible_count(
        self, count: int, created_at: datetime, context: FeedContext, now: datetime
    ) -> Optional[int]:
        """The count as this viewer may see it (None when withheld)."""
        if self.is_score_hidden(created_at, now) and not context.privileges.is_moderator:
            return None
        return count

    async def bookmarked_ids(
        self, context: FeedContext, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        """Viewer's bookmarks among the posts; empty if they cannot be read.

        Bookmarks are a soft dependency of the feed: a failed read is logged
        and the feed is served without them.
        """
        if context.user_id is None or not post_ids:
            return set()
        try:
            return await self.bookmark_service.bookmarked_ids(context.user_id, post_ids)
        except Exception as e:
            logfire.warn(
                "Bookmark lookup failed, serving feed without bookmarks",
                user_id=context.user_id,
                error=str(e),
            )
            return set()

    async def post_items(
        self,
        context: FeedContext,
        posts: Sequence[Post],
        now: datetime,
        bookmarked: Optional[set[PostId]] = None,
    ) -> list[PostItem]:
        """Build viewer-specific items for a page of posts.

        Args:
            context: Viewer context
            posts: Posts in display order
            now: Reference time for poll expiry and score hiding
            bookmarked: Viewer's bookmarks among the posts, if already known

        Returns:
            Items in the same order as ``posts``
        """
        if not posts:
            return []

        post_ids = [post.id for post in posts]
        voted: set = set()
        if context.user_id is not None:
            voted = await self.vote_service.voted_ids(
                context.user_id, VoteTargetType.POST, post_ids
            )

        polls = await self.poll_service.polls_for_posts(
            [post.id for post in posts if post.has_poll]
        )
        selections = await self.poll_service.selections(
            context.user_id, [poll.id for poll in polls.values()]
        )

        if bookmarked is None:
            bookmarked = await self.bookmarked_ids(context, post_ids)

        items = []
        for post in posts:
            poll = polls.get(post.id)
            items.append(
                PostItem(
                    id=str(post.id),
                    guild_id=post.guild_id,
                    author=AuthorItem.from_author(post.author),
                    title=post.title,
                    body=post.body,
                    tag=post.tag,
                    upvote_count=self.visible_count(
                        post.upvote_count, post.created_at, context, now
                    ),
                    has_voted=post.id in voted,
                    score_hidden=self.is_score_hidden(post.created_at, now),
                    reply_count=post.reply_count,
                    is_pinned=post.is_pinned,
                    pinned_at=post.pinned_at,
                    is_closed=post.is_closed,
                    accepted_reply_id=(
                        str(post.accepted_reply_id) if post.accepted_reply_id else None
                    ),
                    duplicate_of_post_id=(
                        str(post.duplicate_of_post_id) if post.duplicate_of_post_id else None
                    ),
                    poll=(
                        self.poll_service.project(poll, selections.get(poll.id), now)
                        if poll
                        else None
                    ),
                    is_bookmarked=post.id in bookmarked,
                    created_at=post.created_at,
                    updated_at=post.updated_at,
                    version=post.version,
                )
            )
        return items

    async def post_item(self, context: FeedContext, post: Post, now: datetime) -> PostItem:
        """Build the viewer-specific item for a single post."""
        items = await self.post_items(context, [post], now)
        return items[0]

    async def reply_items(
        self,
        context: FeedContext,
        post: Post,
        replies: Sequence[Reply],
        now: datetime,
    ) -> list[ReplyItem]:
        """Build viewer-specific items for one level of replies.

        Args:
            context: Viewer context
            post: Post the replies belong to (for the accepted answer)
            replies: Replies in display order
            now: Reference time for score hiding

        Returns:
            Items in the same order as ``replies``
        """
        voted: set = set()
        if context.user_id is not None and replies:
            voted = await self.vote_service.voted_ids(
                context.user_id, VoteTargetType.REPLY, [reply.id for reply in replies]
            )

        return [
            ReplyItem(
                id=str(reply.id),
                post_id=str(reply.post_id),
                parent_reply_id=str(reply.parent_reply_id) if reply.parent_reply_id else None,
                author=AuthorItem.from_author(reply.author),
                body=reply.body,
                depth=reply.depth,
                upvote_count=self.visible_count(
                    reply.upvote_count, reply.created_at, context, now
                ),
                has_voted=reply.id in voted,
                score_hidden=self.is_score_hidden(reply.created_at, now),
                is_accepted=reply.id == post.accepted_reply_id,
                child_count=reply.child_count,
                accepts_replies=reply.depth < self.feed_settings.max_reply_depth,
                created_at=reply.created_at,
            )
            for reply in replies
        ]
