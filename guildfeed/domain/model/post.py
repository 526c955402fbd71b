"""Post aggregate root.

Posts are the top-level entries of a guild's discussion feed. Moderation
state lives on two independent axes (pinned, closed); deletion is a hard
delete that cascades to replies, votes, the poll and bookmarks.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from guildfeed.domain.model.author import Author
from guildfeed.domain.model.common import DomainModel
from guildfeed.domain.value import GuildId, PostId, PostTag, ReplyId, UserId

TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 200
BODY_MIN_LENGTH = 10
BODY_MAX_LENGTH = 5000


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    guild_id: GuildId
    author: Author
    title: str = Field(min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    body: str = Field(min_length=BODY_MIN_LENGTH, max_length=BODY_MAX_LENGTH)
    tag: PostTag
    upvote_count: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    is_pinned: bool = False
    pinned_at: Optional[datetime] = None
    is_closed: bool = False
    accepted_reply_id: Optional[ReplyId] = None
    duplicate_of_post_id: Optional[PostId] = None
    has_poll: bool = False
    version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def validate_moderation_fields(self) -> "Post":
        """Keep pin timestamp and accepted answer consistent with the flags."""
        if self.is_pinned and self.pinned_at is None:
            raise ValueError("Pinned posts must record when they were pinned")
        if self.accepted_reply_id is not None and self.tag != PostTag.QUESTION:
            raise ValueError("Only question posts can have an accepted answer")
        return self

    def is_authored_by(self, user_id: UserId | None) -> bool:
        """Whether the given user wrote this post."""
        return user_id is not None and self.author.id == user_id
