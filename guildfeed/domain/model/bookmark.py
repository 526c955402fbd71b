"""Bookmark entity."""

from datetime import datetime, timezone

from pydantic import Field

from guildfeed.domain.model.common import DomainModel
from guildfeed.domain.value import GuildId, PostId, UserId


class Bookmark(DomainModel):
    """A post saved by a user. Has no effect on ranking or counts."""

    user_id: UserId
    guild_id: GuildId
    post_id: PostId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
