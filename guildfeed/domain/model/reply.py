"""Reply entity.

Replies form a forest under each post. They are stored flat (one row per
reply, parent pointer by ID) so a single level can be loaded without
materializing the rest of the tree.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from guildfeed.domain.model.author import Author
from guildfeed.domain.model.common import DomainModel
from guildfeed.domain.value import PostId, ReplyId

REPLY_BODY_MIN_LENGTH = 1
REPLY_BODY_MAX_LENGTH = 2000


class Reply(DomainModel):
    """Reply to a post or to another reply.

    Threading is managed through:
    - parent_reply_id: Direct parent reply (None for top-level)
    - depth: Nesting level (0 for top-level, parent depth + 1 otherwise)
    - child_count: Number of direct children, maintained on insert
    """

    id: ReplyId
    post_id: PostId
    parent_reply_id: Optional[ReplyId] = None
    author: Author
    body: str = Field(min_length=REPLY_BODY_MIN_LENGTH, max_length=REPLY_BODY_MAX_LENGTH)
    depth: int = Field(default=0, ge=0)
    upvote_count: int = Field(default=0, ge=0)
    child_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
