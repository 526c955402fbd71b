"""Vote entity.

Upvote-only: the existence of a row means the user upvoted the target.
"""

from datetime import datetime, timezone

from pydantic import Field

from guildfeed.domain.model.common import DomainModel
from guildfeed.domain.value import UserId, VoteTarget


class Vote(DomainModel):
    """Upvote by one user on one post or reply.

    Business rules:
    - At most one vote per (user, target kind, target id)
    - Toggling removes or creates the row and moves the target count by one
    """

    user_id: UserId
    target: VoteTarget
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
