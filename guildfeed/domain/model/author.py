"""Author snapshot embedded in posts and replies."""

from pydantic import Field

from guildfeed.domain.model.common import DomainModel
from guildfeed.domain.value import DisplayName, ExpertRole, UserId, UserType


class Author(DomainModel):
    """Author as they were when the content was written.

    Names and roles live in external services; the snapshot is denormalized
    so feed reads never call out to them.
    """

    id: UserId
    display_name: DisplayName
    user_type: UserType | None = None
    expert_role: ExpertRole | None = None
    reputation: int = Field(default=0, ge=0)
