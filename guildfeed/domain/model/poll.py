"""Poll entity and its per-viewer projection.

A poll belongs to exactly one post. Once a user has voted, or the poll has
expired, it is read-only for that user. Per-option counts stay hidden from a
viewer until one of those two things is true.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from guildfeed.domain.model.common import DomainModel
from guildfeed.domain.value import PollChoiceMode, PollId, PollOptionId, PostId

MIN_POLL_OPTIONS = 2
MAX_POLL_OPTIONS = 6
POLL_OPTION_MAX_LENGTH = 100


class PollOption(DomainModel):
    """One selectable answer of a poll."""

    id: PollOptionId
    text: str = Field(min_length=1, max_length=POLL_OPTION_MAX_LENGTH)
    position: int = Field(ge=0)
    vote_count: int = Field(default=0, ge=0)


class Poll(DomainModel):
    """Poll attached to a post.

    ``total_votes`` counts unique voters, so a multiple-choice voter who
    selected three options contributes one.
    """

    id: PollId
    post_id: PostId
    choice_mode: PollChoiceMode
    options: list[PollOption] = Field(
        min_length=MIN_POLL_OPTIONS, max_length=MAX_POLL_OPTIONS
    )
    total_votes: int = Field(default=0, ge=0)
    expires_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("options")
    @classmethod
    def order_options(cls, v: list[PollOption]) -> list[PollOption]:
        """Keep options in their creation order."""
        return sorted(v, key=lambda option: option.position)

    def is_expired(self, now: datetime) -> bool:
        """Whether the poll is past its expiry time."""
        return self.expires_at is not None and self.expires_at <= now

    def option_ids(self) -> set[PollOptionId]:
        """IDs of all options of this poll."""
        return {option.id for option in self.options}


class PollOptionView(DomainModel):
    """Poll option as shown to one viewer.

    ``vote_count`` and ``percentage`` are None while results are hidden.
    """

    id: PollOptionId
    text: str
    vote_count: Optional[int] = None
    percentage: Optional[int] = None
    has_voted: bool = False


class PollView(DomainModel):
    """Poll as shown to one viewer."""

    id: PollId
    post_id: PostId
    choice_mode: PollChoiceMode
    options: list[PollOptionView]
    total_votes: int
    expires_at: Optional[datetime] = None
    is_expired: bool = False
    has_voted: bool = False
    results_visible: bool = False
