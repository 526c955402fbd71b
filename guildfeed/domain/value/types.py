"""Domain value objects for the guild feed.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and small pieces of business logic.
"""

from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID

from pydantic import field_validator

from guildfeed.domain.value.common import RootValueObject, ValueObject


class PostTag(str, Enum):
    """Category of a feed post."""

    DISCUSSION = "discussion"
    QUESTION = "question"
    INSIGHT = "insight"
    JOB_RELATED = "job_related"


class PostSortOrder(str, Enum):
    """Ranking modes for post listings."""

    HOT = "hot"  # Time-decayed vote score
    NEW = "new"  # created_at DESC
    TOP = "top"  # upvote_count DESC within a time window


class TimeWindow(str, Enum):
    """Creation-time window applied to the ``top`` ranking."""

    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    def start(self, now: datetime) -> datetime | None:
        """Earliest creation time inside the window (None for no restriction)."""
        if self is TimeWindow.WEEK:
            return now - timedelta(days=7)
        if self is TimeWindow.MONTH:
            return now - timedelta(days=30)
        return None


class ReplySortOrder(str, Enum):
    """Sort order for replies.

    Replies are only ever listed chronologically.
    """

    NEW = "new"


class VoteTargetType(str, Enum):
    """Type of entity that can be upvoted."""

    POST = "post"
    REPLY = "reply"


class VoteTarget(ValueObject):
    """Tagged reference to a votable entity, used as the vote ledger key."""

    kind: VoteTargetType
    id: UUID


class PollChoiceMode(str, Enum):
    """Whether a poll voter may select one or several options."""

    SINGLE = "single"
    MULTIPLE = "multiple"


class ModerationAction(str, Enum):
    """Moderation commands applicable to a post."""

    PIN = "pin"
    UNPIN = "unpin"
    CLOSE = "close"
    REOPEN = "reopen"
    DELETE = "delete"
    MARK_DUPLICATE = "mark_duplicate"


class UserType(str, Enum):
    """Kind of account, as reported by the guild directory."""

    EXPERT = "expert"
    CANDIDATE = "candidate"
    COMPANY = "company"


class ExpertRole(str, Enum):
    """Expert rank inside a guild, lowest first."""

    RECRUIT = "recruit"
    APPRENTICE = "apprentice"
    CRAFTSMAN = "craftsman"
    OFFICER = "officer"
    MASTER = "master"

    @property
    def rank(self) -> int:
        """Position of the role on the guild ladder (recruit = 0)."""
        return list(ExpertRole).index(self)


class DisplayName(RootValueObject[str]):
    """Human-readable author name shown next to posts and replies."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate display name is not blank and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Display name must be 1-255 characters")
        return v


class FeedPrivileges(ValueObject):
    """Capability set of a caller within one guild's feed.

    Computed once at the request boundary by ``resolve_privileges`` and
    consumed opaquely everywhere else.
    """

    can_post: bool = False
    can_reply: bool = False
    can_edit_others: bool = False
    can_mark_duplicate: bool = False
    can_pin_unpin: bool = False
    can_close_reopen: bool = False
    can_accept_on_behalf: bool = False
    can_delete: bool = False

    @property
    def is_moderator(self) -> bool:
        """Whether the caller holds any post moderation capability."""
        return self.can_pin_unpin or self.can_close_reopen or self.can_delete


class Membership(ValueObject):
    """A user's standing in a guild, resolved by the guild directory."""

    user_type: UserType | None = None
    expert_role: ExpertRole | None = None
    is_member: bool = False
    display_name: str | None = None
    reputation: int = 0
