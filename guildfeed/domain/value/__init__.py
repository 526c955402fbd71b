"""Domain value objects for the guild feed."""

from guildfeed.domain.value.identifiers import (
    GuildId,
    PollId,
    PollOptionId,
    PostId,
    ReplyId,
    UserId,
)
from guildfeed.domain.value.types import (
    DisplayName,
    ExpertRole,
    FeedPrivileges,
    Membership,
    ModerationAction,
    PollChoiceMode,
    PostSortOrder,
    PostTag,
    ReplySortOrder,
    TimeWindow,
    UserType,
    VoteTarget,
    VoteTargetType,
)

__all__ = [
    # Identifiers
    "GuildId",
    "UserId",
    "PostId",
    "ReplyId",
    "PollId",
    "PollOptionId",
    # Types
    "DisplayName",
    "ExpertRole",
    "FeedPrivileges",
    "Membership",
    "ModerationAction",
    "PollChoiceMode",
    "PostSortOrder",
    "PostTag",
    "ReplySortOrder",
    "TimeWindow",
    "UserType",
    "VoteTarget",
    "VoteTargetType",
]
