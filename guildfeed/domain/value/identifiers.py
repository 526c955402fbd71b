"""Strongly typed identifiers for guild feed entities.

Using NewType keeps post, reply and poll IDs from being mixed up at call
sites while staying plain UUIDs at runtime.
"""

from typing import NewType
from uuid import UUID

# Guilds and users are owned by external services; their IDs are opaque strings
GuildId = NewType("GuildId", str)
UserId = NewType("UserId", str)

# Feed entities
PostId = NewType("PostId", UUID)
ReplyId = NewType("ReplyId", UUID)
PollId = NewType("PollId", UUID)
PollOptionId = NewType("PollOptionId", UUID)
