"""Test configuration and helpers."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from guildfeed.domain.model import Author, FeedContext, Post
from guildfeed.domain.service import resolve_privileges
from guildfeed.domain.value import (
    DisplayName,
    ExpertRole,
    GuildId,
    PostId,
    PostTag,
    UserId,
    UserType,
)

# Keep spans local; no console noise in test output
logfire.configure(send_to_logfire=False, console=False)

GUILD = GuildId("guild-1")


def make_author(user_id: str = "author-1", **overrides) -> Author:
    """Build an author snapshot."""
    fields = {
        "id": UserId(user_id),
        "display_name": DisplayName(user_id),
        "user_type": UserType.EXPERT,
        "expert_role": ExpertRole.APPRENTICE,
    }
    fields.update(overrides)
    return Author(**fields)


def make_post(guild_id: str = GUILD, **overrides) -> Post:
    """Build a valid post; override any field."""
    now = datetime.now(timezone.utc)
    fields = {
        "id": PostId(uuid4()),
        "guild_id": GuildId(guild_id),
        "author": make_author(),
        "title": "A test post",
        "body": "Body of the test post",
        "tag": PostTag.DISCUSSION,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Post(**fields)


def make_context(
    user_id: str | None = "member-1",
    role: ExpertRole | None = ExpertRole.APPRENTICE,
    user_type: UserType | None = UserType.EXPERT,
    is_member: bool = True,
    guild_id: str = GUILD,
) -> FeedContext:
    """Build a caller context the way the membership service would."""
    if user_id is None:
        return FeedContext(guild_id=GuildId(guild_id))
    return FeedContext(
        guild_id=GuildId(guild_id),
        user_id=UserId(user_id),
        is_member=is_member,
        privileges=resolve_privileges(user_type, role, is_member),
        author=make_author(user_id, user_type=user_type, expert_role=role),
    )
