"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Sequence

from guildfeed.domain.model import Author, Poll, PollOption, Post, Reply
from guildfeed.domain.value import (
    DisplayName,
    ExpertRole,
    GuildId,
    PollChoiceMode,
    PollId,
    PollOptionId,
    PostId,
    PostTag,
    ReplyId,
    UserId,
    UserType,
)


def row_to_author(row: Dict[str, Any]) -> Author:
    """Build the author snapshot from the ``author_*`` columns of a row."""
    return Author(
        id=UserId(row["author_id"]),
        display_name=DisplayName(row["author_display_name"]),
        user_type=UserType(row["author_user_type"]) if row.get("author_user_type") else None,
        expert_role=(
            ExpertRole(row["author_expert_role"]) if row.get("author_expert_role") else None
        ),
        reputation=row.get("author_reputation", 0),
    )


def author_to_dict(author: Author) -> Dict[str, Any]:
    """Flatten an author snapshot into ``author_*`` columns."""
    return {
        "author_id": author.id,
        "author_display_name": author.display_name.root,
        "author_user_type": author.user_type.value if author.user_type else None,
        "author_expert_role": author.expert_role.value if author.expert_role else None,
        "author_reputation": author.reputation,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        guild_id=GuildId(row["guild_id"]),
        author=row_to_author(row),
        title=row["title"],
        body=row["body"],
        tag=PostTag(row["tag"]),
        upvote_count=row["upvote_count"],
        reply_count=row["reply_count"],
        is_pinned=row["is_pinned"],
        pinned_at=row.get("pinned_at"),
        is_closed=row["is_closed"],
        accepted_reply_id=(
            ReplyId(row["accepted_reply_id"]) if row.get("accepted_reply_id") else None
        ),
        duplicate_of_post_id=(
            PostId(row["duplicate_of_post_id"]) if row.get("duplicate_of_post_id") else None
        ),
        has_poll=row["has_poll"],
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = post.model_dump(exclude={"author"})
    data["tag"] = post.tag.value
    data.update(author_to_dict(post.author))
    return data


def row_to_reply(row: Dict[str, Any]) -> Reply:
    """Convert database row to Reply domain model.

    Args:
        row: Database row as dict

    Returns:
        Reply domain model
    """
    return Reply(
        id=ReplyId(row["id"]),
        post_id=PostId(row["post_id"]),
        parent_reply_id=ReplyId(row["parent_reply_id"]) if row.get("parent_reply_id") else None,
        author=row_to_author(row),
        body=row["body"],
        depth=row["depth"],
        upvote_count=row["upvote_count"],
        child_count=row["child_count"],
        created_at=row["created_at"],
    )


def reply_to_dict(reply: Reply) -> Dict[str, Any]:
    """Convert Reply domain model to database dict."""
    data = reply.model_dump(exclude={"author"})
    data.update(author_to_dict(reply.author))
    return data


def rows_to_poll(poll_row: Dict[str, Any], option_rows: Sequence[Dict[str, Any]]) -> Poll:
    """Convert a ``polls`` row and its ``poll_options`` rows to a Poll.

    Args:
        poll_row: Poll row as dict
        option_rows: Option rows of that poll as dicts

    Returns:
        Poll domain model
    """
    return Poll(
        id=PollId(poll_row["id"]),
        post_id=PostId(poll_row["post_id"]),
        choice_mode=PollChoiceMode(poll_row["choice_mode"]),
        options=[
            PollOption(
                id=PollOptionId(row["id"]),
                text=row["text"],
                position=row["position"],
                vote_count=row["vote_count"],
            )
            for row in option_rows
        ],
        total_votes=poll_row["total_votes"],
        expires_at=poll_row.get("expires_at"),
        created_at=poll_row["created_at"],
    )


def poll_to_dict(poll: Poll) -> Dict[str, Any]:
    """Convert Poll domain model to a ``polls`` row (options excluded)."""
    data = poll.model_dump(exclude={"options"})
    data["choice_mode"] = poll.choice_mode.value
    return data


def poll_options_to_dicts(poll: Poll) -> list[Dict[str, Any]]:
    """Convert a poll's options to ``poll_options`` rows."""
    return [{**option.model_dump(), "poll_id": poll.id} for option in poll.options]
