"""SQLAlchemy table definitions for the guild feed.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()


def _author_columns() -> list[Column]:
    """Denormalized author snapshot shared by posts and replies."""
    return [
        Column("author_id", String(255), nullable=False),
        Column("author_display_name", String(255), nullable=False),
        Column("author_user_type", String(20), nullable=True),
        Column("author_expert_role", String(20), nullable=True),
        Column("author_reputation", Integer, nullable=False, server_default="0"),
    ]


# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("guild_id", String(255), nullable=False),
    *_author_columns(),
    Column("title", String(200), nullable=False),
    Column("body", Text, nullable=False),
    Column("tag", String(20), nullable=False),
    Column("upvote_count", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("pinned_at", TIMESTAMP(timezone=True), nullable=True),
    Column("is_closed", Boolean, nullable=False, server_default="false"),
    # Not a foreign key: replies reference posts, and the accepted reply is
    # always one of this post's replies, deleted together with it
    Column("accepted_reply_id", UUID(as_uuid=True), nullable=True),
    Column(
        "duplicate_of_post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("has_poll", Boolean, nullable=False, server_default="false"),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "tag IN ('discussion', 'question', 'insight', 'job_related')", name="ck_posts_tag"
    ),
    CheckConstraint("upvote_count >= 0", name="ck_posts_upvote_count"),
    CheckConstraint("reply_count >= 0", name="ck_posts_reply_count"),
)

Index("idx_posts_guild_created", posts_table.c.guild_id, posts_table.c.created_at)
Index("idx_posts_guild_tag", posts_table.c.guild_id, posts_table.c.tag)
Index(
    "idx_posts_guild_pinned",
    posts_table.c.guild_id,
    posts_table.c.is_pinned,
    posts_table.c.pinned_at,
)

# ============================================================================
# REPLIES TABLE (flat, parent pointer)
# ============================================================================
replies_table = Table(
    "replies",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_reply_id",
        UUID(as_uuid=True),
        ForeignKey("replies.id", ondelete="CASCADE"),
        nullable=True,
    ),
    *_author_columns(),
    Column("body", Text, nullable=False),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("upvote_count", Integer, nullable=False, server_default="0"),
    Column("child_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth >= 0", name="ck_replies_depth"),
    CheckConstraint("upvote_count >= 0", name="ck_replies_upvote_count"),
    CheckConstraint("child_count >= 0", name="ck_replies_child_count"),
)

Index(
    "idx_replies_level",
    replies_table.c.post_id,
    replies_table.c.parent_reply_id,
    replies_table.c.created_at,
)

# ============================================================================
# VOTES TABLE (polymorphic target, composite key)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("user_id", String(255), nullable=False),
    Column("target_type", String(10), nullable=False),
    Column("target_id", UUID(as_uuid=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "target_type", "target_id", name="pk_votes"),
    CheckConstraint("target_type IN ('post', 'reply')", name="ck_votes_target_type"),
)

Index("idx_votes_target", votes_table.c.target_type, votes_table.c.target_id)

# ============================================================================
# POLLS
# ============================================================================
polls_table = Table(
    "polls",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("choice_mode", String(10), nullable=False),
    Column("total_votes", Integer, nullable=False, server_default="0"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("choice_mode IN ('single', 'multiple')", name="ck_polls_choice_mode"),
)

poll_options_table = Table(
    "poll_options",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "poll_id",
        UUID(as_uuid=True),
        ForeignKey("polls.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("text", String(100), nullable=False),
    Column("position", Integer, nullable=False),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    UniqueConstraint("poll_id", "position", name="uq_poll_option_position"),
)

# One row per voter: the insert that makes a poll read-only for the user
poll_voters_table = Table(
    "poll_voters",
    metadata,
    Column(
        "poll_id",
        UUID(as_uuid=True),
        ForeignKey("polls.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("poll_id", "user_id", name="pk_poll_voters"),
)

poll_votes_table = Table(
    "poll_votes",
    metadata,
    Column("user_id", String(255), nullable=False),
    Column(
        "option_id",
        UUID(as_uuid=True),
        ForeignKey("poll_options.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "poll_id",
        UUID(as_uuid=True),
        ForeignKey("polls.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "option_id", name="pk_poll_votes"),
)

Index("idx_poll_votes_poll_user", poll_votes_table.c.poll_id, poll_votes_table.c.user_id)

# ============================================================================
# BOOKMARKS TABLE
# ============================================================================
bookmarks_table = Table(
    "bookmarks",
    metadata,
    Column("user_id", String(255), nullable=False),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("guild_id", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "post_id", name="pk_bookmarks"),
)

Index(
    "idx_bookmarks_user_guild",
    bookmarks_table.c.user_id,
    bookmarks_table.c.guild_id,
    bookmarks_table.c.created_at,
)
