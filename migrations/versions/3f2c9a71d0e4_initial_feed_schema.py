"""initial_feed_schema

Create the schema for guild discussion feeds:
- Posts (author snapshot, moderation state, version for compare-and-set)
- Replies (parent pointer, stored depth and child count)
- Votes (one row per user and target, posts and replies alike)
- Polls, poll options, poll voters and poll votes
- Bookmarks

Revision ID: 3f2c9a71d0e4
Revises:
Create Date: 2026-10-18 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2c9a71d0e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _author_columns() -> list[sa.Column]:
    return [
        sa.Column("author_id", sa.String(255), nullable=False),
        sa.Column("author_display_name", sa.String(255), nullable=False),
        sa.Column("author_user_type", sa.String(20), nullable=True),
        sa.Column("author_expert_role", sa.String(20), nullable=True),
        sa.Column("author_reputation", sa.Integer(), nullable=False, server_default="0"),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("guild_id", sa.String(255), nullable=False),
        *_author_columns(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("tag", sa.String(20), nullable=False),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reply_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("pinned_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("is_closed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("accepted_reply_id", sa.UUID(), nullable=True),
        sa.Column("duplicate_of_post_id", sa.UUID(), nullable=True),
        sa.Column("has_poll", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["duplicate_of_post_id"], ["posts.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "tag IN ('discussion', 'question', 'insight', 'job_related')",
            name="ck_posts_tag",
        ),
        sa.CheckConstraint("upvote_count >= 0", name="ck_posts_upvote_count"),
        sa.CheckConstraint("reply_count >= 0", name="ck_posts_reply_count"),
    )
    op.create_index("idx_posts_guild_created", "posts", ["guild_id", "created_at"])
    op.create_index("idx_posts_guild_tag", "posts", ["guild_id", "tag"])
    op.create_index(
        "idx_posts_guild_pinned", "posts", ["guild_id", "is_pinned", "pinned_at"]
    )

    # ========================================================================
    # REPLIES table (flat, parent pointer)
    # ========================================================================
    op.create_table(
        "replies",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_reply_id", sa.UUID(), nullable=True),
        *_author_columns(),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("child_count", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_reply_id"], ["replies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0", name="ck_replies_depth"),
        sa.CheckConstraint("upvote_count >= 0", name="ck_replies_upvote_count"),
        sa.CheckConstraint("child_count >= 0", name="ck_replies_child_count"),
    )
    op.create_index(
        "idx_replies_level", "replies", ["post_id", "parent_reply_id", "created_at"]
    )

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("target_type", sa.String(10), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("user_id", "target_type", "target_id", name="pk_votes"),
        sa.CheckConstraint(
            "target_type IN ('post', 'reply')", name="ck_votes_target_type"
        ),
    )
    op.create_index("idx_votes_target", "votes", ["target_type", "target_id"])

    # ========================================================================
    # POLLS
    # ========================================================================
    op.create_table(
        "polls",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("choice_mode", sa.String(10), nullable=False),
        sa.Column("total_votes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id"),
        sa.CheckConstraint(
            "choice_mode IN ('single', 'multiple')", name="ck_polls_choice_mode"
        ),
    )

    op.create_table(
        "poll_options",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("poll_id", sa.UUID(), nullable=False),
        sa.Column("text", sa.String(100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("poll_id", "position", name="uq_poll_option_position"),
    )

    op.create_table(
        "poll_voters",
        sa.Column("poll_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("poll_id", "user_id", name="pk_poll_voters"),
    )

    op.create_table(
        "poll_votes",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("option_id", sa.UUID(), nullable=False),
        sa.Column("poll_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["option_id"], ["poll_options.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "option_id", name="pk_poll_votes"),
    )
    op.create_index("idx_poll_votes_poll_user", "poll_votes", ["poll_id", "user_id"])

    # ========================================================================
    # BOOKMARKS table
    # ========================================================================
    op.create_table(
        "bookmarks",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("guild_id", sa.String(255), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "post_id", name="pk_bookmarks"),
    )
    op.create_index(
        "idx_bookmarks_user_guild", "bookmarks", ["user_id", "guild_id", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("bookmarks")
    op.drop_table("poll_votes")
    op.drop_table("poll_voters")
    op.drop_table("poll_options")
    op.drop_table("polls")
    op.drop_table("votes")
    op.drop_table("replies")
    op.drop_table("posts")
