"""Unit tests for row mappers."""

from datetime import datetime, timezone
from uuid import uuid4

from guildfeed.domain.model import Poll, PollOption
from guildfeed.domain.value import (
    ExpertRole,
    PollChoiceMode,
    PollId,
    PollOptionId,
    PostId,
    PostTag,
    ReplyId,
)
from guildfeed.persistence.mappers import (
    poll_options_to_dicts,
    poll_to_dict,
    post_to_dict,
    row_to_post,
    rows_to_poll,
)
from tests.conftest import make_author, make_post

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestPostMapping:
    """Tests for post rows."""

    def test_author_is_flattened_into_columns(self):
        post = make_post(author=make_author("ada", expert_role=ExpertRole.MASTER, reputation=7))

        row = post_to_dict(post)

        assert "author" not in row
        assert row["author_id"] == "ada"
        assert row["author_display_name"] == "ada"
        assert row["author_expert_role"] == "master"
        assert row["author_reputation"] == 7
        assert row["tag"] == "discussion"

    def test_moderation_state_survives_storage(self):
        post = make_post(
            tag=PostTag.QUESTION,
            is_pinned=True,
            pinned_at=NOW,
            is_closed=True,
            accepted_reply_id=ReplyId(uuid4()),
            duplicate_of_post_id=PostId(uuid4()),
            version=4,
        )

        assert row_to_post(post_to_dict(post)) == post


class TestPollMapping:
    """Tests for poll rows."""

    def test_options_reassembled_in_position_order(self):
        poll = Poll(
            id=PollId(uuid4()),
            post_id=PostId(uuid4()),
            choice_mode=PollChoiceMode.MULTIPLE,
            options=[
                PollOption(id=PollOptionId(uuid4()), text=text, position=i, vote_count=i)
                for i, text in enumerate(["A", "B", "C"])
            ],
            total_votes=2,
            created_at=NOW,
        )
        option_rows = poll_options_to_dicts(poll)

        restored = rows_to_poll(poll_to_dict(poll), list(reversed(option_rows)))

        assert all(row["poll_id"] == poll.id for row in option_rows)
        assert restored == poll
