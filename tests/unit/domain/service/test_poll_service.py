"""Unit tests for PollService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from guildfeed.domain.error import (
    AlreadyVotedError,
    NotFoundError,
    PollClosedError,
    ValidationError,
)
from guildfeed.domain.service import PollService
from guildfeed.domain.service.poll_service import percentage
from guildfeed.domain.value import PollChoiceMode, PostId, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


async def _create_poll(poll_service, mode=PollChoiceMode.SINGLE, options=None, **kwargs):
    return await poll_service.create_poll(
        post_id=PostId(uuid4()),
        choice_mode=mode,
        options=options or ["Steel", "Aluminium", "Titanium"],
        now=NOW,
        **kwargs,
    )


class TestPercentage:
    """Tests for result rounding."""

    @pytest.mark.parametrize(
        "count,total,expected",
        [(1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (0, 0, 0), (3, 3, 100)],
    )
    def test_rounds_half_up(self, count, total, expected):
        assert percentage(count, total) == expected


class TestCreatePoll:
    """Tests for poll creation."""

    @pytest.mark.asyncio
    async def test_options_keep_order_and_allow_duplicates(self, unit_env):
        poll_service = await unit_env.get(PollService)

        poll = await _create_poll(poll_service, options=[" Yes ", "No", "Yes"])

        assert [o.text for o in poll.options] == ["Yes", "No", "Yes"]
        assert poll.total_votes == 0
        assert poll.expires_at is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("options", [["Only one"], [f"Option {i}" for i in range(7)]])
    async def test_option_count_out_of_range(self, unit_env, options):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(ValidationError):
            await _create_poll(poll_service, options=options)

    @pytest.mark.asyncio
    async def test_option_text_too_long(self, unit_env):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(ValidationError):
            await _create_poll(poll_service, options=["ok", "x" * 101])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hours", [-1, 169])
    async def test_expiry_out_of_range(self, unit_env, hours):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(ValidationError):
            await _create_poll(poll_service, expires_in_hours=hours)

    @pytest.mark.asyncio
    async def test_expiry_sets_deadline(self, unit_env):
        poll_service = await unit_env.get(PollService)

        poll = await _create_poll(poll_service, expires_in_hours=24)

        assert poll.expires_at == NOW + timedelta(hours=24)


class TestCastVote:
    """Tests for poll voting."""

    @pytest.mark.asyncio
    async def test_single_choice_vote_is_final(self, unit_env):
        """A second vote is rejected and the first stays counted."""
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll = await _create_poll(poll_service)
        steel, aluminium = poll.options[0].id, poll.options[1].id

        # Act
        view = await poll_service.cast_vote(poll.post_id, UserId("u1"), [steel], NOW)

        # Assert
        assert view.has_voted is True
        assert view.results_visible is True
        assert view.options[0].vote_count == 1
        assert view.options[0].percentage == 100
        assert view.options[0].has_voted is True

        with pytest.raises(AlreadyVotedError):
            await poll_service.cast_vote(poll.post_id, UserId("u1"), [aluminium], NOW)

        stored = await poll_service.get_poll(poll.post_id)
        assert stored.total_votes == 1
        assert [o.vote_count for o in stored.options] == [1, 0, 0]

    @pytest.mark.asyncio
    async def test_single_choice_rejects_several_options(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll = await _create_poll(poll_service)

        with pytest.raises(ValidationError):
            await poll_service.cast_vote(
                poll.post_id, UserId("u1"), [poll.options[0].id, poll.options[1].id], NOW
            )

    @pytest.mark.asyncio
    async def test_multiple_choice_counts_unique_voters(self, unit_env):
        """Option counts may sum past the voter total."""
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll = await _create_poll(poll_service, mode=PollChoiceMode.MULTIPLE)
        a, b, c = (o.id for o in poll.options)

        # Act
        await poll_service.cast_vote(poll.post_id, UserId("u1"), [a, b], NOW)
        view = await poll_service.cast_vote(poll.post_id, UserId("u2"), [a, c], NOW)

        # Assert
        assert view.total_votes == 2
        assert [o.vote_count for o in view.options] == [2, 1, 1]
        assert [o.percentage for o in view.options] == [100, 50, 50]

    @pytest.mark.asyncio
    async def test_repeated_or_foreign_options_rejected(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll = await _create_poll(poll_service, mode=PollChoiceMode.MULTIPLE)
        a = poll.options[0].id

        with pytest.raises(ValidationError):
            await poll_service.cast_vote(poll.post_id, UserId("u1"), [a, a], NOW)
        with pytest.raises(ValidationError):
            await poll_service.cast_vote(poll.post_id, UserId("u1"), [uuid4()], NOW)
        with pytest.raises(ValidationError):
            await poll_service.cast_vote(poll.post_id, UserId("u1"), [], NOW)

    @pytest.mark.asyncio
    async def test_expired_poll_rejects_votes(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll = await _create_poll(poll_service, expires_in_hours=1)

        with pytest.raises(PollClosedError):
            await poll_service.cast_vote(
                poll.post_id, UserId("u1"), [poll.options[0].id], NOW + timedelta(hours=1)
            )

    @pytest.mark.asyncio
    async def test_missing_poll_raises_not_found(self, unit_env):
        poll_service = await unit_env.get(PollService)

        with pytest.raises(NotFoundError):
            await poll_service.cast_vote(PostId(uuid4()), UserId("u1"), [uuid4()], NOW)


class TestProject:
    """Tests for the viewer projection."""

    @pytest.mark.asyncio
    async def test_results_hidden_until_viewer_votes(self, unit_env):
        # Arrange
        poll_service = await unit_env.get(PollService)
        poll = await _create_poll(poll_service)
        await poll_service.cast_vote(poll.post_id, UserId("u1"), [poll.options[0].id], NOW)
        stored = await poll_service.get_poll(poll.post_id)

        # Act
        view = PollService.project(stored, None, NOW)

        # Assert
        assert view.results_visible is False
        assert view.total_votes == 1
        assert all(o.vote_count is None and o.percentage is None for o in view.options)

    @pytest.mark.asyncio
    async def test_results_visible_after_expiry(self, unit_env):
        poll_service = await unit_env.get(PollService)
        poll = await _create_poll(poll_service, expires_in_hours=2)

        view = PollService.project(poll, None, NOW + timedelta(hours=3))

        assert view.is_expired is True
        assert view.results_visible is True
        assert [o.percentage for o in view.options] == [0, 0, 0]
