"""Unit tests for CastPollVoteUseCase."""

import pytest

from guildfeed.application.usecase.poll import CastPollVoteRequest, CastPollVoteUseCase
from guildfeed.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    PollDraft,
)
from guildfeed.domain.error import AlreadyVotedError, ForbiddenError
from guildfeed.domain.value import ExpertRole, PollOptionId, PostId, PostTag
from tests.conftest import make_context
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _post_with_poll(unit_env):
    create = await unit_env.get(CreatePostUseCase)
    return await create.execute(
        CreatePostRequest(
            context=make_context("author-1"),
            title="Shift pattern poll",
            body="Which rota works best for the workshop?",
            tag=PostTag.DISCUSSION,
            poll=PollDraft(options=["Earlies", "Lates"]),
        )
    )


class TestCastPollVoteUseCase:
    """Tests for CastPollVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_reveals_results_to_voter_only(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastPollVoteUseCase)
        get_post = await unit_env.get(GetPostUseCase)
        item = await _post_with_poll(unit_env)
        option = PollOptionId(item.poll.options[1].id)

        # Act
        view = await use_case.execute(
            CastPollVoteRequest(
                context=make_context("voter"), post_id=PostId(item.id), option_ids=[option]
            )
        )

        # Assert
        assert view.has_voted is True
        assert [o.vote_count for o in view.options] == [0, 1]
        assert [o.percentage for o in view.options] == [0, 100]

        other = await get_post.execute(
            GetPostRequest(context=make_context("bystander"), post_id=PostId(item.id))
        )
        assert other.poll.results_visible is False
        assert other.poll.total_votes == 1
        assert other.poll.options[1].vote_count is None

    @pytest.mark.asyncio
    async def test_second_vote_rejected(self, unit_env):
        use_case = await unit_env.get(CastPollVoteUseCase)
        item = await _post_with_poll(unit_env)
        first, second = (PollOptionId(o.id) for o in item.poll.options)
        context = make_context("voter")

        await use_case.execute(
            CastPollVoteRequest(context=context, post_id=PostId(item.id), option_ids=[first])
        )
        with pytest.raises(AlreadyVotedError):
            await use_case.execute(
                CastPollVoteRequest(context=context, post_id=PostId(item.id), option_ids=[second])
            )

    @pytest.mark.asyncio
    async def test_non_member_forbidden(self, unit_env):
        use_case = await unit_env.get(CastPollVoteUseCase)
        item = await _post_with_poll(unit_env)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                CastPollVoteRequest(
                    context=make_context("outsider", role=ExpertRole.MASTER, is_member=False),
                    post_id=PostId(item.id),
                    option_ids=[PollOptionId(item.poll.options[0].id)],
                )
            )
