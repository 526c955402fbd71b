"""Unit tests for CreatePostUseCase."""

import pytest

from guildfeed.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    PollDraft,
)
from guildfeed.domain.error import ForbiddenError, UnauthorizedError, ValidationError
from guildfeed.domain.value import ExpertRole, PollChoiceMode, PostSortOrder, PostTag, UserType
from tests.conftest import make_context
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _request(context, **overrides):
    fields = {
        "context": context,
        "title": "Which alloy for marine fittings?",
        "body": "Salt spray is eating our brackets.",
        "tag": PostTag.QUESTION,
    }
    fields.update(overrides)
    return CreatePostRequest(**fields)


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_member_creates_post(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        context = make_context()

        # Act
        item = await use_case.execute(_request(context))

        # Assert
        assert item.author.id == "member-1"
        assert item.upvote_count == 0
        assert item.has_voted is False
        assert item.is_bookmarked is False
        assert item.poll is None

    @pytest.mark.asyncio
    async def test_post_with_poll(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        item = await use_case.execute(
            _request(
                make_context(),
                poll=PollDraft(
                    options=["316L", "Duplex", "Bronze"],
                    choice_mode=PollChoiceMode.MULTIPLE,
                    expires_in_hours=48,
                ),
            )
        )

        assert item.poll is not None
        assert [o.text for o in item.poll.options] == ["316L", "Duplex", "Bronze"]
        assert item.poll.results_visible is False
        assert item.poll.choice_mode == PollChoiceMode.MULTIPLE

    @pytest.mark.asyncio
    async def test_invalid_poll_leaves_no_post(self, unit_env):
        """A bad poll is rejected before the post is written."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        list_posts = await unit_env.get(ListPostsUseCase)
        context = make_context()

        # Act
        with pytest.raises(ValidationError):
            await use_case.execute(_request(context, poll=PollDraft(options=["Only one"])))

        # Assert
        listing = await list_posts.execute(
            ListPostsRequest(context=context, sort=PostSortOrder.NEW)
        )
        assert listing.total == 0

    @pytest.mark.asyncio
    async def test_anonymous_caller_unauthorized(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(_request(make_context(user_id=None)))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "context",
        [
            make_context(role=ExpertRole.RECRUIT),
            make_context(user_type=UserType.CANDIDATE, role=None),
            make_context(role=ExpertRole.MASTER, is_member=False),
        ],
        ids=["recruit", "candidate", "non-member"],
    )
    async def test_caller_without_post_capability_forbidden(self, unit_env, context):
        use_case = await unit_env.get(CreatePostUseCase)

        with pytest.raises(ForbiddenError):
            await use_case.execute(_request(context))
