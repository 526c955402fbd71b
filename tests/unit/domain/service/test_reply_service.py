"""Unit tests for ReplyService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from guildfeed.domain.error import (
    DepthExceededError,
    NotFoundError,
    PostClosedError,
    ValidationError,
)
from guildfeed.domain.repository import PostRepository
from guildfeed.domain.service import ReplyService
from guildfeed.domain.value import ReplyId
from tests.conftest import make_author, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


async def _saved_post(unit_env, **overrides):
    post_repo = await unit_env.get(PostRepository)
    return await post_repo.save(make_post(**overrides))


class TestCreateReply:
    """Tests for reply creation."""

    @pytest.mark.asyncio
    async def test_top_level_reply_has_depth_zero(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post_repo = await unit_env.get(PostRepository)
        post = await _saved_post(unit_env)

        # Act
        reply = await reply_service.create_reply(post, make_author("v"), " Good point ", NOW)

        # Assert
        assert reply.depth == 0
        assert reply.parent_reply_id is None
        assert reply.body == "Good point"
        stored = await post_repo.find_by_id(post.id)
        assert stored.reply_count == 1

    @pytest.mark.asyncio
    async def test_nested_reply_increments_parent_child_count(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _saved_post(unit_env)
        parent = await reply_service.create_reply(post, make_author("v"), "Parent", NOW)

        child = await reply_service.create_reply(
            post, make_author("w"), "Child", NOW, parent_reply_id=parent.id
        )

        assert child.depth == 1
        assert (await reply_service.get_reply(post.id, parent.id)).child_count == 1

    @pytest.mark.asyncio
    async def test_reply_deeper_than_max_depth_is_rejected(self, unit_env):
        """Depths 0-3 are allowed; a fifth level is not."""
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post = await _saved_post(unit_env)
        parent = None
        for level in range(4):
            parent = await reply_service.create_reply(
                post,
                make_author(),
                f"Level {level}",
                NOW,
                parent_reply_id=parent.id if parent else None,
            )
        assert parent.depth == 3
        assert parent.child_count == 0

        # Act / Assert
        with pytest.raises(DepthExceededError):
            await reply_service.create_reply(
                post, make_author(), "Too deep", NOW, parent_reply_id=parent.id
            )

    @pytest.mark.asyncio
    async def test_closed_post_rejects_replies(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _saved_post(unit_env, is_closed=True)

        with pytest.raises(PostClosedError):
            await reply_service.create_reply(post, make_author(), "Late reply", NOW)

    @pytest.mark.asyncio
    async def test_parent_from_another_post_is_not_found(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _saved_post(unit_env)
        other = await _saved_post(unit_env)
        foreign = await reply_service.create_reply(other, make_author(), "Elsewhere", NOW)

        with pytest.raises(NotFoundError):
            await reply_service.create_reply(
                post, make_author(), "Cross-post", NOW, parent_reply_id=foreign.id
            )

    @pytest.mark.asyncio
    async def test_blank_body_rejected(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _saved_post(unit_env)

        with pytest.raises(ValidationError):
            await reply_service.create_reply(post, make_author(), "   ", NOW)


class TestGetReplies:
    """Tests for loading one level of the tree."""

    @pytest.mark.asyncio
    async def test_levels_are_loaded_separately_oldest_first(self, unit_env):
        # Arrange
        reply_service = await unit_env.get(ReplyService)
        post = await _saved_post(unit_env)
        later = await reply_service.create_reply(
            post, make_author(), "Later", NOW + timedelta(minutes=5)
        )
        earlier = await reply_service.create_reply(post, make_author(), "Earlier", NOW)
        await reply_service.create_reply(
            post, make_author(), "Nested", NOW, parent_reply_id=earlier.id
        )

        # Act
        top, total = await reply_service.get_replies(post.id)
        nested, nested_total = await reply_service.get_replies(post.id, earlier.id)

        # Assert
        assert [r.id for r in top] == [earlier.id, later.id]
        assert total == 2
        assert [r.body for r in nested] == ["Nested"]
        assert nested_total == 1
        assert top[0].child_count == 1

    @pytest.mark.asyncio
    async def test_unknown_parent_raises_not_found(self, unit_env):
        reply_service = await unit_env.get(ReplyService)
        post = await _saved_post(unit_env)

        with pytest.raises(NotFoundError):
            await reply_service.get_replies(post.id, ReplyId(uuid4()))
