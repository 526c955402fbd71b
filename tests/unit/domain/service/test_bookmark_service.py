"""Unit tests for BookmarkService."""

from uuid import uuid4

import pytest

from guildfeed.domain.service import BookmarkService
from guildfeed.domain.value import GuildId, PostId, UserId
from tests.conftest import GUILD
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

USER = UserId("u1")


class TestBookmarkService:
    """Tests for the per-user saved set."""

    @pytest.mark.asyncio
    async def test_toggle_round_trip(self, unit_env):
        bookmark_service = await unit_env.get(BookmarkService)
        post_id = PostId(uuid4())

        assert await bookmark_service.toggle_bookmark(USER, GUILD, post_id) is True
        assert await bookmark_service.bookmarked_ids(USER, [post_id]) == {post_id}
        assert await bookmark_service.toggle_bookmark(USER, GUILD, post_id) is False
        assert await bookmark_service.bookmarked_ids(USER, [post_id]) == set()

    @pytest.mark.asyncio
    async def test_listed_in_order_saved(self, unit_env):
        bookmark_service = await unit_env.get(BookmarkService)
        first, second, third = (PostId(uuid4()) for _ in range(3))
        for post_id in (second, first, third):
            await bookmark_service.toggle_bookmark(USER, GUILD, post_id)

        assert await bookmark_service.bookmarked_post_ids(USER, GUILD) == [second, first, third]

    @pytest.mark.asyncio
    async def test_sets_are_per_user_and_guild(self, unit_env):
        bookmark_service = await unit_env.get(BookmarkService)
        post_id = PostId(uuid4())
        await bookmark_service.toggle_bookmark(USER, GUILD, post_id)

        assert await bookmark_service.bookmarked_post_ids(UserId("u2"), GUILD) == []
        assert await bookmark_service.bookmarked_post_ids(USER, GuildId("guild-2")) == []

    @pytest.mark.asyncio
    async def test_delete_for_post_removes_from_every_user(self, unit_env):
        bookmark_service = await unit_env.get(BookmarkService)
        post_id = PostId(uuid4())
        await bookmark_service.toggle_bookmark(USER, GUILD, post_id)
        await bookmark_service.toggle_bookmark(UserId("u2"), GUILD, post_id)

        removed = await bookmark_service.delete_bookmarks_for_post(post_id)

        assert removed == 2
        assert await bookmark_service.bookmarked_post_ids(USER, GUILD) == []
