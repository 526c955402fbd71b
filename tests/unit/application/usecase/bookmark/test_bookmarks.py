"""Unit tests for the bookmark use cases."""

from uuid import uuid4

import pytest

from guildfeed.application.usecase.bookmark import (
    ListBookmarksRequest,
    ListBookmarksUseCase,
    ToggleBookmarkRequest,
    ToggleBookmarkUseCase,
)
from guildfeed.domain.error import NotFoundError, UnauthorizedError
from guildfeed.domain.repository import PostRepository
from guildfeed.domain.value import PostId
from tests.conftest import make_context, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestBookmarkUseCases:
    """Tests for ToggleBookmarkUseCase and ListBookmarksUseCase."""

    @pytest.mark.asyncio
    async def test_saved_posts_listed_in_order_saved(self, unit_env):
        # Arrange
        toggle = await unit_env.get(ToggleBookmarkUseCase)
        list_bookmarks = await unit_env.get(ListBookmarksUseCase)
        post_repo = await unit_env.get(PostRepository)
        posts = [await post_repo.save(make_post()) for _ in range(3)]
        context = make_context()

        # Act
        for post in (posts[2], posts[0], posts[1]):
            await toggle.execute(ToggleBookmarkRequest(context=context, post_id=post.id))
        response = await list_bookmarks.execute(ListBookmarksRequest(context=context))

        # Assert
        assert [item.id for item in response.data] == [
            str(posts[2].id),
            str(posts[0].id),
            str(posts[1].id),
        ]
        assert all(item.is_bookmarked for item in response.data)
        assert response.total == 3

    @pytest.mark.asyncio
    async def test_toggle_twice_removes(self, unit_env):
        toggle = await unit_env.get(ToggleBookmarkUseCase)
        list_bookmarks = await unit_env.get(ListBookmarksUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        request = ToggleBookmarkRequest(context=make_context(), post_id=post.id)

        assert (await toggle.execute(request)).bookmarked is True
        assert (await toggle.execute(request)).bookmarked is False

        response = await list_bookmarks.execute(ListBookmarksRequest(context=make_context()))
        assert response.data == []

    @pytest.mark.asyncio
    async def test_closed_post_can_be_bookmarked_by_outsider(self, unit_env):
        """Bookmarking needs a user but not membership."""
        toggle = await unit_env.get(ToggleBookmarkUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(is_closed=True))

        response = await toggle.execute(
            ToggleBookmarkRequest(context=make_context(is_member=False), post_id=post.id)
        )

        assert response.bookmarked is True

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        toggle = await unit_env.get(ToggleBookmarkUseCase)
        list_bookmarks = await unit_env.get(ListBookmarksUseCase)
        post_repo = await unit_env.get(PostRepository)
        context = make_context()
        posts = [await post_repo.save(make_post()) for _ in range(3)]
        for post in posts:
            await toggle.execute(ToggleBookmarkRequest(context=context, post_id=post.id))

        response = await list_bookmarks.execute(
            ListBookmarksRequest(context=context, page=2, limit=2)
        )

        assert [item.id for item in response.data] == [str(posts[2].id)]
        assert response.total == 3

    @pytest.mark.asyncio
    async def test_unknown_post_and_anonymous_rejected(self, unit_env):
        toggle = await unit_env.get(ToggleBookmarkUseCase)
        list_bookmarks = await unit_env.get(ListBookmarksUseCase)

        with pytest.raises(NotFoundError):
            await toggle.execute(
                ToggleBookmarkRequest(context=make_context(), post_id=PostId(uuid4()))
            )
        with pytest.raises(UnauthorizedError):
            await list_bookmarks.execute(ListBookmarksRequest(context=make_context(None)))
