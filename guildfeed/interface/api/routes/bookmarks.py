"""Bookmark routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query

from guildfeed.application.usecase.bookmark import (
    ListBookmarksRequest,
    ListBookmarksResponse,
    ListBookmarksUseCase,
    ToggleBookmarkRequest,
    ToggleBookmarkResponse,
    ToggleBookmarkUseCase,
)
from guildfeed.application.usecase.context import ResolveContextUseCase
from guildfeed.domain.error import DomainError
from guildfeed.domain.value import PostId
from guildfeed.interface.api.auth import bearer_token, resolve_caller
from guildfeed.interface.error import to_http_exception

router = APIRouter(prefix="/guilds/{guild_id}", tags=["bookmarks"], route_class=DishkaRoute)


@router.post("/posts/{post_id}/bookmark", response_model=ToggleBookmarkResponse)
async def toggle_bookmark(
    guild_id: str,
    post_id: UUID,
    toggle_bookmark_use_case: FromDishka[ToggleBookmarkUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> ToggleBookmarkResponse:
    """Add or remove the caller's bookmark on a post."""
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await toggle_bookmark_use_case.execute(
            ToggleBookmarkRequest(context=context, post_id=PostId(post_id))
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/bookmarks", response_model=ListBookmarksResponse)
async def list_bookmarks(
    guild_id: str,
    list_bookmarks_use_case: FromDishka[ListBookmarksUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    token: str | None = Depends(bearer_token),
) -> ListBookmarksResponse:
    """List the caller's bookmarked posts, in bookmarking order."""
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await list_bookmarks_use_case.execute(
            ListBookmarksRequest(context=context, page=page, limit=limit)
        )
    except DomainError as e:
        raise to_http_exception(e)
