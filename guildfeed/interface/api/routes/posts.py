"""Post routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from guildfeed.application.usecase.context import ResolveContextUseCase
from guildfeed.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PollDraft,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from guildfeed.application.usecase.view import PostItem
from guildfeed.domain.error import DomainError
from guildfeed.domain.value import PostId, PostSortOrder, PostTag, TimeWindow
from guildfeed.interface.api.auth import bearer_token, resolve_caller
from guildfeed.interface.error import to_http_exception

router = APIRouter(prefix="/guilds/{guild_id}/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post.

    Lengths are checked by the domain so that every caller gets the same
    error type.
    """

    title: str
    body: str
    tag: PostTag
    poll: Optional[PollDraft] = None


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    guild_id: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    sort: PostSortOrder = Query(default=PostSortOrder.HOT),
    tag: Optional[PostTag] = Query(default=None),
    time_window: Optional[TimeWindow] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    bookmarked_only: bool = Query(default=False),
    token: str | None = Depends(bearer_token),
) -> ListPostsResponse:
    """List a guild's feed.

    Public read; authenticated callers also get ``has_voted`` and
    ``is_bookmarked``.

    Args:
        guild_id: Guild whose feed is listed
        list_posts_use_case: List posts use case from DI
        resolve_context: Caller context use case from DI
        sort: Ranking mode (hot, new, top)
        tag: Optional tag filter
        time_window: Window for ``top`` (week, month, all)
        page: 1-based page number
        limit: Page size
        bookmarked_only: Restrict to the caller's bookmarks
        token: JWT from header or cookie

    Returns:
        One page of posts
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                context=context,
                sort=sort,
                tag=tag,
                time_window=time_window,
                page=page,
                limit=limit,
                bookmarked_only=bookmarked_only,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    guild_id: str,
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> PostItem:
    """Create a post, optionally with a poll.

    Requires authentication and the ``can_post`` capability.

    Raises:
        HTTPException: 401, 403 or 422 from the domain
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                context=context,
                title=request.title,
                body=request.body,
                tag=request.tag,
                poll=request.poll,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{post_id}", response_model=PostItem)
async def get_post(
    guild_id: str,
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> PostItem:
    """Get a single post."""
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await get_post_use_case.execute(
            GetPostRequest(context=context, post_id=PostId(post_id))
        )
    except DomainError as e:
        raise to_http_exception(e)


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post.

    ``version`` is the post version the editor last saw; an edit based on
    an older version is rejected with 409.
    """

    title: Optional[str] = None
    body: Optional[str] = None
    tag: Optional[PostTag] = None
    version: Optional[int] = None


@router.put("/{post_id}", response_model=PostItem)
async def update_post(
    guild_id: str,
    post_id: UUID,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> PostItem:
    """Edit a post's title, body or tag.

    Allowed for the author and for members with the ``can_edit_others``
    capability.

    Raises:
        HTTPException: 401, 403, 404, 409 or 422 from the domain
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                context=context,
                post_id=PostId(post_id),
                title=request.title,
                body=request.body,
                tag=request.tag,
                version=request.version,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
