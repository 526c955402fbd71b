"""Reply routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from guildfeed.application.usecase.context import ResolveContextUseCase
from guildfeed.application.usecase.reply import (
    CreateReplyRequest,
    CreateReplyUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
)
from guildfeed.application.usecase.view import ReplyItem
from guildfeed.domain.error import DomainError
from guildfeed.domain.value import PostId, ReplyId, ReplySortOrder
from guildfeed.interface.api.auth import bearer_token, resolve_caller
from guildfeed.interface.error import to_http_exception

router = APIRouter(
    prefix="/guilds/{guild_id}/posts/{post_id}/replies",
    tags=["replies"],
    route_class=DishkaRoute,
)


class CreateReplyAPIRequest(BaseModel):
    """API request for creating a reply."""

    body: str
    parent_reply_id: Optional[UUID] = None


@router.get("", response_model=GetRepliesResponse)
async def get_replies(
    guild_id: str,
    post_id: UUID,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    parent_reply_id: Optional[UUID] = Query(default=None),
    sort: ReplySortOrder = Query(default=ReplySortOrder.NEW),
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
    token: str | None = Depends(bearer_token),
) -> GetRepliesResponse:
    """Get one level of a post's replies, oldest first.

    Args:
        guild_id: Guild of the post
        post_id: Post UUID
        get_replies_use_case: Get replies use case from DI
        resolve_context: Caller context use case from DI
        parent_reply_id: Expand the children of this reply instead of the top level
        sort: Reply ordering (chronological only)
        page: 1-based page number
        limit: Page size
        token: JWT from header or cookie

    Returns:
        One page of replies
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await get_replies_use_case.execute(
            GetRepliesRequest(
                context=context,
                post_id=PostId(post_id),
                parent_reply_id=ReplyId(parent_reply_id) if parent_reply_id else None,
                sort=sort,
                page=page,
                limit=limit,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("", response_model=ReplyItem, status_code=status.HTTP_201_CREATED)
async def create_reply(
    guild_id: str,
    post_id: UUID,
    request: CreateReplyAPIRequest,
    create_reply_use_case: FromDishka[CreateReplyUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> ReplyItem:
    """Reply to a post, or to a reply when ``parent_reply_id`` is set.

    Raises:
        HTTPException: 409 when the post is closed, 422 when nesting is too deep
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await create_reply_use_case.execute(
            CreateReplyRequest(
                context=context,
                post_id=PostId(post_id),
                body=request.body,
                parent_reply_id=ReplyId(request.parent_reply_id) if request.parent_reply_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
