"""Moderation and accepted answer routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from guildfeed.application.usecase.context import ResolveContextUseCase
from guildfeed.application.usecase.moderation import (
    AcceptAnswerRequest,
    AcceptAnswerUseCase,
    ModeratePostRequest,
    ModeratePostResponse,
    ModeratePostUseCase,
    RemoveAcceptedAnswerRequest,
    RemoveAcceptedAnswerUseCase,
)
from guildfeed.application.usecase.view import PostItem
from guildfeed.domain.error import DomainError
from guildfeed.domain.value import ModerationAction, PostId, ReplyId
from guildfeed.interface.api.auth import bearer_token, resolve_caller
from guildfeed.interface.error import to_http_exception

router = APIRouter(
    prefix="/guilds/{guild_id}/posts", tags=["moderation"], route_class=DishkaRoute
)


class ModeratePostAPIRequest(BaseModel):
    """API request for a moderation action."""

    action: ModerationAction
    duplicate_of_post_id: Optional[UUID] = None


class AcceptAnswerAPIRequest(BaseModel):
    """API request for accepting an answer."""

    reply_id: UUID


@router.post("/{post_id}/moderate", response_model=ModeratePostResponse)
async def moderate_post(
    guild_id: str,
    post_id: UUID,
    request: ModeratePostAPIRequest,
    moderate_post_use_case: FromDishka[ModeratePostUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> ModeratePostResponse:
    """Pin, unpin, close, reopen, delete or mark a post as duplicate.

    Each action requires its own capability.

    Args:
        guild_id: Guild of the post
        post_id: Post UUID
        request: Action and, for ``mark_duplicate``, the original post
        moderate_post_use_case: Moderate post use case from DI
        resolve_context: Caller context use case from DI
        token: JWT from header or cookie

    Returns:
        The applied action and the post's new state
    """
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await moderate_post_use_case.execute(
            ModeratePostRequest(
                context=context,
                post_id=PostId(post_id),
                action=request.action,
                duplicate_of_post_id=(
                    PostId(request.duplicate_of_post_id)
                    if request.duplicate_of_post_id
                    else None
                ),
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/{post_id}/accept", response_model=PostItem)
async def accept_answer(
    guild_id: str,
    post_id: UUID,
    request: AcceptAnswerAPIRequest,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> PostItem:
    """Accept a reply as the answer to a question post."""
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await accept_answer_use_case.execute(
            AcceptAnswerRequest(
                context=context, post_id=PostId(post_id), reply_id=ReplyId(request.reply_id)
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/{post_id}/accept", response_model=PostItem)
async def remove_accepted_answer(
    guild_id: str,
    post_id: UUID,
    remove_accepted_answer_use_case: FromDishka[RemoveAcceptedAnswerUseCase],
    resolve_context: FromDishka[ResolveContextUseCase],
    token: str | None = Depends(bearer_token),
) -> PostItem:
    """Clear a question's accepted answer."""
    context = await resolve_caller(resolve_context, guild_id, token)
    try:
        return await remove_accepted_answer_use_case.execute(
            RemoveAcceptedAnswerRequest(context=context, post_id=PostId(post_id))
        )
    except DomainError as e:
        raise to_http_exception(e)
