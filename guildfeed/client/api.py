"""Async HTTP client for the guild feed API."""

from typing import Any, Optional
from uuid import UUID

import httpx
import logfire

from guildfeed.application.usecase.bookmark import ListBookmarksResponse, ToggleBookmarkResponse
from guildfeed.application.usecase.moderation import ModeratePostResponse
from guildfeed.application.usecase.post import ListPostsResponse
from guildfeed.application.usecase.reply import GetRepliesResponse
from guildfeed.application.usecase.view import PostItem, ReplyItem
from guildfeed.application.usecase.vote import CastVoteResponse
from guildfeed.domain.model import PollView
from guildfeed.domain.value import (
    ModerationAction,
    PollChoiceMode,
    PostSortOrder,
    PostTag,
    ReplySortOrder,
    TimeWindow,
    VoteTargetType,
)


class FeedApiError(Exception):
    """Non-2xx response from the feed API.

    ``error`` is the domain error name (``PostClosedError``...) when the
    server reported one.
    """

    def __init__(self, status_code: int, error: Optional[str], message: str):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(f"{status_code} {error or 'HTTPError'}: {message}")


class FeedApiClient:
    """Client for one guild feed server.

    Usage:
        async with FeedApiClient("https://feed.example.com", token=jwt) as client:
            page = await client.list_posts("guild-1", sort=PostSortOrder.NEW)
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Server base URL
            token: JWT sent as a bearer token (None for anonymous reads)
            timeout_seconds: Request timeout
            http_client: Preconfigured httpx client (for custom transports)
        """
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout_seconds
        )
        self._client.headers.update(headers)

    async def __aenter__(self) -> "FeedApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logfire.error("Feed API request failed", method=method, path=path, error=str(e))
            raise

        if response.is_success:
            return response.json()

        error: Optional[str] = None
        message = response.text
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = None
        if isinstance(detail, dict):
            error = detail.get("error")
            message = detail.get("message", message)
        elif detail is not None:
            message = str(detail)
        logfire.warn(
            "Feed API error response",
            method=method,
            path=path,
            status_code=response.status_code,
            error=error,
        )
        raise FeedApiError(response.status_code, error, message)

    async def health(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    async def list_posts(
        self,
        guild_id: str,
        sort: PostSortOrder = PostSortOrder.HOT,
        tag: Optional[PostTag] = None,
        time_window: Optional[TimeWindow] = None,
        page: int = 1,
        limit: Optional[int] = None,
        bookmarked_only: bool = False,
    ) -> ListPostsResponse:
        """List one page of a guild's feed."""
        params: dict[str, Any] = {"sort": sort.value, "page": page}
        if tag is not None:
            params["tag"] = tag.value
        if time_window is not None:
            params["time_window"] = time_window.value
        if limit is not None:
            params["limit"] = limit
        if bookmarked_only:
            params["bookmarked_only"] = "true"
        data = await self._request("GET", f"/guilds/{guild_id}/posts", params=params)
        return ListPostsResponse.model_validate(data)

    async def get_post(self, guild_id: str, post_id: UUID) -> PostItem:
        data = await self._request("GET", f"/guilds/{guild_id}/posts/{post_id}")
        return PostItem.model_validate(data)

    async def create_post(
        self,
        guild_id: str,
        title: str,
        body: str,
        tag: PostTag,
        poll_options: Optional[list[str]] = None,
        poll_choice_mode: PollChoiceMode = PollChoiceMode.SINGLE,
        poll_expires_in_hours: Optional[int] = None,
    ) -> PostItem:
        """Create a post; pass ``poll_options`` to attach a poll."""
        payload: dict[str, Any] = {"title": title, "body": body, "tag": tag.value}
        if poll_options is not None:
            payload["poll"] = {
                "options": poll_options,
                "choice_mode": poll_choice_mode.value,
                "expires_in_hours": poll_expires_in_hours,
            }
        data = await self._request("POST", f"/guilds/{guild_id}/posts", json=payload)
        return PostItem.model_validate(data)

    async def update_post(
        self,
        guild_id: str,
        post_id: UUID,
        title: Optional[str] = None,
        body: Optional[str] = None,
        tag: Optional[PostTag] = None,
        version: Optional[int] = None,
    ) -> PostItem:
        """Edit a post; omitted fields are left unchanged."""
        payload: dict[str, Any] = {"version": version}
        if title is not None:
            payload["title"] = title
        if body is not None:
            payload["body"] = body
        if tag is not None:
            payload["tag"] = tag.value
        data = await self._request(
            "PUT", f"/guilds/{guild_id}/posts/{post_id}", json=payload
        )
        return PostItem.model_validate(data)

    async def get_replies(
        self,
        guild_id: str,
        post_id: UUID,
        parent_reply_id: Optional[UUID] = None,
        sort: ReplySortOrder = ReplySortOrder.NEW,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> GetRepliesResponse:
        """Load one level of replies (top level, or children of a reply)."""
        params: dict[str, Any] = {"page": page, "sort": sort.value}
        if parent_reply_id is not None:
            params["parent_reply_id"] = str(parent_reply_id)
        if limit is not None:
            params["limit"] = limit
        data = await self._request(
            "GET", f"/guilds/{guild_id}/posts/{post_id}/replies", params=params
        )
        return GetRepliesResponse.model_validate(data)

    async def create_reply(
        self,
        guild_id: str,
        post_id: UUID,
        body: str,
        parent_reply_id: Optional[UUID] = None,
    ) -> ReplyItem:
        payload = {
            "body": body,
            "parent_reply_id": str(parent_reply_id) if parent_reply_id else None,
        }
        data = await self._request(
            "POST", f"/guilds/{guild_id}/posts/{post_id}/replies", json=payload
        )
        return ReplyItem.model_validate(data)

    async def cast_vote(
        self, guild_id: str, target_type: VoteTargetType, target_id: UUID
    ) -> CastVoteResponse:
        """Toggle an upvote; pair with ``OptimisticVote`` for instant UI feedback."""
        data = await self._request(
            "POST",
            f"/guilds/{guild_id}/votes",
            json={"target_type": target_type.value, "target_id": str(target_id)},
        )
        return CastVoteResponse.model_validate(data)

    async def cast_poll_vote(
        self, guild_id: str, post_id: UUID, option_ids: list[UUID]
    ) -> PollView:
        data = await self._request(
            "POST",
            f"/guilds/{guild_id}/posts/{post_id}/poll/vote",
            json={"option_ids": [str(option_id) for option_id in option_ids]},
        )
        return PollView.model_validate(data)

    async def moderate_post(
        self,
        guild_id: str,
        post_id: UUID,
        action: ModerationAction,
        duplicate_of_post_id: Optional[UUID] = None,
    ) -> ModeratePostResponse:
        payload: dict[str, Any] = {"action": action.value}
        if duplicate_of_post_id is not None:
            payload["duplicate_of_post_id"] = str(duplicate_of_post_id)
        data = await self._request(
            "POST", f"/guilds/{guild_id}/posts/{post_id}/moderate", json=payload
        )
        return ModeratePostResponse.model_validate(data)

    async def accept_answer(self, guild_id: str, post_id: UUID, reply_id: UUID) -> PostItem:
        data = await self._request(
            "POST",
            f"/guilds/{guild_id}/posts/{post_id}/accept",
            json={"reply_id": str(reply_id)},
        )
        return PostItem.model_validate(data)

    async def remove_accepted_answer(self, guild_id: str, post_id: UUID) -> PostItem:
        data = await self._request("DELETE", f"/guilds/{guild_id}/posts/{post_id}/accept")
        return PostItem.model_validate(data)

    async def toggle_bookmark(self, guild_id: str, post_id: UUID) -> bool:
        data = await self._request("POST", f"/guilds/{guild_id}/posts/{post_id}/bookmark")
        return ToggleBookmarkResponse.model_validate(data).bookmarked

    async def list_bookmarks(
        self, guild_id: str, page: int = 1, limit: Optional[int] = None
    ) -> ListBookmarksResponse:
        params: dict[str, Any] = {"page": page}
        if limit is not None:
            params["limit"] = limit
        data = await self._request("GET", f"/guilds/{guild_id}/bookmarks", params=params)
        return ListBookmarksResponse.model_validate(data)
