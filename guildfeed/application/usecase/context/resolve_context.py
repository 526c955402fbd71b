"""Resolve caller context use case."""

import logfire
from pydantic import BaseModel

from guildfeed.application.usecase.base import BaseUseCase
from guildfeed.domain.model import FeedContext
from guildfeed.domain.service import JWTService, MembershipService
from guildfeed.domain.value import GuildId


class ResolveContextRequest(BaseModel):
    """Resolve context request."""

    guild_id: str
    token: str | None = None


class ResolveContextUseCase(BaseUseCase):
    """Turn a request's credentials into a FeedContext.

    An absent, expired or malformed token yields an anonymous context rather
    than an error; operations that need a user reject it themselves.
    """

    def __init__(self, jwt_service: JWTService, membership_service: MembershipService) -> None:
        """Initialize resolve context use case.

        Args:
            jwt_service: JWT domain service
            membership_service: Membership domain service
        """
        self.jwt_service = jwt_service
        self.membership_service = membership_service

    async def execute(self, request: ResolveContextRequest) -> FeedContext:
        """Resolve the caller's identity, membership and privileges.

        Args:
            request: Guild ID and optional bearer token

        Returns:
            Caller context for the guild
        """
        user_id = self.jwt_service.get_user_id_from_token(request.token)
        with logfire.span(
            "resolve_context.execute", guild_id=request.guild_id, user_id=user_id
        ):
            return await self.membership_service.resolve_context(
                GuildId(request.guild_id), user_id
            )
