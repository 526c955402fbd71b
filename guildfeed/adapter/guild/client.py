"""Guild directory clients.

The guild directory is the external service that owns guilds, their members
and expert roles. The feed only asks it one question: what is this user's
standing in this guild.
"""

from typing import Any

import httpx
import logfire

from guildfeed.adapter.error import GuildDirectoryError
from guildfeed.domain.service.membership_service import GuildDirectory
from guildfeed.domain.value import ExpertRole, GuildId, Membership, UserId, UserType


class GuildDirectoryClient(GuildDirectory):
    """Base class for guild directory clients.

    Provides type distinction for dependency injection.
    """

    pass


def _enum_or_none(enum_cls, value):
    try:
        return enum_cls(value) if value else None
    except ValueError:
        return None


def parse_membership(payload: dict[str, Any]) -> Membership:
    """Convert a membership-check response body to a Membership.

    Unknown user types and roles are treated as absent rather than failing
    the request.

    Args:
        payload: JSON body (``isMember``, ``userType``, ``role``,
            ``displayName``, ``reputation``)

    Returns:
        Parsed membership
    """
    return Membership(
        is_member=bool(payload.get("isMember", False)),
        user_type=_enum_or_none(UserType, payload.get("userType")),
        expert_role=_enum_or_none(ExpertRole, payload.get("role")),
        display_name=payload.get("displayName"),
        reputation=int(payload.get("reputation") or 0),
    )


class RealGuildDirectoryClient(GuildDirectoryClient):
    """Guild directory client over HTTP."""

    def __init__(self, base_url: str, timeout_seconds: float = 5.0) -> None:
        """Initialize guild directory client.

        Args:
            base_url: Base URL of the guild service
            timeout_seconds: Request timeout
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    async def get_membership(self, guild_id: GuildId, user_id: UserId) -> Membership:
        """Fetch a user's membership from the guild service.

        A 404 means the user is not a member.

        Raises:
            GuildDirectoryError: If the service fails or is unreachable
        """
        url = f"{self.base_url}/api/guilds/membership/{user_id}/{guild_id}"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=self.timeout_seconds)
        except httpx.HTTPError as e:
            logfire.error("Guild directory HTTP error", guild_id=guild_id, error=str(e))
            raise GuildDirectoryError(f"HTTP error fetching membership: {e}")

        if response.status_code == 404:
            return Membership()
        if response.status_code != 200:
            logfire.error(
                "Guild directory request failed",
                guild_id=guild_id,
                status_code=response.status_code,
                error=response.text,
            )
            raise GuildDirectoryError(f"Membership request failed: {response.status_code}")

        return parse_membership(response.json())


class MockGuildDirectoryClient(GuildDirectoryClient):
    """In-memory guild directory for development and testing.

    Users are outsiders until a membership is registered for them.
    """

    def __init__(self) -> None:
        self._memberships: dict[tuple[GuildId, UserId], Membership] = {}

    def set_membership(
        self, guild_id: GuildId, user_id: UserId, membership: Membership
    ) -> None:
        """Register a user's standing in a guild."""
        self._memberships[(guild_id, user_id)] = membership

    async def get_membership(self, guild_id: GuildId, user_id: UserId) -> Membership:
        """Return the registered membership, or a non-member one."""
        return self._memberships.get((guild_id, user_id), Membership())
