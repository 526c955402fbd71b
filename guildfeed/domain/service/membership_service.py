"""Guild membership resolution."""

import logfire

from guildfeed.domain.model.author import Author
from guildfeed.domain.model.context import FeedContext
from guildfeed.domain.value import DisplayName, GuildId, Membership, UserId

from .base import Service
from .privileges import resolve_privileges


class GuildDirectory:
    """Interface to the service that owns guilds, members and roles."""

    async def get_membership(self, guild_id: GuildId, user_id: UserId) -> Membership:
        """Look up a user's standing in a guild.

        Args:
            guild_id: Guild ID
            user_id: User ID

        Returns:
            Membership (``is_member`` False for outsiders)
        """
        raise NotImplementedError


class MembershipService(Service):
    """Builds the caller context for feed operations."""

    def __init__(self, guild_directory: GuildDirectory) -> None:
        """Initialize membership service.

        Args:
            guild_directory: Guild directory client
        """
        self.guild_directory = guild_directory

    async def resolve_context(self, guild_id: GuildId, user_id: UserId | None) -> FeedContext:
        """Resolve membership and capabilities of a caller in a guild.

        Anonymous callers get an empty capability set without a directory
        lookup.

        Args:
            guild_id: Guild being accessed
            user_id: Authenticated user (None for anonymous)

        Returns:
            The caller context
        """
        if user_id is None:
            return FeedContext(guild_id=guild_id)

        with logfire.span("membership_service.resolve_context", guild_id=guild_id, user_id=user_id):
            membership = await self.guild_directory.get_membership(guild_id, user_id)
            privileges = resolve_privileges(
                membership.user_type, membership.expert_role, membership.is_member
            )
            author = Author(
                id=user_id,
                display_name=DisplayName((membership.display_name or "").strip() or user_id),
                user_type=membership.user_type,
                expert_role=membership.expert_role,
                reputation=max(membership.reputation, 0),
            )
            logfire.info(
                "Feed context resolved",
                guild_id=guild_id,
                user_id=user_id,
                is_member=membership.is_member,
                is_moderator=privileges.is_moderator,
            )
            return FeedContext(
                guild_id=guild_id,
                user_id=user_id,
                is_member=membership.is_member,
                privileges=privileges,
                author=author,
            )
