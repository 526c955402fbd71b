"""Guild directory infrastructure providers."""

from dishka import Scope, provide

from guildfeed.adapter.guild import GuildDirectoryClient, RealGuildDirectoryClient
from guildfeed.config import Settings
from guildfeed.util.di.base import ProviderBase


class GuildDirectoryProvider(ProviderBase):
    """Guild directory component base."""

    __mock_component__ = "guild_directory"


class ProdGuildDirectoryProvider(GuildDirectoryProvider):
    """Production guild directory provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_guild_directory_client(self, settings: Settings) -> GuildDirectoryClient:
        """Provide the HTTP guild directory client."""
        return RealGuildDirectoryClient(
            base_url=settings.guild_directory.base_url,
            timeout_seconds=settings.guild_directory.timeout_seconds,
        )
