"""Mock guild directory providers for testing."""

from dishka import Scope, provide

from guildfeed.adapter.guild import GuildDirectoryClient, MockGuildDirectoryClient
from guildfeed.util.di.infrastructure.guild_directory import GuildDirectoryProvider


class MockGuildDirectoryProvider(GuildDirectoryProvider):
    """Mock guild directory provider; memberships are registered by tests."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_guild_directory_client(self) -> GuildDirectoryClient:
        """Provide in-memory guild directory."""
        return MockGuildDirectoryClient()
