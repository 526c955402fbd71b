"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from guildfeed.config import AuthSettings, FeedSettings, RankingSettings, Settings
from guildfeed.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_feed_settings(self, settings: Settings) -> FeedSettings:
        """Provide feed limits."""
        return settings.feed

    @provide(scope=Scope.APP)
    def provide_ranking_settings(self, settings: Settings) -> RankingSettings:
        """Provide ranking parameters."""
        return settings.ranking
