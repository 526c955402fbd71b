"""Guild directory adapter."""

from .client import (
    GuildDirectoryClient,
    MockGuildDirectoryClient,
    RealGuildDirectoryClient,
)

__all__ = ["GuildDirectoryClient", "MockGuildDirectoryClient", "RealGuildDirectoryClient"]
