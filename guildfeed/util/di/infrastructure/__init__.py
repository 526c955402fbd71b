"""Infrastructure providers."""

# Import bases
from .guild_directory import GuildDirectoryProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .guild_directory import ProdGuildDirectoryProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "GuildDirectoryProvider",
    "PersistenceProvider",
    "ProdGuildDirectoryProvider",
    "ProdPersistenceProvider",
]
