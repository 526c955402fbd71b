"""Mock providers for testing."""

from .guild_directory import MockGuildDirectoryProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockGuildDirectoryProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
