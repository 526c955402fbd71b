"""In-memory repository implementations for testing."""

from .bookmark import InMemoryBookmarkRepository
from .poll import InMemoryPollRepository
from .post import InMemoryPostRepository
from .reply import InMemoryReplyRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryBookmarkRepository",
    "InMemoryPollRepository",
    "InMemoryPostRepository",
    "InMemoryReplyRepository",
    "InMemoryVoteRepository",
]
