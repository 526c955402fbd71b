"""PostgreSQL repository implementations."""

from guildfeed.persistence.repository.bookmark import PostgresBookmarkRepository
from guildfeed.persistence.repository.poll import PostgresPollRepository
from guildfeed.persistence.repository.post import PostgresPostRepository
from guildfeed.persistence.repository.reply import PostgresReplyRepository
from guildfeed.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresBookmarkRepository",
    "PostgresPollRepository",
    "PostgresPostRepository",
    "PostgresReplyRepository",
    "PostgresVoteRepository",
]
