"""Repository interfaces for the guild feed domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from guildfeed.domain.repository.bookmark import BookmarkRepository
from guildfeed.domain.repository.poll import PollRepository
from guildfeed.domain.repository.post import PostRepository
from guildfeed.domain.repository.reply import ReplyRepository
from guildfeed.domain.repository.vote import VoteRepository

__all__ = [
    "BookmarkRepository",
    "PollRepository",
    "PostRepository",
    "ReplyRepository",
    "VoteRepository",
]
