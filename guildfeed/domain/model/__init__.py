"""Domain model entities for the guild feed."""

from guildfeed.domain.model.author import Author
from guildfeed.domain.model.bookmark import Bookmark
from guildfeed.domain.model.context import FeedContext
from guildfeed.domain.model.poll import Poll, PollOption, PollOptionView, PollView
from guildfeed.domain.model.post import Post
from guildfeed.domain.model.reply import Reply
from guildfeed.domain.model.vote import Vote

__all__ = [
    "Author",
    "Bookmark",
    "FeedContext",
    "Poll",
    "PollOption",
    "PollOptionView",
    "PollView",
    "Post",
    "Reply",
    "Vote",
]
