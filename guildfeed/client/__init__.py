"""Client SDK for the guild feed API."""

from .api import FeedApiClient, FeedApiError
from .state import LatestRequestGuard, OptimisticVote, RequestTicket, VoteToken

__all__ = [
    "FeedApiClient",
    "FeedApiError",
    "LatestRequestGuard",
    "OptimisticVote",
    "RequestTicket",
    "VoteToken",
]
