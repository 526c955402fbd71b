"""Domain services."""

from .base import Service
from .bookmark_service import BookmarkService
from .jwt_service import JWTService
from .membership_service import GuildDirectory, MembershipService
from .moderation_service import ModerationService
from .poll_service import PollService
from .post_service import PostService
from .privileges import resolve_privileges
from .reply_service import ReplyService
from .vote_service import VoteService

__all__ = [
    "BookmarkService",
    "GuildDirectory",
    "JWTService",
    "MembershipService",
    "ModerationService",
    "PollService",
    "PostService",
    "ReplyService",
    "Service",
    "VoteService",
    "resolve_privileges",
]
