"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostUseCase, PollDraft
from .get_post import GetPostRequest, GetPostUseCase
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .update_post import UpdatePostRequest, UpdatePostUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostUseCase",
    "GetPostRequest",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PollDraft",
    "UpdatePostRequest",
    "UpdatePostUseCase",
]
