"""Reply use cases."""

from .create_reply import CreateReplyRequest, CreateReplyUseCase
from .get_replies import GetRepliesRequest, GetRepliesResponse, GetRepliesUseCase

__all__ = [
    "CreateReplyRequest",
    "CreateReplyUseCase",
    "GetRepliesRequest",
    "GetRepliesResponse",
    "GetRepliesUseCase",
]
