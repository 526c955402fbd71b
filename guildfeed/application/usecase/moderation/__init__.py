"""Moderation use cases."""

from .accept_answer import (
    AcceptAnswerRequest,
    AcceptAnswerUseCase,
    RemoveAcceptedAnswerRequest,
    RemoveAcceptedAnswerUseCase,
)
from .moderate_post import ModeratePostRequest, ModeratePostResponse, ModeratePostUseCase

__all__ = [
    "AcceptAnswerRequest",
    "AcceptAnswerUseCase",
    "ModeratePostRequest",
    "ModeratePostResponse",
    "ModeratePostUseCase",
    "RemoveAcceptedAnswerRequest",
    "RemoveAcceptedAnswerUseCase",
]
