"""Poll use cases."""

from .cast_poll_vote import CastPollVoteRequest, CastPollVoteUseCase

__all__ = ["CastPollVoteRequest", "CastPollVoteUseCase"]
