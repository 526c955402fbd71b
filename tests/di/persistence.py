"""Mock persistence providers for testing."""

from dishka import Scope, provide

from guildfeed.config import RankingSettings
from guildfeed.domain.repository import (
    BookmarkRepository,
    PollRepository,
    PostRepository,
    ReplyRepository,
    VoteRepository,
)
from guildfeed.persistence.repository.inmemory import (
    InMemoryBookmarkRepository,
    InMemoryPollRepository,
    InMemoryPostRepository,
    InMemoryReplyRepository,
    InMemoryVoteRepository,
)
from guildfeed.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so that state survives across the requests
    of one container (end-to-end tests); each test builds its own container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_post_repository(self, ranking: RankingSettings) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository(ranking)

    @provide(scope=Scope.APP)
    def get_reply_repository(self) -> ReplyRepository:
        """Provide in-memory reply repository."""
        return InMemoryReplyRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_poll_repository(self) -> PollRepository:
        """Provide in-memory poll repository."""
        return InMemoryPollRepository()

    @provide(scope=Scope.APP)
    def get_bookmark_repository(self) -> BookmarkRepository:
        """Provide in-memory bookmark repository."""
        return InMemoryBookmarkRepository()
