"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from guildfeed.config import Settings
from guildfeed.domain.repository import (
    BookmarkRepository,
    PollRepository,
    PostRepository,
    ReplyRepository,
    VoteRepository,
)
from guildfeed.persistence.database import create_engine, create_session_factory
from guildfeed.persistence.repository import (
    PostgresBookmarkRepository,
    PostgresPollRepository,
    PostgresPostRepository,
    PostgresReplyRepository,
    PostgresVoteRepository,
)
from guildfeed.util.di.base import ProviderBase
from guildfeed.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession, settings: Settings) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session, settings)

    @provide(scope=Scope.REQUEST)
    def get_reply_repository(self, session: AsyncSession) -> ReplyRepository:
        """Provide Reply repository."""
        return PostgresReplyRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_poll_repository(self, session: AsyncSession) -> PollRepository:
        """Provide Poll repository."""
        return PostgresPollRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_bookmark_repository(self, session: AsyncSession) -> BookmarkRepository:
        """Provide Bookmark repository."""
        return PostgresBookmarkRepository(session)
