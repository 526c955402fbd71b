"""Domain layer DI providers."""

from dishka import Scope, provide

from guildfeed.adapter.guild import GuildDirectoryClient
from guildfeed.config import AuthSettings, FeedSettings
from guildfeed.domain.repository import (
    BookmarkRepository,
    PollRepository,
    PostRepository,
    ReplyRepository,
    VoteRepository,
)
from guildfeed.domain.service import (
    BookmarkService,
    JWTService,
    MembershipService,
    ModerationService,
    PollService,
    PostService,
    ReplyService,
    VoteService,
)
from guildfeed.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_membership_service(self, guild_directory: GuildDirectoryClient) -> MembershipService:
        """Provide membership domain service."""
        return MembershipService(guild_directory=guild_directory)

    @provide
    def get_post_service(
        self, post_repository: PostRepository, feed_settings: FeedSettings
    ) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository, feed_settings=feed_settings)

    @provide
    def get_reply_service(
        self,
        reply_repository: ReplyRepository,
        post_service: PostService,
        feed_settings: FeedSettings,
    ) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(
            reply_repository=reply_repository,
            post_service=post_service,
            feed_settings=feed_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        reply_service: ReplyService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_service=post_service,
            reply_service=reply_service,
        )

    @provide
    def get_poll_service(
        self, poll_repository: PollRepository, feed_settings: FeedSettings
    ) -> PollService:
        """Provide poll domain service."""
        return PollService(poll_repository=poll_repository, feed_settings=feed_settings)

    @provide
    def get_bookmark_service(self, bookmark_repository: BookmarkRepository) -> BookmarkService:
        """Provide bookmark domain service."""
        return BookmarkService(bookmark_repository=bookmark_repository)

    @provide
    def get_moderation_service(
        self,
        post_repository: PostRepository,
        post_service: PostService,
        reply_service: ReplyService,
        vote_service: VoteService,
        poll_service: PollService,
        bookmark_service: BookmarkService,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            post_repository=post_repository,
            post_service=post_service,
            reply_service=reply_service,
            vote_service=vote_service,
            poll_service=poll_service,
            bookmark_service=bookmark_service,
        )
