"""Application layer DI providers."""

from dishka import Scope, provide

from guildfeed.application.usecase.bookmark import ListBookmarksUseCase, ToggleBookmarkUseCase
from guildfeed.application.usecase.context import ResolveContextUseCase
from guildfeed.application.usecase.moderation import (
    AcceptAnswerUseCase,
    ModeratePostUseCase,
    RemoveAcceptedAnswerUseCase,
)
from guildfeed.application.usecase.poll import CastPollVoteUseCase
from guildfeed.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from guildfeed.application.usecase.reply import CreateReplyUseCase, GetRepliesUseCase
from guildfeed.application.usecase.view import FeedViewBuilder
from guildfeed.application.usecase.vote import CastVoteUseCase
from guildfeed.config import FeedSettings
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


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_view_builder(
        self,
        vote_service: VoteService,
        poll_service: PollService,
        bookmark_service: BookmarkService,
        feed_settings: FeedSettings,
    ) -> FeedViewBuilder:
        """Provide the viewer-specific item builder."""
        return FeedViewBuilder(
            vote_service=vote_service,
            poll_service=poll_service,
            bookmark_service=bookmark_service,
            feed_settings=feed_settings,
        )

    # Context
    @provide
    def get_resolve_context_use_case(
        self, jwt_service: JWTService, membership_service: MembershipService
    ) -> ResolveContextUseCase:
        """Provide resolve context use case."""
        return ResolveContextUseCase(
            jwt_service=jwt_service, membership_service=membership_service
        )

    # Post use cases
    @provide
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        bookmark_service: BookmarkService,
        view_builder: FeedViewBuilder,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            bookmark_service=bookmark_service,
            view_builder=view_builder,
        )

    @provide
    def get_post_use_case(
        self, post_service: PostService, view_builder: FeedViewBuilder
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, view_builder=view_builder)

    @provide
    def get_create_post_use_case(
        self,
        post_service: PostService,
        poll_service: PollService,
        view_builder: FeedViewBuilder,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service, poll_service=poll_service, view_builder=view_builder
        )

    @provide
    def get_update_post_use_case(
        self, post_service: PostService, view_builder: FeedViewBuilder
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(post_service=post_service, view_builder=view_builder)

    # Reply use cases
    @provide
    def get_replies_use_case(
        self,
        post_service: PostService,
        reply_service: ReplyService,
        view_builder: FeedViewBuilder,
    ) -> GetRepliesUseCase:
        """Provide get replies use case."""
        return GetRepliesUseCase(
            post_service=post_service, reply_service=reply_service, view_builder=view_builder
        )

    @provide
    def get_create_reply_use_case(
        self,
        post_service: PostService,
        reply_service: ReplyService,
        view_builder: FeedViewBuilder,
    ) -> CreateReplyUseCase:
        """Provide create reply use case."""
        return CreateReplyUseCase(
            post_service=post_service, reply_service=reply_service, view_builder=view_builder
        )

    # Vote and poll use cases
    @provide
    def get_cast_vote_use_case(
        self,
        vote_service: VoteService,
        post_service: PostService,
        reply_service: ReplyService,
        view_builder: FeedViewBuilder,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service,
            post_service=post_service,
            reply_service=reply_service,
            view_builder=view_builder,
        )

    @provide
    def get_cast_poll_vote_use_case(
        self, post_service: PostService, poll_service: PollService
    ) -> CastPollVoteUseCase:
        """Provide cast poll vote use case."""
        return CastPollVoteUseCase(post_service=post_service, poll_service=poll_service)

    # Moderation use cases
    @provide
    def get_moderate_post_use_case(
        self,
        post_service: PostService,
        moderation_service: ModerationService,
        view_builder: FeedViewBuilder,
    ) -> ModeratePostUseCase:
        """Provide moderate post use case."""
        return ModeratePostUseCase(
            post_service=post_service,
            moderation_service=moderation_service,
            view_builder=view_builder,
        )

    @provide
    def get_accept_answer_use_case(
        self,
        post_service: PostService,
        moderation_service: ModerationService,
        view_builder: FeedViewBuilder,
    ) -> AcceptAnswerUseCase:
        """Provide accept answer use case."""
        return AcceptAnswerUseCase(
            post_service=post_service,
            moderation_service=moderation_service,
            view_builder=view_builder,
        )

    @provide
    def get_remove_accepted_answer_use_case(
        self,
        post_service: PostService,
        moderation_service: ModerationService,
        view_builder: FeedViewBuilder,
    ) -> RemoveAcceptedAnswerUseCase:
        """Provide remove accepted answer use case."""
        return RemoveAcceptedAnswerUseCase(
            post_service=post_service,
            moderation_service=moderation_service,
            view_builder=view_builder,
        )

    # Bookmark use cases
    @provide
    def get_toggle_bookmark_use_case(
        self, post_service: PostService, bookmark_service: BookmarkService
    ) -> ToggleBookmarkUseCase:
        """Provide toggle bookmark use case."""
        return ToggleBookmarkUseCase(post_service=post_service, bookmark_service=bookmark_service)

    @provide
    def get_list_bookmarks_use_case(
        self,
        post_service: PostService,
        bookmark_service: BookmarkService,
        view_builder: FeedViewBuilder,
    ) -> ListBookmarksUseCase:
        """Provide list bookmarks use case."""
        return ListBookmarksUseCase(
            post_service=post_service,
            bookmark_service=bookmark_service,
            view_builder=view_builder,
        )
