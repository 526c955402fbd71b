"""Unit tests for the moderation use cases."""

import pytest

from guildfeed.application.usecase.moderation import (
    AcceptAnswerRequest,
    AcceptAnswerUseCase,
    ModeratePostRequest,
    ModeratePostUseCase,
    RemoveAcceptedAnswerRequest,
    RemoveAcceptedAnswerUseCase,
)
from guildfeed.application.usecase.reply import CreateReplyRequest, CreateReplyUseCase
from guildfeed.domain.error import ForbiddenError, UnauthorizedError, ValidationError
from guildfeed.domain.repository import PostRepository
from guildfeed.domain.value import ExpertRole, ModerationAction, PostTag, ReplyId
from tests.conftest import make_author, make_context, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestModeratePostUseCase:
    """Tests for ModeratePostUseCase."""

    @pytest.mark.asyncio
    async def test_officer_pins_post(self, unit_env):
        use_case = await unit_env.get(ModeratePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        response = await use_case.execute(
            ModeratePostRequest(
                context=make_context(role=ExpertRole.OFFICER),
                post_id=post.id,
                action=ModerationAction.PIN,
            )
        )

        assert response.deleted is False
        assert response.post.is_pinned is True
        assert response.post.pinned_at is not None

    @pytest.mark.asyncio
    async def test_apprentice_cannot_close(self, unit_env):
        use_case = await unit_env.get(ModeratePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                ModeratePostRequest(
                    context=make_context(), post_id=post.id, action=ModerationAction.CLOSE
                )
            )

        assert (await post_repo.find_by_id(post.id)).is_closed is False

    @pytest.mark.asyncio
    async def test_anonymous_unauthorized(self, unit_env):
        use_case = await unit_env.get(ModeratePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        with pytest.raises(UnauthorizedError):
            await use_case.execute(
                ModeratePostRequest(
                    context=make_context(None), post_id=post.id, action=ModerationAction.PIN
                )
            )

    @pytest.mark.asyncio
    async def test_master_deletes_post(self, unit_env):
        use_case = await unit_env.get(ModeratePostUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        response = await use_case.execute(
            ModeratePostRequest(
                context=make_context(role=ExpertRole.MASTER),
                post_id=post.id,
                action=ModerationAction.DELETE,
            )
        )

        assert response.deleted is True
        assert response.post is None
        assert await post_repo.find_by_id(post.id) is None

    @pytest.mark.asyncio
    async def test_reopened_post_accepts_replies_again(self, unit_env):
        """Closing blocks replies; reopening allows them again."""
        # Arrange
        moderate = await unit_env.get(ModeratePostUseCase)
        create_reply = await unit_env.get(CreateReplyUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        officer = make_context(role=ExpertRole.OFFICER)

        # Act
        await moderate.execute(
            ModeratePostRequest(context=officer, post_id=post.id, action=ModerationAction.CLOSE)
        )
        reopened = await moderate.execute(
            ModeratePostRequest(context=officer, post_id=post.id, action=ModerationAction.REOPEN)
        )
        reply = await create_reply.execute(
            CreateReplyRequest(context=make_context(), post_id=post.id, body="Back open")
        )

        # Assert
        assert reopened.post.is_closed is False
        assert reply.body == "Back open"


class TestAcceptAnswerUseCases:
    """Tests for accepting and clearing answers."""

    async def _question(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        create_reply = await unit_env.get(CreateReplyUseCase)
        post = await post_repo.save(
            make_post(tag=PostTag.QUESTION, author=make_author("asker"))
        )
        replies = [
            await create_reply.execute(
                CreateReplyRequest(context=make_context("helper"), post_id=post.id, body=body)
            )
            for body in ("First answer", "Second answer")
        ]
        return post, replies

    @pytest.mark.asyncio
    async def test_accept_then_replace_rejected(self, unit_env):
        # Arrange
        accept = await unit_env.get(AcceptAnswerUseCase)
        post, (r1, r2) = await self._question(unit_env)
        asker = make_context("asker")

        # Act
        item = await accept.execute(
            AcceptAnswerRequest(context=asker, post_id=post.id, reply_id=ReplyId(r1.id))
        )

        # Assert
        assert item.accepted_reply_id == r1.id
        with pytest.raises(ValidationError):
            await accept.execute(
                AcceptAnswerRequest(context=asker, post_id=post.id, reply_id=ReplyId(r2.id))
            )

    @pytest.mark.asyncio
    async def test_remove_accepted_answer(self, unit_env):
        accept = await unit_env.get(AcceptAnswerUseCase)
        remove = await unit_env.get(RemoveAcceptedAnswerUseCase)
        post, (r1, _) = await self._question(unit_env)
        asker = make_context("asker")
        await accept.execute(
            AcceptAnswerRequest(context=asker, post_id=post.id, reply_id=ReplyId(r1.id))
        )

        item = await remove.execute(RemoveAcceptedAnswerRequest(context=asker, post_id=post.id))

        assert item.accepted_reply_id is None

    @pytest.mark.asyncio
    async def test_helper_cannot_accept_own_answer(self, unit_env):
        accept = await unit_env.get(AcceptAnswerUseCase)
        post, (r1, _) = await self._question(unit_env)

        with pytest.raises(ForbiddenError):
            await accept.execute(
                AcceptAnswerRequest(
                    context=make_context("helper"), post_id=post.id, reply_id=ReplyId(r1.id)
                )
            )
