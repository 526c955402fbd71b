"""End-to-end tests for the guild feed API."""

import pytest
from fastapi.testclient import TestClient

from guildfeed.adapter.guild import GuildDirectoryClient
from guildfeed.domain.value import ExpertRole, UserType
from guildfeed.interface.api.app import create_app
from tests.di import build_test_container
from tests.harness import FeedHarness

POSTS = "/guilds/guild-1/posts"


@pytest.fixture
def feed():
    """App wired to a fresh test container, with direct directory access."""
    test_container = build_test_container()
    app_instance = create_app(container=test_container)
    with TestClient(app_instance) as client:
        directory = client.portal.call(test_container.get, GuildDirectoryClient)
        yield FeedHarness(client=client, directory=directory)
        client.portal.call(test_container.close)


def _create_post(feed, headers, **overrides):
    payload = {
        "title": "Best way to deburr aluminium?",
        "body": "Hand tools leave a ragged edge on 6061.",
        "tag": "question",
    }
    payload.update(overrides)
    return feed.client.post(POSTS, json=payload, headers=headers)


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, feed):
        response = feed.client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "git_sha" in data


class TestAcceptedAnswerFlow:
    """A question is answered, one answer accepted, and it stays accepted."""

    def test_second_accept_rejected_and_first_kept(self, feed):
        # Arrange
        asker = feed.login("asker")
        helper = feed.login("helper", role=ExpertRole.RECRUIT)

        created = _create_post(feed, asker)
        assert created.status_code == 201
        post_id = created.json()["id"]
        replies_url = f"{POSTS}/{post_id}/replies"

        r1 = feed.client.post(replies_url, json={"body": "Use a countersink."}, headers=helper)
        r2 = feed.client.post(replies_url, json={"body": "Try a scraper."}, headers=helper)
        assert r1.status_code == 201
        assert r2.status_code == 201

        # Act
        accepted = feed.client.post(
            f"{POSTS}/{post_id}/accept", json={"reply_id": r1.json()["id"]}, headers=asker
        )
        rejected = feed.client.post(
            f"{POSTS}/{post_id}/accept", json={"reply_id": r2.json()["id"]}, headers=asker
        )

        # Assert
        assert accepted.status_code == 200
        assert accepted.json()["accepted_reply_id"] == r1.json()["id"]
        assert rejected.status_code == 422
        assert rejected.json()["detail"]["error"] == "ValidationError"

        post = feed.client.get(f"{POSTS}/{post_id}").json()
        assert post["accepted_reply_id"] == r1.json()["id"]
        assert post["reply_count"] == 2

        listing = feed.client.get(replies_url).json()
        flags = {item["id"]: item["is_accepted"] for item in listing["data"]}
        assert flags == {r1.json()["id"]: True, r2.json()["id"]: False}


class TestAccessControl:
    """Tests for authentication and capability checks."""

    def test_anonymous_can_read_but_not_write(self, feed):
        author = feed.login("author")
        post_id = _create_post(feed, author).json()["id"]

        listing = feed.client.get(POSTS)
        vote = feed.client.post(
            "/guilds/guild-1/votes", json={"target_type": "post", "target_id": post_id}
        )

        assert listing.status_code == 200
        assert listing.json()["total"] == 1
        assert vote.status_code == 401
        assert vote.json()["detail"]["error"] == "UnauthorizedError"

    def test_invalid_token_is_anonymous(self, feed):
        response = _create_post(feed, {"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_non_member_forbidden(self, feed):
        outsider = feed.login("outsider", role=ExpertRole.MASTER, is_member=False)

        response = _create_post(feed, outsider)

        assert response.status_code == 403
        assert response.json()["detail"]["error"] == "ForbiddenError"

    def test_candidate_cannot_post(self, feed):
        candidate = feed.login("cand", role=None, user_type=UserType.CANDIDATE)

        assert _create_post(feed, candidate).status_code == 403

    def test_invalid_title_is_unprocessable(self, feed):
        author = feed.login("author")

        response = _create_post(feed, author, title="Hey")

        assert response.status_code == 422


class TestModerationFlow:
    """Tests for closing, voting and bookmarking around moderation."""

    def test_closed_post_rejects_replies_but_accepts_votes_and_bookmarks(self, feed):
        # Arrange
        author = feed.login("author")
        officer = feed.login("officer", role=ExpertRole.OFFICER)
        post_id = _create_post(feed, author, tag="discussion").json()["id"]

        closed = feed.client.post(
            f"{POSTS}/{post_id}/moderate", json={"action": "close"}, headers=officer
        )
        assert closed.status_code == 200
        assert closed.json()["post"]["is_closed"] is True

        # Act
        reply = feed.client.post(
            f"{POSTS}/{post_id}/replies", json={"body": "Too late"}, headers=author
        )
        vote = feed.client.post(
            "/guilds/guild-1/votes",
            json={"target_type": "post", "target_id": post_id},
            headers=author,
        )
        bookmark = feed.client.post(f"{POSTS}/{post_id}/bookmark", headers=author)

        # Assert
        assert reply.status_code == 409
        assert reply.json()["detail"]["error"] == "PostClosedError"
        assert vote.status_code == 200
        assert vote.json() == {"voted": True, "new_count": 1}
        assert bookmark.json() == {"bookmarked": True}

        saved = feed.client.get("/guilds/guild-1/bookmarks", headers=author).json()
        assert [item["id"] for item in saved["data"]] == [post_id]

    def test_apprentice_cannot_pin(self, feed):
        author = feed.login("author")
        post_id = _create_post(feed, author).json()["id"]

        response = feed.client.post(
            f"{POSTS}/{post_id}/moderate", json={"action": "pin"}, headers=author
        )

        assert response.status_code == 403

    def test_delete_removes_post(self, feed):
        author = feed.login("author")
        master = feed.login("master", role=ExpertRole.MASTER)
        post_id = _create_post(feed, author).json()["id"]

        response = feed.client.post(
            f"{POSTS}/{post_id}/moderate", json={"action": "delete"}, headers=master
        )

        assert response.status_code == 200
        assert response.json()["deleted"] is True
        assert feed.client.get(f"{POSTS}/{post_id}").status_code == 404


class TestEditFlow:
    """Tests for editing posts through the API."""

    def test_edit_permissions_and_versions(self, feed):
        # Arrange
        author = feed.login("author")
        bystander = feed.login("bystander")
        craftsman = feed.login("craftsman", role=ExpertRole.CRAFTSMAN)
        created = _create_post(feed, author).json()
        url = f"{POSTS}/{created['id']}"

        # Act
        anonymous = feed.client.put(url, json={"title": "Anonymous edit"})
        foreign = feed.client.put(url, json={"title": "Not my post"}, headers=bystander)
        own = feed.client.put(
            url,
            json={"title": "Deburring 6061 by hand?", "version": created["version"]},
            headers=author,
        )
        stale = feed.client.put(
            url,
            json={"body": "Edited from an old tab.", "version": created["version"]},
            headers=craftsman,
        )
        tidied = feed.client.put(
            url,
            json={"body": "Hand tools leave a burr.", "version": own.json()["version"]},
            headers=craftsman,
        )

        # Assert
        assert anonymous.status_code == 401
        assert foreign.status_code == 403
        assert own.status_code == 200
        assert own.json()["version"] == created["version"] + 1
        assert stale.status_code == 409
        assert stale.json()["detail"]["error"] == "ConflictError"
        assert tidied.status_code == 200

        post = feed.client.get(url).json()
        assert post["title"] == "Deburring 6061 by hand?"
        assert post["body"] == "Hand tools leave a burr."
        assert post["author"]["id"] == "author"

    def test_answered_question_keeps_its_tag(self, feed):
        asker = feed.login("asker")
        helper = feed.login("helper", role=ExpertRole.RECRUIT)
        post_id = _create_post(feed, asker).json()["id"]
        reply = feed.client.post(
            f"{POSTS}/{post_id}/replies", json={"body": "Use a countersink."}, headers=helper
        )
        feed.client.post(
            f"{POSTS}/{post_id}/accept", json={"reply_id": reply.json()["id"]}, headers=asker
        )

        retag = feed.client.put(
            f"{POSTS}/{post_id}", json={"tag": "discussion"}, headers=asker
        )
        short = feed.client.put(f"{POSTS}/{post_id}", json={"title": "Hm"}, headers=asker)

        assert retag.status_code == 422
        assert short.status_code == 422
        post = feed.client.get(f"{POSTS}/{post_id}").json()
        assert post["tag"] == "question"
        assert post["accepted_reply_id"] == reply.json()["id"]


class TestPollFlow:
    """Tests for polls through the API."""

    def test_poll_vote_is_final(self, feed):
        # Arrange
        author = feed.login("author")
        voter = feed.login("voter", role=ExpertRole.RECRUIT)
        created = _create_post(
            feed,
            author,
            tag="discussion",
            poll={"options": ["Lathe", "Mill"], "choice_mode": "single"},
        ).json()
        options = [option["id"] for option in created["poll"]["options"]]
        vote_url = f"{POSTS}/{created['id']}/poll/vote"

        # Act
        first = feed.client.post(vote_url, json={"option_ids": [options[0]]}, headers=voter)
        second = feed.client.post(vote_url, json={"option_ids": [options[1]]}, headers=voter)

        # Assert
        assert first.status_code == 200
        assert first.json()["results_visible"] is True
        assert [o["vote_count"] for o in first.json()["options"]] == [1, 0]
        assert second.status_code == 409
        assert second.json()["detail"]["error"] == "AlreadyVotedError"

        seen_by_author = feed.client.get(f"{POSTS}/{created['id']}", headers=author).json()
        assert seen_by_author["poll"]["results_visible"] is False
        assert seen_by_author["poll"]["total_votes"] == 1


class TestReplyDepth:
    """Tests for the reply nesting limit."""

    def test_fifth_level_rejected(self, feed):
        author = feed.login("author")
        post_id = _create_post(feed, author).json()["id"]
        url = f"{POSTS}/{post_id}/replies"

        parent = None
        for level in range(4):
            response = feed.client.post(
                url, json={"body": f"Level {level}", "parent_reply_id": parent}, headers=author
            )
            assert response.status_code == 201
            parent = response.json()["id"]

        too_deep = feed.client.post(
            url, json={"body": "Level 4", "parent_reply_id": parent}, headers=author
        )
        children = feed.client.get(url, params={"parent_reply_id": parent})

        assert too_deep.status_code == 422
        assert too_deep.json()["detail"]["error"] == "DepthExceededError"
        assert children.json()["total"] == 0

    def test_unknown_reply_sort_rejected(self, feed):
        author = feed.login("author")
        post_id = _create_post(feed, author).json()["id"]
        url = f"{POSTS}/{post_id}/replies"

        chronological = feed.client.get(url, params={"sort": "new"})
        by_votes = feed.client.get(url, params={"sort": "top"})

        assert chronological.status_code == 200
        assert by_votes.status_code == 422
