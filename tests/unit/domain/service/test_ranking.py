"""Unit tests for post ranking."""

from datetime import datetime, timedelta, timezone

from guildfeed.config import RankingSettings
from guildfeed.domain.service.ranking import hot_score, rank_posts
from guildfeed.domain.value import PostSortOrder
from tests.conftest import make_post

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
SETTINGS = RankingSettings()


class TestHotScore:
    """Tests for the time-decayed score."""

    def test_more_votes_rank_higher_at_same_age(self):
        created = NOW - timedelta(hours=5)

        assert hot_score(10, created, NOW, SETTINGS) > hot_score(9, created, NOW, SETTINGS)

    def test_older_posts_rank_lower_with_same_votes(self):
        newer = hot_score(10, NOW - timedelta(hours=1), NOW, SETTINGS)
        older = hot_score(10, NOW - timedelta(hours=30), NOW, SETTINGS)

        assert newer > older

    def test_zero_votes_at_creation(self):
        """A brand new post with no votes scores 1 / offset ** gravity."""
        expected = 1 / SETTINGS.time_offset**SETTINGS.gravity

        assert abs(hot_score(0, NOW, NOW, SETTINGS) - expected) < 1e-9

    def test_future_timestamps_do_not_inflate_score(self):
        """Clock skew is treated as age zero."""
        assert hot_score(3, NOW + timedelta(hours=2), NOW, SETTINGS) == hot_score(
            3, NOW, NOW, SETTINGS
        )


class TestRankPosts:
    """Tests for feed ordering."""

    def test_new_orders_by_creation_time(self):
        old = make_post(created_at=NOW - timedelta(hours=3), upvote_count=50)
        recent = make_post(created_at=NOW - timedelta(hours=1))

        ranked = rank_posts([old, recent], PostSortOrder.NEW, NOW, SETTINGS)

        assert [p.id for p in ranked] == [recent.id, old.id]

    def test_top_orders_by_votes_then_recency(self):
        a = make_post(created_at=NOW - timedelta(hours=3), upvote_count=5)
        b = make_post(created_at=NOW - timedelta(hours=1), upvote_count=5)
        c = make_post(created_at=NOW - timedelta(hours=2), upvote_count=9)

        ranked = rank_posts([a, b, c], PostSortOrder.TOP, NOW, SETTINGS)

        assert [p.id for p in ranked] == [c.id, b.id, a.id]

    def test_hot_prefers_fresh_votes_over_stale_ones(self):
        stale = make_post(created_at=NOW - timedelta(days=4), upvote_count=20)
        fresh = make_post(created_at=NOW - timedelta(hours=2), upvote_count=3)

        ranked = rank_posts([stale, fresh], PostSortOrder.HOT, NOW, SETTINGS)

        assert ranked[0].id == fresh.id

    def test_pinned_posts_come_first_in_every_mode(self):
        """Pinned posts lead the page, most recently pinned first."""
        popular = make_post(created_at=NOW - timedelta(hours=1), upvote_count=100)
        pinned_early = make_post(
            created_at=NOW - timedelta(days=20),
            is_pinned=True,
            pinned_at=NOW - timedelta(days=2),
        )
        pinned_late = make_post(
            created_at=NOW - timedelta(days=30),
            is_pinned=True,
            pinned_at=NOW - timedelta(hours=1),
        )

        for sort in PostSortOrder:
            ranked = rank_posts([popular, pinned_early, pinned_late], sort, NOW, SETTINGS)

            assert [p.id for p in ranked] == [pinned_late.id, pinned_early.id, popular.id]

    def test_does_not_mutate_input(self):
        posts = [make_post(created_at=NOW - timedelta(hours=h)) for h in (3, 1, 2)]
        original = [p.id for p in posts]

        rank_posts(posts, PostSortOrder.NEW, NOW, SETTINGS)

        assert [p.id for p in posts] == original
