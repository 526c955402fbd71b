"""Post ranking rules.

The PostgreSQL repository expresses the same ordering in SQL; these
functions are the reference used by the in-memory repository and tests.
"""

import math
from datetime import datetime
from typing import Iterable

from guildfeed.config import RankingSettings
from guildfeed.domain.model.post import Post
from guildfeed.domain.value import PostSortOrder


def age_hours(created_at: datetime, now: datetime) -> float:
    """Age of an item in hours, never negative."""
    return max((now - created_at).total_seconds() / 3600, 0.0)


def hot_score(
    upvote_count: int,
    created_at: datetime,
    now: datetime,
    settings: RankingSettings,
) -> float:
    """Time-decayed vote score.

    ``(1 + log10(1 + votes)) / (age_hours + time_offset) ** gravity``

    Strictly increasing in votes for a fixed age and strictly decreasing in
    age for fixed votes. With the default gravity of 1.8, a post needs
    roughly a hundred times the votes to hold its place a few days later.

    Args:
        upvote_count: Current upvotes (>= 0)
        created_at: Creation time of the post
        now: Reference time
        settings: Gravity and time offset

    Returns:
        The hot score (higher ranks first)
    """
    weight = 1 + math.log10(1 + max(upvote_count, 0))
    return weight / (age_hours(created_at, now) + settings.time_offset) ** settings.gravity


def rank_posts(
    posts: Iterable[Post],
    sort: PostSortOrder,
    now: datetime,
    settings: RankingSettings,
) -> list[Post]:
    """Order posts for a feed page.

    Pinned posts come first, most recently pinned first. The rest follow the
    sort mode with ``created_at`` descending as the tie-break.

    Args:
        posts: Posts to order (already filtered)
        sort: Ranking mode
        now: Reference time for hot-score decay
        settings: Ranking settings

    Returns:
        New list in ranked order
    """
    posts = list(posts)
    pinned = sorted(
        (p for p in posts if p.is_pinned),
        key=lambda p: (p.pinned_at, p.created_at),
        reverse=True,
    )
    rest = [p for p in posts if not p.is_pinned]

    if sort == PostSortOrder.NEW:
        rest.sort(key=lambda p: p.created_at, reverse=True)
    elif sort == PostSortOrder.TOP:
        rest.sort(key=lambda p: (p.upvote_count, p.created_at), reverse=True)
    else:
        rest.sort(
            key=lambda p: (
                hot_score(p.upvote_count, p.created_at, now, settings),
                p.created_at,
            ),
            reverse=True,
        )

    return pinned + rest
